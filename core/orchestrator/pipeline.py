"""Orchestration pipeline for code list checking."""

from __future__ import annotations

import logging

from core.codes.classifier import classify_lines, split_lines
from core.codes.grouper import group_duplicates
from core.codes.models import (
    CheckOutput,
    CheckReply,
    CheckSummary,
    DuplicateGrouping,
    ValidationResult,
)
from core.render.messages import FALLBACK_MESSAGE
from core.render.report_formatter import format_report

logger = logging.getLogger("codecheck.pipeline")


def run_check(text: str) -> CheckOutput:
    """Execute split -> classify -> group -> format pipeline.

    Raises ``InputContractError`` when ``text`` is not a string.
    """

    lines = split_lines(text)
    validation = classify_lines(lines)
    grouping = group_duplicates(validation.valid_entries)
    report = format_report(validation, grouping)

    return CheckOutput(
        validation=validation,
        grouping=grouping,
        summary=_build_summary(len(lines), validation, grouping),
        report=report,
    )


def check_text(text: object) -> CheckReply:
    """Run the pipeline behind the single outer fault boundary.

    Any unexpected failure is logged and turned into the fixed fallback reply
    so one bad request never takes the caller down.
    """

    try:
        output = run_check(text)  # type: ignore[arg-type]
    except Exception:  # noqa: BLE001
        logger.exception("code check failed; returning fallback reply")
        return CheckReply(ok=False, text=FALLBACK_MESSAGE)
    return CheckReply(ok=True, text=output.report, output=output)


def reply_text(text: object) -> str:
    """Return the report for ``text`` or the fallback message on failure."""

    return check_text(text).text


def _build_summary(
    total_lines: int,
    validation: ValidationResult,
    grouping: DuplicateGrouping,
) -> CheckSummary:
    valid_count = len(validation.valid_entries)
    invalid_count = len(validation.invalid_entries)
    return CheckSummary(
        total_lines=total_lines,
        non_empty_lines=valid_count + invalid_count,
        invalid_count=invalid_count,
        valid_count=valid_count,
        duplicate_group_count=len(grouping.groups_in_order),
        unique_count=len(grouping.unique_codes),
    )
