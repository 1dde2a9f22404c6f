"""Classifier splitting raw text into valid and invalid code entries."""

from __future__ import annotations

from collections.abc import Iterable

from core.codes.models import Entry, ValidationResult
from core.codes.normalizer import normalize_line
from core.codes.validator import is_valid_code
from core.utils.errors import InputContractError


def split_lines(text: str) -> list[str]:
    """Split raw text on newlines, keeping one item per original line.

    Only ``"\\n"`` separates lines so that numbering matches what the sender
    sees; a trailing ``"\\r"`` is removed later by normalization.
    """

    if not isinstance(text, str):
        raise InputContractError(
            "Input text must be a string",
            received_type=type(text).__name__,
        )
    return text.split("\n")


def classify_lines(lines: Iterable[str]) -> ValidationResult:
    """Normalize and validate lines in one forward pass.

    Rules:
    - indices are 1-based original line positions
    - lines that normalize to an empty string are dropped
    - every other line becomes exactly one valid or invalid entry
    """

    result = ValidationResult()
    for index, line in enumerate(lines, start=1):
        code = normalize_line(line)
        if not code:
            continue

        entry = Entry(index=index, code=code)
        if is_valid_code(code):
            result.valid_entries.append(entry)
        else:
            result.invalid_entries.append(entry)

    return result


def classify_text(text: str) -> ValidationResult:
    """Classify every line of a raw text block."""

    return classify_lines(split_lines(text))
