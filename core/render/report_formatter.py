"""Plain-text report rendering for classified code lists.

The report always has three sections in fixed order: invalid codes,
duplicate check, and the final summary with a fenced block of unique codes.
"""

from __future__ import annotations

from core.codes.models import DuplicateGrouping, Entry, ValidationResult
from core.utils.errors import ReportFormatError

INVALID_HEADER = "❌ Invalid codes:"
NO_INVALID_LINE = "✅ No invalid code"
DUPLICATE_HEADER = "🎨 Duplicate check:"
NO_DUPLICATE_LINE = "✅ No duplicate code"
COPY_HINT_LINE = "📋 Tap the copy icon to copy all codes"
CODE_FENCE_OPEN = "```text"
CODE_FENCE_CLOSE = "```"


def format_report(validation: ValidationResult, grouping: DuplicateGrouping) -> str:
    """Render the full three-section report."""

    return "\n".join(
        [
            format_invalid_section(validation.invalid_entries),
            format_duplicate_section(validation.valid_entries, grouping),
            format_summary_section(grouping.unique_codes),
        ]
    )


def format_invalid_section(invalid_entries: list[Entry]) -> str:
    lines = [INVALID_HEADER]
    if invalid_entries:
        lines.extend(_entry_line(entry) for entry in invalid_entries)
    else:
        lines.append(NO_INVALID_LINE)
    return "".join(f"{line}\n" for line in lines)


def format_duplicate_section(valid_entries: list[Entry], grouping: DuplicateGrouping) -> str:
    """Render duplicate groups in first-appearance order, one blank line after each group."""

    lines = [DUPLICATE_HEADER]
    if not grouping.groups_in_order:
        if grouping.has_duplicates:
            raise ReportFormatError("Duplicate codes are missing from the group order")
        lines.append(NO_DUPLICATE_LINE)
        return "".join(f"{line}\n" for line in lines)

    for code in grouping.groups_in_order:
        if not grouping.is_duplicate(code):
            raise ReportFormatError("Duplicate group has no marker", code=code)
        marker = grouping.markers[code]
        for entry in valid_entries:
            if entry.code == code:
                lines.append(_entry_line(entry, marker=marker))
        lines.append("")

    return "".join(f"{line}\n" for line in lines)


def format_summary_section(unique_codes: list[str]) -> str:
    """Render the unique-code count and a fenced, copy-friendly code list.

    The section ends with the closing fence and no trailing newline.
    """

    lines = [
        f"✅ Total unique valid codes: {len(unique_codes)}",
        COPY_HINT_LINE,
        "",
        CODE_FENCE_OPEN,
        *unique_codes,
    ]
    return "".join(f"{line}\n" for line in lines) + CODE_FENCE_CLOSE


def _entry_line(entry: Entry, *, marker: str | None = None) -> str:
    if marker is None:
        return f"{entry.index}. {entry.code}"
    return f"{entry.index}. {entry.code} {marker}"
