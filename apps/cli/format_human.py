"""Human-readable check summary rendering for CLI output."""

from __future__ import annotations

from core.codes.models import CheckOutput


def render_check_summary(output: CheckOutput) -> str:
    """Render a short key=value summary block for one checked list."""

    summary = output.summary
    lines: list[str] = []
    lines.append("check_summary:")
    lines.append(f"lines total={summary.total_lines} non_empty={summary.non_empty_lines}")
    lines.append(f"invalid={summary.invalid_count} valid={summary.valid_count}")
    lines.append(
        f"duplicate_groups={summary.duplicate_group_count} unique={summary.unique_count}"
    )

    grouping = output.grouping
    if grouping.groups_in_order:
        ranked = sorted(
            enumerate(grouping.groups_in_order),
            key=lambda item: (-grouping.count_map[item[1]], item[0]),
        )
        top = [code for _, code in ranked[:5]]
        duplicates_text = ", ".join(f"{code}x{grouping.count_map[code]}" for code in top)
        lines.append(f"top_duplicates: {duplicates_text}")
    else:
        lines.append("top_duplicates: none")

    return "\n".join(lines)
