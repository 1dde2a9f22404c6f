"""Duplicate grouping with stable first-appearance ordering."""

from __future__ import annotations

from collections.abc import Sequence

from core.codes.models import DuplicateGrouping, Entry

DUPLICATE_MARKERS: tuple[str, ...] = ("🔴", "🟡", "🔵", "🟣", "🟠", "🟤", "⚫")


def marker_for(position: int) -> str:
    """Return the marker for the zero-based duplicate group position, wrapping around."""

    if position < 0:
        raise ValueError(f"Marker position must be non-negative: {position}")
    return DUPLICATE_MARKERS[position % len(DUPLICATE_MARKERS)]


def group_duplicates(valid_entries: Sequence[Entry]) -> DuplicateGrouping:
    """Count codes, mark duplicates and compute first-appearance orderings."""

    count_map: dict[str, int] = {}
    for entry in valid_entries:
        count_map[entry.code] = count_map.get(entry.code, 0) + 1

    markers: dict[str, str] = {}
    marker_counter = 0
    for code, count in count_map.items():
        if count > 1:
            markers[code] = marker_for(marker_counter)
            marker_counter += 1

    # Orderings are rebuilt from the entries themselves rather than from map iteration.
    groups_in_order: list[str] = []
    unique_codes: list[str] = []
    seen_groups: set[str] = set()
    seen_codes: set[str] = set()
    for entry in valid_entries:
        if entry.code not in seen_codes:
            seen_codes.add(entry.code)
            unique_codes.append(entry.code)
        if entry.code in markers and entry.code not in seen_groups:
            seen_groups.add(entry.code)
            groups_in_order.append(entry.code)

    return DuplicateGrouping(
        count_map=count_map,
        markers=markers,
        groups_in_order=groups_in_order,
        unique_codes=unique_codes,
    )
