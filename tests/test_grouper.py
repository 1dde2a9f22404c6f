from __future__ import annotations

import pytest

from core.codes.grouper import DUPLICATE_MARKERS, group_duplicates, marker_for
from core.codes.models import Entry


def _entries(*codes: str) -> list[Entry]:
    return [Entry(index=index, code=code) for index, code in enumerate(codes, start=1)]


def _code(label: str) -> str:
    return f"{label}{'x' * (18 - len(label))}"


def test_palette_has_seven_markers_in_fixed_order() -> None:
    assert DUPLICATE_MARKERS == ("🔴", "🟡", "🔵", "🟣", "🟠", "🟤", "⚫")


def test_marker_for_wraps_around_palette() -> None:
    assert marker_for(0) == "🔴"
    assert marker_for(6) == "⚫"
    assert marker_for(7) == "🔴"
    assert marker_for(8) == "🟡"


def test_marker_for_rejects_negative_positions() -> None:
    with pytest.raises(ValueError):
        marker_for(-1)


def test_group_counts_match_valid_entries() -> None:
    entries = _entries(_code("A"), _code("B"), _code("A"), _code("C"), _code("A"))
    grouping = group_duplicates(entries)

    assert grouping.count_map == {_code("A"): 3, _code("B"): 1, _code("C"): 1}
    assert sum(grouping.count_map.values()) == len(entries)
    assert grouping.unique_codes == [_code("A"), _code("B"), _code("C")]
    assert len(grouping.unique_codes) == len(grouping.count_map)


def test_groups_follow_first_appearance_not_alphabet_or_count() -> None:
    entries = _entries(
        _code("Z"),
        _code("M"),
        _code("A"),
        _code("A"),
        _code("M"),
        _code("A"),
        _code("Z"),
    )
    grouping = group_duplicates(entries)

    assert grouping.groups_in_order == [_code("Z"), _code("M"), _code("A")]
    assert grouping.markers == {_code("Z"): "🔴", _code("M"): "🟡", _code("A"): "🔵"}


def test_single_occurrences_get_no_marker() -> None:
    grouping = group_duplicates(_entries(_code("A"), _code("B"), _code("B")))

    assert grouping.markers == {_code("B"): "🔴"}
    assert grouping.is_duplicate(_code("B"))
    assert not grouping.is_duplicate(_code("A"))
    assert grouping.has_duplicates


def test_case_distinct_codes_are_not_duplicates() -> None:
    grouping = group_duplicates(_entries("abcd1234efgh5678ij", "ABCD1234EFGH5678IJ"))

    assert grouping.markers == {}
    assert grouping.groups_in_order == []
    assert not grouping.has_duplicates


def test_eighth_duplicate_code_reuses_first_marker() -> None:
    labels = [f"D{index}" for index in range(9)]
    codes = [_code(label) for label in labels]
    grouping = group_duplicates(_entries(*codes, *codes))

    assert grouping.groups_in_order == codes
    assert [grouping.markers[code] for code in codes] == [
        "🔴",
        "🟡",
        "🔵",
        "🟣",
        "🟠",
        "🟤",
        "⚫",
        "🔴",
        "🟡",
    ]


def test_empty_entries_produce_empty_grouping() -> None:
    grouping = group_duplicates([])

    assert grouping.count_map == {}
    assert grouping.markers == {}
    assert grouping.groups_in_order == []
    assert grouping.unique_codes == []
