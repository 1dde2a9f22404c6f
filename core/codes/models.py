"""Data models for code classification and duplicate grouping."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Entry(BaseModel):
    """One non-empty normalized input line with its original 1-based line number."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    index: int = Field(ge=1)
    code: str


class ValidationResult(BaseModel):
    """Partition of entries into valid and invalid codes.

    Rules:
    - both lists keep original line order
    - every non-empty normalized line appears in exactly one list
    - empty lines produce no entry at all
    """

    model_config = ConfigDict(extra="forbid")

    valid_entries: list[Entry] = Field(default_factory=list)
    invalid_entries: list[Entry] = Field(default_factory=list)


class DuplicateGrouping(BaseModel):
    """Occurrence counts, duplicate markers and first-appearance orderings.

    Rules:
    - sum(count_map.values()) == number of valid entries
    - markers holds exactly the codes whose count is greater than one
    - groups_in_order and unique_codes follow first appearance among valid entries
    """

    model_config = ConfigDict(extra="forbid")

    count_map: dict[str, int] = Field(default_factory=dict)
    markers: dict[str, str] = Field(default_factory=dict)
    groups_in_order: list[str] = Field(default_factory=list)
    unique_codes: list[str] = Field(default_factory=list)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.markers)

    def is_duplicate(self, code: str) -> bool:
        return code in self.markers


class CheckSummary(BaseModel):
    """Aggregate counts for one checked text block."""

    model_config = ConfigDict(extra="forbid")

    total_lines: int
    non_empty_lines: int
    invalid_count: int
    valid_count: int
    duplicate_group_count: int
    unique_count: int


class CheckOutput(BaseModel):
    """In-memory result of one pipeline run."""

    model_config = ConfigDict(extra="forbid")

    validation: ValidationResult
    grouping: DuplicateGrouping
    summary: CheckSummary
    report: str


class CheckReply(BaseModel):
    """Reply produced by the outer fault boundary.

    ``output`` is None exactly when ``ok`` is False, in which case ``text``
    holds the fixed fallback message.
    """

    model_config = ConfigDict(extra="forbid")

    ok: bool
    text: str
    output: CheckOutput | None = None
