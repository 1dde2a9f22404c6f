"""Custom exceptions for core logic."""

from __future__ import annotations


class InputContractError(TypeError):
    """Raised when pipeline input falls outside the documented text contract."""

    def __init__(self, message: str, *, received_type: str) -> None:
        super().__init__(message)
        self.received_type = received_type


class ReportFormatError(ValueError):
    """Raised when grouping results are inconsistent with the entries being rendered."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code
