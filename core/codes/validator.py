"""Code shape validation."""

from __future__ import annotations

import re

CODE_LENGTH = 18

_CODE_RE = re.compile(rf"[A-Za-z0-9]{{{CODE_LENGTH}}}")


def is_valid_code(code: str) -> bool:
    """Return True when code is exactly 18 ASCII letters or digits.

    Case is significant and never canonicalized.
    """

    return _CODE_RE.fullmatch(code) is not None
