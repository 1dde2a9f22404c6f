"""Line normalization for user-submitted code lists."""

from __future__ import annotations

import re

# Whitespace as chat clients trim it: includes U+FEFF, excludes the 0x1C-0x1F separators.
_UNICODE_SPACE_POINTS = (
    0x00A0,
    0x1680,
    *range(0x2000, 0x200B),
    0x2028,
    0x2029,
    0x202F,
    0x205F,
    0x3000,
    0xFEFF,
)
WHITESPACE_CHARS = " \t\n\v\f\r" + "".join(chr(point) for point in _UNICODE_SPACE_POINTS)

_WHITESPACE_CLASS = f"[{re.escape(WHITESPACE_CHARS)}]"

# Optional ordinal such as "12.", "3)", "4-" or bare "7", plus the whitespace after it.
# Only ASCII digits count as an ordinal.
_ORDINAL_PREFIX_RE = re.compile(rf"^{_WHITESPACE_CLASS}*[0-9]+[.)\-]?{_WHITESPACE_CLASS}*")


def normalize_line(line: str) -> str:
    """Strip a leading ordinal prefix and surrounding whitespace from one raw line."""

    return _ORDINAL_PREFIX_RE.sub("", line, count=1).strip(WHITESPACE_CHARS)
