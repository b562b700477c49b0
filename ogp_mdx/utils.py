"""Utility helpers for lenient value parsing."""

from __future__ import annotations

import re
from typing import Optional

UINT_PATTERN = re.compile(r"[0-9]+")
UINT64_MAX = 2**64 - 1


def parse_uint(value: str) -> Optional[int]:
    """Parse a base-10 unsigned 64-bit integer; return None when malformed."""
    if not UINT_PATTERN.fullmatch(value):
        return None
    number = int(value)
    if number > UINT64_MAX:
        return None
    return number
