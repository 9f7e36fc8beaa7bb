"""Lenient integer parsing for raw PurpleAir fields.

Sensor payloads mix numbers and numeric strings, and any field can be absent.
Readings are read the same way everywhere: a string contributes its leading
optional sign and digits (``"12.7 ug"`` reads as ``12``), a number is
truncated toward zero, and anything else is unparseable.

Callers differ in what they do with an unparseable value, and the difference
is observable: PM correction rejects it with :class:`InvalidInput`, while the
trend comparison reads it as zero.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_truncated_int(value: Any) -> Optional[int]:
    """Return the integer part of ``value`` or ``None`` if it has none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return math.trunc(value)
    if isinstance(value, (str, bytes)):
        text = value.decode("utf-8", "replace") if isinstance(value, bytes) else value
        match = _LEADING_INT.match(text)
        if match is None:
            return None
        try:
            return int(match.group(1))
        except ValueError:
            return None
    return None


def parse_int_or_zero(value: Any) -> int:
    parsed = parse_truncated_int(value)
    return 0 if parsed is None else parsed
