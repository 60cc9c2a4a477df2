import math
import re
from datetime import datetime, timezone
from typing import Any, Optional

_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_float(value: Any) -> Optional[float]:
    """Read the leading number of ``value``; ``"12.5kg"`` gives ``12.5``.

    Returns None when nothing numeric leads the value.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = _LEADING_FLOAT.match(value)
        if not match:
            return None
        result = float(match.group(1))
    else:
        return None
    # "1e999" overflows to inf, which JSON cannot carry.
    return result if math.isfinite(result) else None


def parse_int(value: Any) -> Optional[int]:
    """Read the leading integer of ``value``; ``"45.9"`` gives ``45``."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    match = _LEADING_INT.match(value)
    if not match:
        return None
    return int(match.group(1))


def parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return value == "true"
