"""
Argument coercion for Fakedis commands.

Numeric parsing is deliberately forgiving: the longest numeric prefix is
used and anything unparsable becomes zero, so "12abc" is 12 and "abc" is 0.
"""

import re
from typing import Any, List

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INFINITIES = {"inf": float("inf"), "+inf": float("inf"), "-inf": float("-inf")}


def to_str(value: Any) -> str:
    """Convert a raw argument (str, bytes, int, float) to str."""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _INT_PREFIX.match(to_str(value))
    return int(match.group(1)) if match else 0


def to_float(value: Any) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    text = to_str(value).strip()
    if text.lower() in _INFINITIES:
        return _INFINITIES[text.lower()]
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def flatten(args) -> List[str]:
    """Flatten nested argument lists and convert every item to str."""
    flat = []
    for arg in args:
        if isinstance(arg, (list, tuple)):
            flat.extend(flatten(arg))
        else:
            flat.append(to_str(arg))
    return flat
