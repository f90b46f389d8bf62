import re
from typing import Any, Optional

from plantstore.errors import InvalidArgument

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> Optional[int]:
    """
    Lenient integer parse: ints as-is, floats truncated, strings by their
    leading integer ("3 pots" -> 3). Returns None when nothing parses.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    if isinstance(value, str):
        m = _LEADING_INT.match(value)
        return int(m.group(1)) if m else None
    return None


def require_quantity(value: Any, name: str = "Quantity", maximum: Optional[int] = None) -> int:
    qty = parse_int(value)
    if qty is None:
        raise InvalidArgument(f"{name} must be an integer")
    if qty <= 0:
        raise InvalidArgument(f"{name} must be greater than 0")
    if maximum is not None and qty > maximum:
        raise InvalidArgument(f"{name} cannot exceed {maximum}")
    return qty


def require_text(value: Any, name: str, max_length: int) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidArgument(f"{name} must be a string")
    if len(value) > max_length:
        raise InvalidArgument(f"{name} cannot exceed {max_length} characters")
    return value
