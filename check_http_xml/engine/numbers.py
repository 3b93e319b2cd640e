"""Number coercion and rendering shared by the engine."""

import math
import re
from typing import Any, Optional, Union

Number = Union[int, float]

_INT_RE = re.compile(r'^[+-]?\d+$')
_FLOAT_RE = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')


def coerce_number(value: Any) -> Optional[Number]:
    """
    Convert a scalar document value into a finite number.

    Args:
        value: Scalar from the document tree

    Returns:
        int or float, or None when the value is not numeric
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.match(text):
            return int(text)
        if _FLOAT_RE.match(text):
            number = float(text)
            return number if math.isfinite(number) else None
    return None


def format_number(value: Number) -> str:
    """
    Render a number the way Perl prints it.

    Integral values have no decimal point, others keep up to 15
    significant digits.
    """
    if isinstance(value, float):
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        if value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return format(value, ".15g")
    return str(value)
