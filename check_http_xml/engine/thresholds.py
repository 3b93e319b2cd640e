"""Nagios threshold ranges.

Range grammar (see the Nagios plugin development guidelines)::

    ""        0 .. +inf, alarm when value < 0
    "10"      0 .. 10
    "10:"     10 .. +inf
    "~:10"    -inf .. 10
    ":10"     0 .. 10, an empty start keeps the default start of 0
    "10:20"   alarm outside 10 .. 20
    "@10:20"  alarm inside 10 .. 20 (bounds inclusive)

Ranges are classified with ``classify``: critical wins over warning, and a
range that was not configured (``None``) never triggers.
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..utils.errors import RangeSyntaxError
from ..utils.status import Status
from .numbers import Number, coerce_number, format_number


@dataclass(frozen=True)
class ThresholdRange:
    """Numeric interval plus inversion flag defining an alarm region."""

    lower: float = 0.0
    upper: float = math.inf
    inverted: bool = False

    def __post_init__(self):
        if self.lower > self.upper:
            raise ValueError(f"Range start {self.lower} is greater than end {self.upper}")

    def alarms(self, value: Number) -> bool:
        """
        Check whether ``value`` falls in the alarm region.

        Args:
            value: Value to test

        Returns:
            bool: True if the value is outside the range (inside when inverted)
        """
        inside = self.lower <= value <= self.upper
        return inside if self.inverted else not inside

    def __str__(self) -> str:
        text = "@" if self.inverted else ""
        if math.isinf(self.lower):
            text += "~:"
        elif self.lower != 0:
            text += format_number(self.lower) + ":"
        if not math.isinf(self.upper):
            text += format_number(self.upper)
        return text


DEFAULT_RANGE = ThresholdRange()


def parse_range(text: str) -> ThresholdRange:
    """
    Parse a threshold range string.

    Args:
        text: Range in Nagios threshold format

    Returns:
        ThresholdRange: Parsed range

    Raises:
        RangeSyntaxError: If the text is not a valid range
    """
    source = text.strip()
    if not source:
        return DEFAULT_RANGE

    inverted = source.startswith("@")
    body = source[1:] if inverted else source
    if "@" in body:
        raise RangeSyntaxError(f"Inversion marker '@' must lead the range: {text!r}")
    if not body.strip():
        raise RangeSyntaxError(f"Range has no bounds: {text!r}")

    lower = 0.0
    upper = math.inf

    if ":" in body:
        start, end = (part.strip() for part in body.split(":", 1))
        if start == "~":
            lower = -math.inf
        elif start:
            lower = _parse_bound(start, text)
        if end:
            upper = _parse_bound(end, text)
    else:
        upper = _parse_bound(body.strip(), text)

    if lower > upper:
        raise RangeSyntaxError(f"Range start is greater than end: {text!r}")

    return ThresholdRange(lower=lower, upper=upper, inverted=inverted)


def _parse_bound(token: str, text: str) -> float:
    bound = coerce_number(token)
    if bound is None:
        raise RangeSyntaxError(f"Invalid range bound {token!r} in {text!r}")
    return float(bound)


def classify(
    value: Number,
    warning: Optional[ThresholdRange] = None,
    critical: Optional[ThresholdRange] = None
) -> Status:
    """
    Classify a value against warning and critical ranges.

    Args:
        value: Value to classify
        warning: Warning range, or None when not configured
        critical: Critical range, or None when not configured

    Returns:
        Status: CRITICAL, WARNING or OK
    """
    if critical is not None and critical.alarms(value):
        return Status.CRITICAL
    if warning is not None and warning.alarms(value):
        return Status.WARNING
    return Status.OK
