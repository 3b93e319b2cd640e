"""Data structures passed between the check stages."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from ..engine.numbers import Number, format_number
from ..engine.paths import PathExpression
from ..engine.thresholds import ThresholdRange
from .errors import ConfigError
from .status import Status


@dataclass(frozen=True)
class AttributeSpec:
    """One checked attribute: where to find it and how to judge it."""

    path: PathExpression
    warning: Optional[ThresholdRange] = None
    critical: Optional[ThresholdRange] = None
    divisor: Number = 1

    def __post_init__(self):
        if self.divisor == 0:
            raise ConfigError(f"Divisor for {self.path} must not be zero")


@dataclass(frozen=True)
class AttributeResult:
    """Successful evaluation of one attribute."""

    spec: AttributeSpec
    raw_value: Number
    value: Number  # raw_value with the divisor applied
    status: Status


class FailureKind(Enum):
    """Why an attribute could not be evaluated."""

    MISSING_VALUE = "missing_value"
    NOT_NUMERIC = "not_numeric"


@dataclass(frozen=True)
class AttributeFailure:
    """Failed evaluation of one attribute. Forces the check to UNKNOWN."""

    spec: AttributeSpec
    kind: FailureKind
    detail: Any = None

    def describe(self) -> str:
        """
        Human-readable note for the status message.

        Returns:
            str: Description naming the attribute path
        """
        if self.kind is FailureKind.MISSING_VALUE:
            return f"{self.spec.path}: no value received"
        return f"{self.spec.path}: value {self.detail!r} is not numeric"


AttributeOutcome = Union[AttributeResult, AttributeFailure]


@dataclass(frozen=True)
class PerfMetric:
    """A single perfdata token."""

    label: str
    value: Number
    warning: Optional[ThresholdRange] = None
    critical: Optional[ThresholdRange] = None

    def render(self) -> str:
        """
        Render as ``label=value;warn;crit`` with empty trailing slots dropped.

        Returns:
            str: Perfdata token
        """
        slots = [
            format_number(self.value),
            str(self.warning) if self.warning is not None else "",
            str(self.critical) if self.critical is not None else "",
        ]
        while len(slots) > 1 and not slots[-1]:
            slots.pop()
        return f"{self.label}=" + ";".join(slots)


@dataclass(frozen=True)
class CheckOutcome:
    """Final result of a check run."""

    status: Status
    message: str = ""
    perfdata: str = ""

    def status_line(self) -> str:
        """
        Build the single stdout line.

        Returns:
            str: ``STATUS - message | perfdata``
        """
        line = self.status.to_word()
        if self.message:
            line += f" - {self.message}"
        if self.perfdata:
            line += f" | {self.perfdata}"
        return line
