"""Per-attribute evaluation: resolve, scale, classify."""

import logging
from typing import Any, Iterable, List, Optional

from ..utils.metrics import (
    AttributeFailure,
    AttributeOutcome,
    AttributeResult,
    AttributeSpec,
    FailureKind,
)
from .numbers import coerce_number
from .paths import NOT_FOUND, resolve
from .thresholds import classify


class AttributeEvaluator:
    """Evaluates configured attributes against a parsed document."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize evaluator.

        Args:
            logger: Optional parent logger
        """
        logger = logger or logging.getLogger(__name__)
        self.logger = logger.getChild(self.__class__.__name__)

    def evaluate(self, root: Any, spec: AttributeSpec) -> AttributeOutcome:
        """
        Evaluate a single attribute.

        Args:
            root: Parsed document tree
            spec: Attribute to evaluate

        Returns:
            AttributeResult on success, AttributeFailure when the value is
            missing or not numeric
        """
        node = resolve(root, spec.path)
        if node is NOT_FOUND:
            self.logger.warning(f"No value received for {spec.path}")
            return AttributeFailure(spec=spec, kind=FailureKind.MISSING_VALUE)

        raw_value = coerce_number(node)
        if raw_value is None:
            self.logger.warning(f"Value for {spec.path} is not numeric: {node!r}")
            return AttributeFailure(spec=spec, kind=FailureKind.NOT_NUMERIC, detail=node)

        try:
            value = raw_value if spec.divisor == 1 else raw_value / spec.divisor
        except OverflowError:
            self.logger.warning(f"Value for {spec.path} is too large to divide: {node!r}")
            return AttributeFailure(spec=spec, kind=FailureKind.NOT_NUMERIC, detail=node)

        status = classify(value, spec.warning, spec.critical)

        self.logger.debug(
            f"{spec.path} = {value} -> {status.name}",
            extra={"raw_value": raw_value, "divisor": spec.divisor}
        )
        return AttributeResult(spec=spec, raw_value=raw_value, value=value, status=status)

    def evaluate_all(self, root: Any, specs: Iterable[AttributeSpec]) -> List[AttributeOutcome]:
        """
        Evaluate every attribute, ordered by path text.

        A failing attribute does not stop the others from being evaluated.

        Args:
            root: Parsed document tree
            specs: Configured attributes

        Returns:
            List of outcomes in path order
        """
        ordered = sorted(specs, key=lambda spec: str(spec.path))
        return [self.evaluate(root, spec) for spec in ordered]
