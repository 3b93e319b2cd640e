"""Status message and perfdata formatting."""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..utils.metrics import (
    AttributeFailure,
    AttributeOutcome,
    AttributeResult,
    PerfMetric,
)
from .numbers import coerce_number, format_number
from .paths import NOT_FOUND, WILDCARD, PathExpression, expand_wildcard, resolve

FieldSelection = Union[str, Sequence[PathExpression], None]

_LABEL_STRIP_RE = re.compile(r'[^A-Za-z0-9_-]')


def sanitize_label(label: str) -> str:
    """Drop every character outside ``[A-Za-z0-9_-]``."""
    return _LABEL_STRIP_RE.sub("", label)


def render_scalar(value: Any) -> str:
    """Render a document scalar for the status message."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


class OutputFormatter:
    """Builds the status message and perfdata string."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize formatter.

        Args:
            logger: Optional parent logger
        """
        logger = logger or logging.getLogger(__name__)
        self.logger = logger.getChild(self.__class__.__name__)

    def format(
        self,
        outcomes: Sequence[AttributeOutcome],
        perf_fields: FieldSelection,
        output_fields: FieldSelection,
        root: Any
    ) -> Tuple[str, str]:
        """
        Format evaluated attributes and extra fields.

        Perf fields that match a configured attribute report the attribute's
        scaled value and thresholds; other fields report the raw document
        value. Fields that do not resolve are skipped.

        Args:
            outcomes: Attribute outcomes in evaluation order
            perf_fields: Paths for message and perfdata, ``"*"`` or None
            output_fields: Paths for the message only, ``"*"`` or None
            root: Parsed document tree

        Returns:
            Tuple of (message, perfdata)
        """
        results: Dict[PathExpression, AttributeResult] = {
            outcome.spec.path: outcome
            for outcome in outcomes
            if isinstance(outcome, AttributeResult)
        }
        segments = [
            outcome.describe()
            for outcome in outcomes
            if isinstance(outcome, AttributeFailure)
        ]
        metrics: List[PerfMetric] = []

        for path, label, node in self._resolve_fields(perf_fields, root):
            result = results.get(path)
            if result is not None:
                segments.append(f"{label}: {format_number(result.value)}")
                metrics.append(PerfMetric(
                    label=label.lower(),
                    value=result.value,
                    warning=result.spec.warning,
                    critical=result.spec.critical
                ))
                continue

            segments.append(f"{label}: {render_scalar(node)}")
            value = coerce_number(node)
            if value is None:
                self.logger.info(f"Field {path} is not numeric, no perfdata emitted")
                continue
            metrics.append(PerfMetric(label=label.lower(), value=value))

        for path, label, node in self._resolve_fields(output_fields, root):
            segments.append(f"{label}: {render_scalar(node)}")

        return ", ".join(segments), " ".join(metric.render() for metric in metrics)

    def _resolve_fields(self, fields: FieldSelection, root: Any):
        """Yield (path, label, node) for every field that resolves to a scalar."""
        if not fields:
            return
        paths = expand_wildcard(root) if fields == WILDCARD else fields

        for path in paths:
            node = resolve(root, path)
            if node is NOT_FOUND:
                self.logger.debug(f"Field {path} not found, skipped")
                continue
            if isinstance(node, (dict, list)):
                self.logger.info(f"Field {path} is not a scalar, skipped")
                continue
            label = sanitize_label(path.label)
            if not label:
                self.logger.warning(f"Field {path} has no usable label, skipped")
                continue
            yield path, label, node
