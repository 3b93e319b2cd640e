"""Worst-status aggregation."""

from typing import Iterable

from ..utils.metrics import AttributeFailure, AttributeOutcome
from ..utils.status import Status


def aggregate(outcomes: Iterable[AttributeOutcome]) -> Status:
    """
    Fold attribute outcomes into one overall status.

    The worst status wins. An empty input, or any failed attribute, yields
    UNKNOWN.

    Args:
        outcomes: Attribute results and failures

    Returns:
        Status: Overall status
    """
    overall = None
    for outcome in outcomes:
        if isinstance(outcome, AttributeFailure):
            return Status.UNKNOWN
        overall = outcome.status if overall is None else max(overall, outcome.status)
    return Status.UNKNOWN if overall is None else overall
