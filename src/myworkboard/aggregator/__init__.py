"""Work Aggregator - Groups a user's sub-tasks under rank-ordered initiatives."""

from myworkboard.aggregator.aggregator import UNKNOWN_STATUS, WorkAggregator
from myworkboard.aggregator.exceptions import AggregatorError, MissingCredentialError
from myworkboard.aggregator.models import InitiativeRecord, KanbanModel, SubtaskRecord

__all__ = [
    "AggregatorError",
    "InitiativeRecord",
    "KanbanModel",
    "MissingCredentialError",
    "SubtaskRecord",
    "UNKNOWN_STATUS",
    "WorkAggregator",
]
