"""Async event-tracking client for Snowplow-compatible collectors."""

from snowtrack.core.config import Platform, TrackerSettings
from snowtrack.core.exceptions import InvalidArgumentError, TrackerException
from snowtrack.domains.dispatch.types import DispatchResult
from snowtrack.domains.events.types import TransactionItem
from snowtrack.tracker import Tracker
from snowtrack.version import TRACKER_VERSION, __version__

__all__ = [
    "DispatchResult",
    "InvalidArgumentError",
    "Platform",
    "Tracker",
    "TrackerException",
    "TrackerSettings",
    "TransactionItem",
    "TRACKER_VERSION",
    "__version__",
]
