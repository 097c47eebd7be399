"""Transport adapters for delivering events to a collector."""

from snowtrack.adapters.transport.fake import FakeTransport
from snowtrack.adapters.transport.http import HttpxTransport

__all__ = ["FakeTransport", "HttpxTransport"]
