"""Protocols at the seams of the tracker."""

from snowtrack.core.protocols.transport import CompletionCallback, Transport

__all__ = ["CompletionCallback", "Transport"]
