"""Dispatch domain types."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one outbound request, handed to the completion callback.

    Exactly one of ``response`` and ``error`` is set. Both are passed through
    from the transport as-is.
    """

    url: str
    params: Dict[str, str] = field(default_factory=dict)
    response: Optional[Any] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        """True when the transport returned without raising."""
        return self.error is None
