"""Transport protocol for delivering events to a collector.

The dispatcher builds the full collector URL; a transport only performs
the GET and reports what happened. Anything the transport raises is handed
to the completion callback unchanged.

Usage:
    response = await transport.get("http://collector.example.com/i?e=pv&...")
"""

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from snowtrack.domains.dispatch.types import DispatchResult


@runtime_checkable
class Transport(Protocol):
    """Protocol for issuing one outbound request per event."""

    async def get(self, url: str) -> Any:
        """Issue a GET to the fully-formed collector URL.

        Args:
            url: Scheme, host, path and encoded query string.

        Returns:
            Whatever response object the transport produces.

        Raises:
            Exception: Any transport-level failure, propagated untouched.
        """
        ...

    async def aclose(self) -> None:
        """Release connections held by the transport."""
        ...


# Invoked once per outbound request; may be a plain function or a coroutine function.
CompletionCallback = Callable[["DispatchResult"], Union[None, Awaitable[None]]]
