"""httpx-backed transport.

Implements the Transport protocol with a shared ``httpx.AsyncClient``.
Connection and timeout errors propagate to the dispatcher untouched.
"""

import logging
from typing import Optional

import httpx

from snowtrack.core.protocols.transport import Transport

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """GET requests over a lazily created ``httpx.AsyncClient``.

    The timeout is the only cancellation mechanism: a request that exceeds it
    raises ``httpx.TimeoutException``, which the dispatcher reports.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Seconds before a request is abandoned.
            client: Pre-built client (e.g. with a mock transport); owned by the caller.
        """
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def get(self, url: str) -> httpx.Response:
        """Issue the GET and return the response, whatever its status."""
        response = await self._get_client().get(url)
        logger.debug("HttpxTransport: %s -> %s", response.request.url.path, response.status_code)
        return response

    async def aclose(self) -> None:
        """Close the client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
