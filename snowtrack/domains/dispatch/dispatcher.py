"""Dispatcher: one asynchronous GET per parameter set.

``send`` returns immediately after scheduling. Each dispatch reports back
exactly once through the tracker's completion callback, with whatever the
transport returned or raised. Nothing is retried or swallowed.
"""

import asyncio
import inspect
import logging
from typing import Mapping, Optional, Set
from urllib.parse import quote, urlencode

from snowtrack.core.config.enums import Scheme
from snowtrack.core.protocols.transport import CompletionCallback, Transport
from snowtrack.domains.dispatch.types import DispatchResult

logger = logging.getLogger(__name__)


def build_query_string(params: Mapping[str, str]) -> str:
    """Percent-encode ``params`` in insertion order; no characters are left unescaped."""
    return urlencode(list(params.items()), quote_via=quote, safe="")


class Dispatcher:
    """Sends parameter sets to a collector endpoint.

    Usage:
        dispatcher = Dispatcher(transport, "collector.example.com", on_complete=callback)
        dispatcher.send(payload)   # returns at once
        await dispatcher.flush()   # wait for in-flight requests
    """

    def __init__(
        self,
        transport: Transport,
        collector_host: str,
        encrypt_transport: bool = False,
        collector_path: str = "/i",
        on_complete: Optional[CompletionCallback] = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            transport: Performs the actual request.
            collector_host: Host (and optional port) of the collector.
            encrypt_transport: Use https; fixed for the dispatcher's lifetime.
            collector_path: Ingestion path appended to the host.
            on_complete: Called once per request with a ``DispatchResult``.
        """
        self._transport = transport
        self._scheme = Scheme.for_transport(encrypt_transport)
        self._endpoint = f"{self._scheme.value}://{collector_host}{collector_path}"
        self._on_complete = on_complete
        self._in_flight: Set["asyncio.Task[None]"] = set()

    @property
    def endpoint(self) -> str:
        """Collector URL without the query string."""
        return self._endpoint

    @property
    def pending(self) -> int:
        """Number of dispatches that have not completed yet."""
        return len(self._in_flight)

    def build_url(self, params: Mapping[str, str]) -> str:
        """Full collector URL for one parameter set."""
        return f"{self._endpoint}?{build_query_string(params)}"

    def send(self, params: Mapping[str, str]) -> None:
        """Schedule delivery of one parameter set on the running event loop.

        Raises:
            RuntimeError: If called with no running event loop.
        """
        snapshot = dict(params)
        url = self.build_url(snapshot)
        task = asyncio.get_running_loop().create_task(self._deliver(url, snapshot))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        logger.debug(
            "Dispatcher: scheduled %s event (%d in flight)", snapshot.get("e"), self.pending
        )

    async def flush(self) -> None:
        """Wait until every scheduled dispatch has reported completion."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    async def _deliver(self, url: str, params: Mapping[str, str]) -> None:
        try:
            response = await self._transport.get(url)
        except Exception as e:
            logger.warning("Dispatcher: request for %s event failed: %s", params.get("e"), e)
            result = DispatchResult(url=url, params=dict(params), error=e)
        else:
            logger.debug("Dispatcher: delivered %s event", params.get("e"))
            result = DispatchResult(url=url, params=dict(params), response=response)
        await self._notify(result)

    async def _notify(self, result: DispatchResult) -> None:
        if self._on_complete is None:
            return
        try:
            outcome = self._on_complete(result)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception:
            logger.exception("Dispatcher: completion callback failed for %s", result.url)
