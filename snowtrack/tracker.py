"""Public tracker: tracking calls, subject setters and dispatch lifecycle.

Tracking calls are synchronous. Each one assembles its parameter set(s)
immediately, schedules delivery on the running event loop and returns
``None``; outcomes arrive only through ``on_complete``.

Usage:
    async with Tracker("collector.example.com", "cf", "my-app", on_complete=log_result) as t:
        t.set_user_id("jacob")
        t.track_page_view("http://www.example.com", "example page")
"""

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from snowtrack.adapters.transport.http import HttpxTransport
from snowtrack.core.config import Platform, TrackerSettings
from snowtrack.core.protocols.transport import CompletionCallback, Transport
from snowtrack.domains.dispatch.dispatcher import Dispatcher
from snowtrack.domains.events.assembler import EventAssembler
from snowtrack.domains.events.subject import Subject
from snowtrack.domains.events.types import Contexts, SelfDescribingJson, TransactionItem

logger = logging.getLogger(__name__)

Number = Union[int, float]


class Tracker:
    """Event tracker bound to one collector, namespace and application."""

    def __init__(
        self,
        collector_host: str,
        namespace: Optional[str] = None,
        app_id: Optional[str] = None,
        encrypt_transport: bool = False,
        on_complete: Optional[CompletionCallback] = None,
        *,
        encode_base64: bool = False,
        transport: Optional[Transport] = None,
        collector_path: str = "/i",
        platform: Union[Platform, str, None] = Platform.SERVER,
        request_timeout: float = 5.0,
    ) -> None:
        """Create a tracker.

        Args:
            collector_host: Collector host, without scheme.
            namespace: Tracker namespace, sent as ``tna``.
            app_id: Application id, sent as ``aid``.
            encrypt_transport: Send over https instead of http.
            on_complete: Called once per outbound request with a ``DispatchResult``.
            encode_base64: Send contexts and unstructured events base64-encoded.
            transport: Transport to use; defaults to an httpx transport.
            collector_path: Ingestion path on the collector.
            platform: Initial platform (``p``); ``None`` leaves it unset.
            request_timeout: Timeout for the default transport, in seconds.
        """
        self.collector_host = collector_host
        self.namespace = namespace
        self.app_id = app_id
        self.encrypt_transport = encrypt_transport
        self.encode_base64 = encode_base64

        self._subject = Subject(platform=platform)
        self._assembler = EventAssembler(
            self._subject,
            namespace=namespace,
            app_id=app_id,
            encode_base64=encode_base64,
        )
        if transport is None:
            transport = HttpxTransport(timeout=request_timeout)
        self._transport = transport
        self._dispatcher = Dispatcher(
            self._transport,
            collector_host,
            encrypt_transport=encrypt_transport,
            collector_path=collector_path,
            on_complete=on_complete,
        )
        logger.debug("Tracker '%s' created for %s", namespace, self._dispatcher.endpoint)

    @classmethod
    def from_settings(
        cls,
        settings: TrackerSettings,
        on_complete: Optional[CompletionCallback] = None,
        transport: Optional[Transport] = None,
    ) -> "Tracker":
        """Build a tracker from loaded settings."""
        return cls(
            settings.collector_host,
            settings.namespace,
            settings.app_id,
            settings.encrypt_transport,
            on_complete,
            encode_base64=settings.encode_base64,
            transport=transport,
            collector_path=settings.collector_path,
            platform=settings.platform,
            request_timeout=settings.request_timeout,
        )

    @property
    def endpoint(self) -> str:
        """Collector URL events are sent to."""
        return self._dispatcher.endpoint

    # ------------------------------------------------------------------
    # Tracking calls
    # ------------------------------------------------------------------

    def track_page_view(
        self,
        page_url: str,
        page_title: Optional[str] = None,
        referrer: Optional[str] = None,
        contexts: Contexts = None,
    ) -> None:
        """Send a page view (``e=pv``) for ``page_url``."""
        self._dispatcher.send(
            self._assembler.build_page_view(page_url, page_title, referrer, contexts)
        )

    def track_struct_event(
        self,
        category: str,
        action: str,
        label: Optional[str] = None,
        property_: Optional[str] = None,
        value: Optional[Number] = None,
        contexts: Contexts = None,
    ) -> None:
        """Send a structured event (``e=se``) with ``se_*`` fields."""
        self._dispatcher.send(
            self._assembler.build_struct_event(category, action, label, property_, value, contexts)
        )

    def track_unstruct_event(
        self,
        event_json: SelfDescribingJson,
        contexts: Contexts = None,
    ) -> None:
        """Send a self-describing event (``e=ue``) wrapping ``event_json``."""
        self._dispatcher.send(self._assembler.build_unstruct_event(event_json, contexts))

    def track_screen_view(
        self,
        name: str,
        screen_id: Optional[str] = None,
        contexts: Contexts = None,
    ) -> None:
        """Send a screen view as a self-describing event."""
        self._dispatcher.send(self._assembler.build_screen_view(name, screen_id, contexts))

    def track_ecommerce_transaction(
        self,
        order_id: str,
        affiliation: Optional[str],
        total_value: Number,
        tax_value: Optional[Number] = None,
        shipping: Optional[Number] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        country: Optional[str] = None,
        currency: Optional[str] = None,
        items: Optional[Iterable[Union[TransactionItem, Mapping[str, Any]]]] = None,
        contexts: Contexts = None,
    ) -> None:
        """Send the transaction event and one item event per item.

        Everything is validated before the first dispatch; afterwards each of
        the N+1 requests succeeds or fails on its own.
        """
        payloads = self._assembler.build_ecommerce_transaction(
            order_id,
            affiliation,
            total_value,
            tax_value,
            shipping,
            city,
            state,
            country,
            currency,
            items,
            contexts,
        )
        for payload in payloads:
            self._dispatcher.send(payload)

    def track_ecommerce_transaction_item(
        self,
        order_id: str,
        sku: str,
        name: Optional[str],
        category: Optional[str],
        price: Number,
        quantity: Optional[Number] = None,
        currency: Optional[str] = None,
        contexts: Contexts = None,
    ) -> None:
        """Send a single transaction item (``e=ti``) for ``order_id``."""
        self._dispatcher.send(
            self._assembler.build_ecommerce_transaction_item(
                order_id, sku, name, category, price, quantity, currency, contexts
            )
        )

    # ------------------------------------------------------------------
    # Subject setters
    # ------------------------------------------------------------------

    def set_platform(self, value: Union[Platform, str]) -> None:
        """Set the platform (``p``) for subsequent events."""
        self._subject.set_platform(value)

    def set_user_id(self, value: str) -> None:
        """Set the user id (``uid``) for subsequent events."""
        self._subject.set_user_id(value)

    def set_screen_resolution(self, width: int, height: int) -> None:
        """Set the screen resolution (``res``) as ``<width>x<height>``."""
        self._subject.set_screen_resolution(width, height)

    def set_viewport(self, width: int, height: int) -> None:
        """Set the viewport size (``vp``) as ``<width>x<height>``."""
        self._subject.set_viewport(width, height)

    def set_color_depth(self, value: int) -> None:
        """Set the color depth (``cd``) for subsequent events."""
        self._subject.set_color_depth(value)

    def set_timezone(self, value: str) -> None:
        """Set the timezone (``tz``) for subsequent events."""
        self._subject.set_timezone(value)

    def set_lang(self, value: str) -> None:
        """Set the language (``lang``) for subsequent events."""
        self._subject.set_lang(value)

    def set_ip_address(self, value: str) -> None:
        """Set the IP address (``ip``) for subsequent events."""
        self._subject.set_ip_address(value)

    def set_useragent(self, value: str) -> None:
        """Set the user agent (``ua``) for subsequent events."""
        self._subject.set_useragent(value)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def flush(self) -> None:
        """Wait for every in-flight request to report completion."""
        await self._dispatcher.flush()

    async def aclose(self) -> None:
        """Flush, then release the transport."""
        await self.flush()
        await self._transport.aclose()

    async def __aenter__(self) -> "Tracker":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
