"""Fake transport for testing."""

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlsplit


@dataclass
class FakeResponse:
    """Minimal stand-in for an HTTP response."""

    status_code: int = 200
    url: str = ""


class FakeTransport:
    """In-memory test double for the Transport protocol.

    Records every requested URL. Requests fail with ``error`` when it is set,
    or with the exception registered for a specific event type.

    Usage:
        transport = FakeTransport()
        tracker = Tracker("collector.example.com", "cf", "app", transport=transport)
        tracker.track_page_view("http://www.example.com")
        await tracker.flush()
        assert transport.params[0]["e"] == "pv"
    """

    def __init__(
        self,
        status_code: int = 200,
        error: Optional[BaseException] = None,
        delay: float = 0.0,
    ) -> None:
        """Initialize with the behavior every request should get."""
        self.urls: List[str] = []
        self.status_code = status_code
        self.error = error
        self.delay = delay
        self.closed = False
        self._errors_by_event: Dict[str, BaseException] = {}
        self._delays_by_event: Dict[str, float] = {}

    def fail_event(self, event_type: str, error: BaseException) -> None:
        """Make requests for one event type (``e`` value) raise ``error``."""
        self._errors_by_event[event_type] = error

    def delay_event(self, event_type: str, delay: float) -> None:
        """Hold requests for one event type for ``delay`` seconds."""
        self._delays_by_event[event_type] = delay

    async def get(self, url: str) -> Any:
        """Record the URL, then respond or raise as configured."""
        self.urls.append(url)
        event_type = dict(parse_qsl(urlsplit(url).query)).get("e", "")
        delay = self._delays_by_event.get(event_type, self.delay)
        if delay:
            await asyncio.sleep(delay)
        error = self._errors_by_event.get(event_type, self.error)
        if error is not None:
            raise error
        return FakeResponse(status_code=self.status_code, url=url)

    async def aclose(self) -> None:
        self.closed = True

    # Test helpers

    @property
    def params(self) -> List[Dict[str, str]]:
        """Decoded query parameters of every recorded request, in request order."""
        return [dict(parse_qsl(urlsplit(url).query, keep_blank_values=True)) for url in self.urls]

    def for_event(self, event_type: str) -> List[Dict[str, str]]:
        """Decoded parameters of requests whose ``e`` matches ``event_type``."""
        return [p for p in self.params if p.get("e") == event_type]

    def clear(self) -> None:
        self.urls.clear()
