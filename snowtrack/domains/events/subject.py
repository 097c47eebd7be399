"""Mutable subject state shared by every event a tracker sends."""

from typing import Any, Dict, Optional

from snowtrack.domains.events.payload import dimensions


class Subject:
    """Who/where the events are about: platform, user, device and locale.

    Setters only update in-memory state. The assembler takes a snapshot per
    event, so changing a value never affects an event already assembled.
    """

    def __init__(self, platform: Optional[str] = None) -> None:
        """Initialize with an optional default platform."""
        self._values: Dict[str, Any] = {}
        if platform is not None:
            self.set_platform(platform)

    def set_platform(self, value: Any) -> None:
        self._values["p"] = value

    def set_user_id(self, value: Any) -> None:
        self._values["uid"] = value

    def set_screen_resolution(self, width: Any, height: Any) -> None:
        self._values["res"] = dimensions(width, height)

    def set_viewport(self, width: Any, height: Any) -> None:
        self._values["vp"] = dimensions(width, height)

    def set_color_depth(self, value: Any) -> None:
        self._values["cd"] = value

    def set_timezone(self, value: Any) -> None:
        self._values["tz"] = value

    def set_lang(self, value: Any) -> None:
        self._values["lang"] = value

    def set_ip_address(self, value: Any) -> None:
        self._values["ip"] = value

    def set_useragent(self, value: Any) -> None:
        self._values["ua"] = value

    def snapshot(self) -> Dict[str, Any]:
        """Return an independent copy of the current values."""
        return dict(self._values)
