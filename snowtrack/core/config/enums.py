"""Configuration enums for type-safe settings.

They inherit from str so members can be written straight into a parameter set.
"""

from enum import Enum


class Scheme(str, Enum):
    """URL scheme used to reach the collector.

    Chosen once per tracker from the encrypt-transport flag.
    """

    HTTP = "http"
    HTTPS = "https"

    @classmethod
    def for_transport(cls, encrypt_transport: bool) -> "Scheme":
        """Return HTTPS when transport encryption is requested, HTTP otherwise."""
        return cls.HTTPS if encrypt_transport else cls.HTTP


class Platform(str, Enum):
    """Platform codes understood by the collector (``p`` parameter)."""

    WEB = "web"
    MOBILE = "mob"
    DESKTOP = "pc"
    SERVER = "srv"
    APP = "app"
    TV = "tv"
    CONSOLE = "cnsl"
    IOT = "iot"
