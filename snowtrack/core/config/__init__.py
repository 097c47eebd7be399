"""Configuration module for snowtrack.

Provides settings loading with type-safe enums.

Usage:
    from snowtrack.core.config import TrackerSettings, Platform

    settings = TrackerSettings()  # reads SNOWTRACK_* env vars
    if settings.platform == Platform.SERVER:
        ...
"""

from snowtrack.core.config.enums import Platform, Scheme
from snowtrack.core.config.settings import TrackerSettings

__all__ = [
    "TrackerSettings",
    "Platform",
    "Scheme",
]
