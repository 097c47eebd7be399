"""Tracker version reported on every event."""

__version__ = "0.1.0"

TRACKER_VERSION = f"py-{__version__}"
