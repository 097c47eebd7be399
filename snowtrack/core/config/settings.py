"""Tracker settings loaded from the environment.

Env vars use the ``SNOWTRACK_`` prefix:
    SNOWTRACK_COLLECTOR_HOST=d3rkrsqld9gmqf.cloudfront.net
    SNOWTRACK_ENCRYPT_TRANSPORT=true
"""

from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from snowtrack.core.config.enums import Platform


class TrackerSettings(BaseSettings):
    """Everything needed to build a tracker without code changes."""

    model_config = SettingsConfigDict(
        env_prefix="SNOWTRACK_",
        extra="ignore",
    )

    collector_host: str = Field(..., description="Collector host, optionally with a port")
    namespace: Optional[str] = Field(None, description="Tracker namespace (tna)")
    app_id: Optional[str] = Field(None, description="Application id (aid)")
    encrypt_transport: bool = Field(False, description="Send to the collector over HTTPS")
    encode_base64: bool = Field(
        False, description="Send contexts and unstructured events as base64 (cx / ue_px)"
    )
    collector_path: str = Field("/i", description="Collector ingestion path")
    request_timeout: float = Field(5.0, gt=0, description="Transport timeout in seconds")
    platform: Platform = Field(Platform.SERVER, description="Default platform (p)")

    @field_validator("collector_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        if not value.startswith("/"):
            return "/" + value
        return value

    @model_validator(mode="after")
    def validate_collector_host(self):
        """Reject hosts that smuggle in a scheme or a path."""
        host = self.collector_host
        if not host:
            raise ValueError("collector_host must not be empty")
        if "://" in host:
            raise ValueError(
                f"collector_host '{host}' must not include a scheme; "
                "use encrypt_transport to choose https"
            )
        if "/" in host:
            raise ValueError(
                f"collector_host '{host}' must not include a path; use collector_path"
            )
        return self
