"""Application settings for backend runtime and tests."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator
from pydantic_settings import BaseSettings

DEFAULT_NOTIFY_PORT = 8888
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Typed settings loaded from environment variables or explicit kwargs."""

    rdv_app_env: str = "dev"
    rdv_app_host: str = "127.0.0.1"
    rdv_app_port: int = Field(default=9999, ge=1, le=65535)

    rdv_notify_port: int = Field(default=DEFAULT_NOTIFY_PORT, ge=1, le=65535)
    rdv_notify_connect_timeout_seconds: float = Field(default=3.0, gt=0)
    rdv_notify_write_timeout_seconds: float = Field(default=3.0, gt=0)
    rdv_notify_framing: Literal["length_prefixed", "legacy_text"] = "length_prefixed"
    rdv_notify_mode: Literal["inline", "background"] = "inline"
    rdv_notify_workers: int = Field(default=4, ge=1)

    rdv_log_level: str = "INFO"

    @field_validator("rdv_log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept the standard logging level names."""
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @model_validator(mode="after")
    def validate_notify_port(self) -> "Settings":
        """Keep the peer notification port apart from the HTTP port on loopback hosts."""
        if (
            self.rdv_app_host in {"127.0.0.1", "localhost"}
            and self.rdv_notify_port == self.rdv_app_port
        ):
            raise ValueError("RDV_NOTIFY_PORT must differ from RDV_APP_PORT")
        return self


def load_settings() -> Settings:
    """Load settings from process environment."""
    return Settings()
