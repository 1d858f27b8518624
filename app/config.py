"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - connect_delay_ms is the one timing knob of the lifecycle (CONNECTING → CONNECTED)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults mirror the mock service out-of-the-box: port 3000, 10s connect delay, fixed phone
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    api_version: str = "2.3.0"

    # Instance lifecycle
    default_instance_name: str = "default"
    connect_delay_ms: int = 10_000
    synthetic_phone: str = "+1234567890"

    @field_validator("connect_delay_ms")
    @classmethod
    def non_negative_delay(cls, v: int) -> int:
        if v < 0:
            raise ValueError("connect_delay_ms must be >= 0")
        return v

    # Handshake (QR) artifact
    handshake_scheme: str = "whatsapp://connect"
    handshake_message: str = "Scan QR code with WhatsApp"
    qr_box_size: int = 10
    qr_border: int = 4

    # Messaging
    remote_jid_suffix: str = "@s.whatsapp.net"
    message_id_prefix: str = "mock_message_id_"

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def connect_delay_seconds(self) -> float:
        return self.connect_delay_ms / 1000


@lru_cache
def get_settings() -> Settings:
    return Settings()
