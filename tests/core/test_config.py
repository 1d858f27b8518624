"""Settings — defaults and environment overrides."""

import pytest
from pydantic import ValidationError

from app.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("CONNECT_DELAY_MS", raising=False)
    settings = Settings(_env_file=None)
    assert settings.connect_delay_ms == 10_000
    assert settings.connect_delay_seconds == 10.0
    assert settings.port == 3000
    assert settings.remote_jid_suffix == "@s.whatsapp.net"


def test_env_override(monkeypatch):
    monkeypatch.setenv("CONNECT_DELAY_MS", "250")
    assert Settings(_env_file=None).connect_delay_seconds == 0.25


def test_negative_delay_rejected(monkeypatch):
    monkeypatch.setenv("CONNECT_DELAY_MS", "-1")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
