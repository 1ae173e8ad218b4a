import logging

import pytest

from keyuri.config import load_settings
from keyuri.logging_config import configure_logging


def test_load_settings_defaults(monkeypatch):
    """Test defaults when nothing is configured."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("MAX_QR_UPLOAD_BYTES", raising=False)

    settings = load_settings()

    assert settings.log_level == "INFO"
    assert settings.max_qr_upload_bytes == 5242880


def test_load_settings_from_environment(monkeypatch):
    """Test values read from the environment."""
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("MAX_QR_UPLOAD_BYTES", "1024")

    settings = load_settings()

    assert settings.log_level == "debug"
    assert settings.max_qr_upload_bytes == 1024


def test_load_settings_invalid_upload_limit(monkeypatch):
    """Test that a non-numeric upload limit is refused."""
    monkeypatch.setenv("MAX_QR_UPLOAD_BYTES", "lots")

    with pytest.raises(RuntimeError, match="MAX_QR_UPLOAD_BYTES"):
        load_settings()


def test_configure_logging_upper_cases_level(monkeypatch):
    """Test that the level name is upper-cased before use."""
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging("warning")

    assert calls[0]["level"] == "WARNING"
    assert "%(name)s" in calls[0]["format"]
