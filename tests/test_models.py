import pytest
from pydantic import ValidationError

from keyuri.models import Algorithm, KeyUri, KeyUriResponse, LegacySettingsRequest


def test_key_uri_defaults():
    """Test default field values."""
    key = KeyUri(secret="JBSWY3DPEHPK3PXP", label="alice")

    assert key.type == "totp"
    assert key.algorithm == Algorithm.SHA1
    assert key.digits == 6
    assert key.period == 30
    assert key.issuer == ""
    assert key.time_correction_url is None


def test_key_uri_is_immutable():
    """Test that fields cannot be changed after construction."""
    key = KeyUri(secret="JBSWY3DPEHPK3PXP", label="alice")

    with pytest.raises(ValidationError):
        key.digits = 8


def test_key_uri_rejects_other_types():
    """Test that only totp can be represented."""
    with pytest.raises(ValidationError):
        KeyUri(type="hotp", secret="JBSWY3DPEHPK3PXP", label="alice")


def test_key_uri_rejects_unknown_algorithm():
    """Test that the algorithm is a closed set."""
    with pytest.raises(ValidationError):
        KeyUri(secret="JBSWY3DPEHPK3PXP", label="alice", algorithm="MD5")


def test_algorithm_values():
    """Test the supported algorithm names."""
    assert Algorithm.values() == ["SHA1", "SHA256", "SHA512"]


def test_key_uri_response():
    """Test KeyUriResponse built from a KeyUri."""
    key = KeyUri(secret="JBSWY3DPEHPK3PXP", label="alice", issuer="Example")

    response = KeyUriResponse(**key.model_dump(), uri="otpauth://totp/Example:alice")

    assert response.issuer == "Example"
    assert response.uri == "otpauth://totp/Example:alice"


def test_legacy_settings_request_requires_secret():
    """Test that both settings and secret are required."""
    with pytest.raises(ValidationError):
        LegacySettingsRequest(settings=["30", "6", ""])
