from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class Algorithm(str, Enum):
    """HMAC algorithms a key URI may name. Matching is case-sensitive."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class KeyUri(BaseModel):
    """Validated TOTP key URI.

    Instances are immutable. Build them through keyuri.uri.parse_key_uri or
    keyuri.legacy.migrate_legacy_settings so every field has passed
    validation; serialize with keyuri.uri.serialize_key_uri.
    """

    type: Literal["totp"] = "totp"
    secret: str = Field(..., description="Base32 secret without '=' padding")
    algorithm: Algorithm = Field(default=Algorithm.SHA1, description="HMAC algorithm")
    digits: int = Field(default=6, description="Number of digits in a code")
    period: int = Field(default=30, description="Time step in seconds")
    label: str = Field(..., description="Account name")
    issuer: str = Field(default="", description="Service that issued the key")
    time_correction_url: Optional[str] = Field(
        default=None, description="Absolute http(s) URL used to correct clock drift"
    )

    model_config = {"frozen": True}


class KeyUriParseRequest(BaseModel):
    """Model for parsing a key URI."""

    uri: str = Field(..., description="otpauth://totp/... key URI")


class LegacySettingsRequest(BaseModel):
    """Model for migrating a legacy settings record."""

    settings: List[str] = Field(
        ..., description="Positional settings: period, digits or 'S', time correction url"
    )
    secret: str = Field(..., description="Base32 secret stored alongside the settings")


class KeyUriResponse(BaseModel):
    """Model for a validated key URI plus its canonical text."""

    type: Literal["totp"]
    secret: str
    algorithm: Algorithm
    digits: int
    period: int
    label: str
    issuer: str
    time_correction_url: Optional[str] = None
    uri: str


class OTPResponse(BaseModel):
    """Model for OTP generation response."""

    code: str
    time_remaining: int


class OTPVerifyRequest(BaseModel):
    """Model for verifying an OTP against a key URI."""

    uri: str = Field(..., description="Key URI to verify against")
    code: str = Field(..., description="OTP code to verify")


class OTPVerifyResponse(BaseModel):
    """Model for OTP verification response."""

    valid: bool
