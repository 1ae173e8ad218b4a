"""Migration of the old positional settings format to key URIs.

The legacy format stored ``[period, digits or "S", time correction url]``
next to the raw secret. It carried no issuer or label, so placeholders are
used; the Steam flag implies Steam's five digit codes.
"""
import logging
from typing import Optional, Sequence
from urllib.parse import quote

from keyuri.errors import ErrorKind, Failure, Result
from keyuri.models import KeyUri
from keyuri.uri import SCHEME, TYPE, parse_key_uri

logger = logging.getLogger(__name__)

STEAM_FLAG = "S"
STEAM_ISSUER = "Steam"
STEAM_DIGITS = "5"
PLACEHOLDER_ISSUER = "SomeIssuer"
PLACEHOLDER_LABEL = "SomeLabel"

MIN_SETTINGS = 3


def _legacy_time_correction_url(value: str) -> Optional[str]:
    # Old records hold a blank or a bare filler word instead of a URL.
    filler = value.strip()
    if not filler or filler.isalnum():
        return None
    return value


def build_legacy_uri(settings: Sequence[str], secret: str) -> str:
    """Translate a legacy settings record into key URI text (not yet validated).

    Args:
        settings: At least three positional settings.
        secret: Base32 secret, possibly padded.

    Returns:
        Key URI text with every value percent-encoded.
    """
    is_steam = settings[1] == STEAM_FLAG
    issuer = STEAM_ISSUER if is_steam else PLACEHOLDER_ISSUER
    digits = STEAM_DIGITS if is_steam else settings[1]
    period = settings[0]
    time_correction_url = _legacy_time_correction_url(settings[2])

    uri = (
        f"{SCHEME}://{TYPE}/{quote(issuer, safe='')}:{PLACEHOLDER_LABEL}"
        f"?secret={quote(secret, safe='')}"
        f"&period={quote(period, safe='')}"
        f"&digits={quote(digits, safe='')}"
    )
    if time_correction_url is not None:
        uri += f"&timecorrectionurl={quote(time_correction_url, safe='')}"
    return uri


def migrate_legacy_settings(settings: Sequence[str], secret: str) -> Result[KeyUri]:
    """Migrate a legacy settings record through the normal key URI validation.

    Returns:
        Success with the KeyUri, or a Failure. Record-level problems are
        NullArgument / InvalidLegacySettings; anything else is the same
        failure parse_key_uri reports for the generated URI.
    """
    if settings is None:
        return Failure(ErrorKind.NULL_ARGUMENT, "Settings should not be null")
    if len(settings) < MIN_SETTINGS:
        return Failure(
            ErrorKind.INVALID_LEGACY_SETTINGS,
            f"Settings should have at least {MIN_SETTINGS} entries",
        )
    if secret is None:
        return Failure(ErrorKind.NULL_ARGUMENT, "Secret should not be null")

    result = parse_key_uri(build_legacy_uri(settings, secret))
    if isinstance(result, Failure):
        logger.info("Legacy settings could not be migrated: %s", result.kind.value)
    return result


def load_legacy_settings(settings: Sequence[str], secret: str) -> KeyUri:
    """Migrate a legacy settings record, raising KeyUriError when it is rejected."""
    result = migrate_legacy_settings(settings, secret)
    if isinstance(result, Failure):
        result.raise_error()
    return result.value
