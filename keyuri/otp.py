import hashlib
import time
from typing import Any, Dict, Optional

import pyotp
from pyotp.contrib import Steam

from keyuri.legacy import STEAM_ISSUER
from keyuri.models import Algorithm, KeyUri

STEAM_DIGITS = 5


def _get_digest_algorithm(algorithm: Algorithm):
    """Get the hash algorithm for pyotp.

    Args:
        algorithm: Algorithm named by the key URI.

    Returns:
        Hash algorithm function from hashlib.
    """
    if algorithm == Algorithm.SHA1:
        return hashlib.sha1
    elif algorithm == Algorithm.SHA256:
        return hashlib.sha256
    elif algorithm == Algorithm.SHA512:
        return hashlib.sha512
    else:
        raise ValueError(f"Unsupported algorithm: {algorithm}")


def is_steam_key(key: KeyUri) -> bool:
    """Steam keys produce five character codes from Steam's own alphabet."""
    return key.issuer == STEAM_ISSUER and key.digits == STEAM_DIGITS


def _build_totp(key: KeyUri) -> pyotp.TOTP:
    """Build the pyotp generator for a key.

    Key URIs accept any integer for digits and period, but codes can only
    be produced for positive values.

    Raises:
        ValueError: If digits or period is not positive.
    """
    if key.digits <= 0:
        raise ValueError(f"Cannot generate codes with {key.digits} digits")
    if key.period <= 0:
        raise ValueError(f"Cannot generate codes with a period of {key.period} seconds")

    if is_steam_key(key):
        return Steam(key.secret, interval=key.period)

    return pyotp.TOTP(
        key.secret,
        digits=key.digits,
        digest=_get_digest_algorithm(key.algorithm),
        interval=key.period,
    )


def generate_code(key: KeyUri, for_time: Optional[int] = None) -> Dict[str, Any]:
    """Generate the TOTP code for a key.

    Args:
        key: Validated key URI.
        for_time: Unix timestamp to generate for. Defaults to now.

    Returns:
        Dictionary with code and time_remaining.
    """
    totp = _build_totp(key)

    if for_time is None:
        for_time = int(time.time())
    code = totp.at(for_time)

    time_remaining = key.period - (for_time % key.period)

    return {
        "code": code,
        "time_remaining": time_remaining,
    }


def verify_code(
    key: KeyUri,
    code: str,
    for_time: Optional[int] = None,
    valid_window: int = 1,
) -> bool:
    """Verify a TOTP code against a key.

    Args:
        key: Validated key URI.
        code: Code to verify.
        for_time: Unix timestamp to verify at. Defaults to now.
        valid_window: Number of periods of drift tolerated either side.

    Returns:
        True if the code matches.
    """
    totp = _build_totp(key)
    return totp.verify(code, for_time=for_time, valid_window=valid_window)
