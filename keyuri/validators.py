import re
from typing import Mapping, Optional
from urllib.parse import urlsplit

from keyuri.base32 import has_invalid_padding, is_base32
from keyuri.errors import ErrorKind, Failure, Result, Success
from keyuri.models import Algorithm

DEFAULT_ALGORITHM = Algorithm.SHA1
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30

TIME_CORRECTION_SCHEMES = ("http", "https")

# Signed 32-bit integers with optional surrounding whitespace, which is what
# existing key URI producers write and read.
_INTEGER_PATTERN = re.compile(r"\s*[+-]?[0-9]+\s*")
_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1


def parse_int32(text: str) -> Optional[int]:
    """Parse text as a signed 32-bit integer, returning None if it is not one."""
    if not _INTEGER_PATTERN.fullmatch(text):
        return None

    value = int(text)
    if value < _INT32_MIN or value > _INT32_MAX:
        return None
    return value


def validate_secret(query: Mapping[str, str]) -> Result[str]:
    """Validate the mandatory secret and strip its "=" padding.

    Args:
        query: Decoded query parameters.

    Returns:
        Success with the unpadded secret, or a MissingSecret /
        InvalidSecretEncoding failure.
    """
    secret = query.get("secret")
    if secret is None or not secret.strip():
        return Failure(ErrorKind.MISSING_SECRET, "No secret provided")

    if has_invalid_padding(secret):
        return Failure(ErrorKind.INVALID_SECRET_ENCODING, "Secret has invalid base32 padding")

    if not is_base32(secret):
        return Failure(ErrorKind.INVALID_SECRET_ENCODING, "Secret is not valid base32")

    return Success(secret.rstrip("="))


def validate_algorithm(query: Mapping[str, str]) -> Result[Algorithm]:
    """Validate the HMAC algorithm, defaulting to SHA1 when absent."""
    if "algorithm" not in query:
        return Success(DEFAULT_ALGORITHM)

    value = query["algorithm"]
    if value not in Algorithm.values():
        return Failure(ErrorKind.INVALID_ALGORITHM, f"Not a valid algorithm: {value!r}")

    return Success(Algorithm(value))


def _validate_integer(
    query: Mapping[str, str], key: str, default: int, kind: ErrorKind
) -> Result[int]:
    if key not in query:
        return Success(default)

    value = parse_int32(query[key])
    if value is None:
        return Failure(kind, f"{key.capitalize()} is not a number")
    return Success(value)


def validate_digits(query: Mapping[str, str]) -> Result[int]:
    """Validate the code length. Any integer is accepted; absent means 6."""
    return _validate_integer(query, "digits", DEFAULT_DIGITS, ErrorKind.INVALID_DIGITS)


def validate_period(query: Mapping[str, str]) -> Result[int]:
    """Validate the time step in seconds. Any integer is accepted; absent means 30."""
    return _validate_integer(query, "period", DEFAULT_PERIOD, ErrorKind.INVALID_PERIOD)


def validate_time_correction_url(query: Mapping[str, str]) -> Result[Optional[str]]:
    """Validate the optional time correction URL.

    The URL is only checked, never fetched. It must be absolute and use
    http or https (scheme compared case-insensitively).

    Args:
        query: Decoded query parameters.

    Returns:
        Success with the URL as given (or None when absent), or an
        InvalidTimeCorrectionUrl failure.
    """
    if "timecorrectionurl" not in query:
        return Success(None)

    url = query["timecorrectionurl"]
    try:
        parts = urlsplit(url)
        # Raises ValueError for a non-numeric or out of range port.
        parts.port
    except ValueError:
        return Failure(ErrorKind.INVALID_TIME_CORRECTION_URL, "Not a valid time correction url")

    hostname = parts.hostname
    if not parts.scheme or not hostname or any(char.isspace() for char in hostname):
        return Failure(ErrorKind.INVALID_TIME_CORRECTION_URL, "Not a valid time correction url")

    if parts.scheme.lower() not in TIME_CORRECTION_SCHEMES:
        return Failure(
            ErrorKind.INVALID_TIME_CORRECTION_URL,
            "Time correction urls must start with http:// or https://",
        )

    return Success(url)
