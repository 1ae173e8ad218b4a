import logging
from typing import Any, Dict
from urllib.parse import quote, urlsplit

from keyuri.errors import ErrorKind, Failure, Result, Success
from keyuri.label import resolve_label_and_issuer
from keyuri.models import KeyUri
from keyuri.query import query_map, split_query
from keyuri.validators import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_PERIOD,
    validate_algorithm,
    validate_digits,
    validate_period,
    validate_secret,
    validate_time_correction_url,
)

logger = logging.getLogger(__name__)

SCHEME = "otpauth"
TYPE = "totp"

# Checked in this order; the first failure is the one reported.
FIELD_VALIDATORS = (
    ("secret", validate_secret),
    ("algorithm", validate_algorithm),
    ("period", validate_period),
    ("digits", validate_digits),
    ("time_correction_url", validate_time_correction_url),
)


def _rejected(failure: Failure) -> Failure:
    logger.debug("Rejected key URI: %s", failure.kind.value)
    return failure


def parse_key_uri(text: str) -> Result[KeyUri]:
    """Parse and validate an otpauth://totp/ key URI.

    Checks run scheme, type, secret, algorithm, period, digits, time
    correction URL, then label and issuer. The first failing check aborts
    construction and its failure is returned.

    Args:
        text: Key URI text.

    Returns:
        Success with the KeyUri, or the first Failure encountered.
    """
    if text is None:
        return _rejected(Failure(ErrorKind.NULL_ARGUMENT, "Uri should not be null"))

    try:
        parts = urlsplit(text)
    except ValueError:
        return _rejected(Failure(ErrorKind.INVALID_SCHEME, "Not a valid uri"))

    if parts.scheme != SCHEME:
        return _rejected(Failure(ErrorKind.INVALID_SCHEME, f"Uri scheme must be {SCHEME}"))

    if parts.hostname != TYPE:
        return _rejected(Failure(ErrorKind.INVALID_TYPE, f"Only {TYPE} is supported"))

    # The leading "?" keeps a "?" inside a parameter value from being taken
    # as the start of the query.
    query = query_map(split_query(f"?{parts.query}"))

    fields: Dict[str, Any] = {}
    for name, validator in FIELD_VALIDATORS:
        result = validator(query)
        if isinstance(result, Failure):
            return _rejected(result)
        fields[name] = result.value

    resolved = resolve_label_and_issuer(parts.path, query)
    if isinstance(resolved, Failure):
        return _rejected(resolved)
    fields["label"], fields["issuer"] = resolved.value

    return Success(KeyUri(type=TYPE, **fields))


def load_key_uri(text: str) -> KeyUri:
    """Parse a key URI, raising KeyUriError when it is rejected."""
    result = parse_key_uri(text)
    if isinstance(result, Failure):
        result.raise_error()
    return result.value


def _encode(value: str) -> str:
    return quote(value, safe="")


def serialize_key_uri(key: KeyUri) -> str:
    """Render a KeyUri as canonical key URI text.

    Period, digits and algorithm are written only when they differ from
    their defaults. Secret and issuer are always written, the time
    correction URL only when set. The issuer also appears in the path.
    """
    params = []
    if key.period != DEFAULT_PERIOD:
        params.append(("period", str(key.period)))
    if key.digits != DEFAULT_DIGITS:
        params.append(("digits", str(key.digits)))
    if key.algorithm != DEFAULT_ALGORITHM:
        params.append(("algorithm", key.algorithm.value))
    params.append(("secret", key.secret))
    params.append(("issuer", key.issuer))
    if key.time_correction_url is not None:
        params.append(("timecorrectionurl", key.time_correction_url))

    path = f"/{_encode(key.issuer)}:{_encode(key.label)}"
    query = "&".join(f"{name}={_encode(value)}" for name, value in params)

    return f"{SCHEME}://{key.type}{path}?{query}"
