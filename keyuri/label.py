from typing import Mapping, Tuple
from urllib.parse import unquote

from keyuri.errors import ErrorKind, Failure, Result, Success


def label_from_path(path: str) -> Result[Tuple[str, str]]:
    """Derive (label, issuer) from the URI path.

    The path is percent-decoded and one leading "/" removed. It is split on
    the first ":" only; without a ":" the issuer is empty.

    Args:
        path: Raw path component, e.g. "/MyService:alice%40example.com".

    Returns:
        Success with (label, issuer), or MissingLabel if the path is empty.
    """
    decoded = unquote(path)
    if decoded.startswith("/"):
        decoded = decoded[1:]

    if not decoded:
        return Failure(ErrorKind.MISSING_LABEL, "No label")

    parts = decoded.split(":", 1)
    if len(parts) == 1:
        return Success((parts[0], ""))
    return Success((parts[1], parts[0]))


def apply_issuer_override(issuer: str, query: Mapping[str, str]) -> str:
    """An issuer query parameter always wins over the one from the path."""
    return query.get("issuer", issuer)


def resolve_label_and_issuer(path: str, query: Mapping[str, str]) -> Result[Tuple[str, str]]:
    """Resolve the final (label, issuer) pair for a key URI."""
    derived = label_from_path(path)
    if isinstance(derived, Failure):
        return derived

    label, issuer = derived.value
    issuer = apply_issuer_override(issuer, query)

    if not label.strip():
        return Failure(ErrorKind.MISSING_LABEL, "No label")

    return Success((label, issuer))
