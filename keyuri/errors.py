from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Reasons a key URI or legacy record is rejected."""

    INVALID_SCHEME = "InvalidScheme"
    INVALID_TYPE = "InvalidType"
    MISSING_SECRET = "MissingSecret"
    INVALID_SECRET_ENCODING = "InvalidSecretEncoding"
    INVALID_ALGORITHM = "InvalidAlgorithm"
    INVALID_DIGITS = "InvalidDigits"
    INVALID_PERIOD = "InvalidPeriod"
    INVALID_TIME_CORRECTION_URL = "InvalidTimeCorrectionUrl"
    MISSING_LABEL = "MissingLabel"
    INVALID_LEGACY_SETTINGS = "InvalidLegacySettings"
    NULL_ARGUMENT = "NullArgument"


class KeyUriError(ValueError):
    """Raised by the raising entry points when input is rejected.

    Subclasses ValueError so callers that already handle ValueError
    (the API exception handler, for instance) keep working.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    def raise_error(self) -> None:
        raise KeyUriError(self.kind, self.message)


Result = Union[Success[T], Failure]
