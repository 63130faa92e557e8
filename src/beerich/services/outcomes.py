"""Tagged results returned to page controllers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from beerich.core.errors import NotFoundError, StoreError, ValidationError

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    """Kinds of failure a caller must be ready to handle."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE = "store"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful operation and its value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A failed operation, tagged with its kind."""

    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Ok[T], Failure]


def failure_from(error: Exception) -> Failure:
    """Maps a domain exception onto its Failure kind."""
    if isinstance(error, ValidationError):
        return Failure(ErrorKind.VALIDATION, str(error))
    if isinstance(error, NotFoundError):
        return Failure(ErrorKind.NOT_FOUND, str(error))
    if isinstance(error, StoreError):
        return Failure(ErrorKind.STORE, str(error))
    raise TypeError(f"Unsupported error type: {type(error).__name__}") from error
