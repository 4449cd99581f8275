from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """The three ways a registry operation can be refused."""

    ALREADY_REGISTERED = "already_registered"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"

    @classmethod
    def from_any(cls, value: Any) -> "ErrorKind":
        if isinstance(value, cls):
            return value
        v = str(value).strip().lower().replace("-", "_")
        for kind in cls:
            if kind.value == v:
                return kind
        raise ValueError(f"Unknown registry error kind: {value!r}")


class RegistryError(Exception):
    """Base error for refused registry operations.

    Callers should branch on `kind`, never on the message text.
    """

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AlreadyRegistered(RegistryError):
    kind = ErrorKind.ALREADY_REGISTERED

    def __init__(self, record_id: int | None = None, message: str | None = None) -> None:
        super().__init__(message or f"Record {record_id} is already registered")
        self.record_id = record_id


class NotFound(RegistryError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, record_id: int | None = None, message: str | None = None) -> None:
        super().__init__(message or f"Unknown record: {record_id}")
        self.record_id = record_id


class Unauthorized(RegistryError):
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, caller: str | None = None, message: str | None = None) -> None:
        super().__init__(message or f"Caller {caller!r} is not authorized")
        self.caller = caller


_ERRORS_BY_KIND: dict[ErrorKind, type[RegistryError]] = {
    ErrorKind.ALREADY_REGISTERED: AlreadyRegistered,
    ErrorKind.NOT_FOUND: NotFound,
    ErrorKind.UNAUTHORIZED: Unauthorized,
}


def error_from_kind(kind: str | ErrorKind, message: str) -> RegistryError:
    """Rebuild a typed error from its wire form (kind + message)."""

    cls = _ERRORS_BY_KIND[ErrorKind.from_any(kind)]
    return cls(message=message)


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a registry operation: either `value` or `error` is meaningful."""

    value: T | None = None
    error: RegistryError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        return None if self.error is None else self.error.kind

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def attempt(fn: Callable[..., T], *args: Any, **kwargs: Any) -> OperationResult[T]:
    """Run `fn` and capture a `RegistryError` instead of raising it.

    Anything that is not a `RegistryError` (bad input, bugs) still propagates.
    """

    try:
        return OperationResult(value=fn(*args, **kwargs))
    except RegistryError as e:
        return OperationResult(error=e)
