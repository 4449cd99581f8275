from __future__ import annotations

from .errors import (
    AlreadyRegistered,
    ErrorKind,
    NotFound,
    OperationResult,
    RegistryError,
    Unauthorized,
    attempt,
    error_from_kind,
)
from .records import Record
from .registry import InMemoryRegistry
from .settings import DEFAULT_ADMIN, RegistrySettings

__all__ = [
    "Record",
    "InMemoryRegistry",
    "RegistrySettings",
    "DEFAULT_ADMIN",
    "ErrorKind",
    "RegistryError",
    "AlreadyRegistered",
    "NotFound",
    "Unauthorized",
    "OperationResult",
    "attempt",
    "error_from_kind",
]
