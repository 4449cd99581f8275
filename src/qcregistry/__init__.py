from __future__ import annotations

from .core import (
    AlreadyRegistered,
    ErrorKind,
    InMemoryRegistry,
    NotFound,
    OperationResult,
    Record,
    RegistryError,
    RegistrySettings,
    Unauthorized,
    attempt,
)
from .runtime.server import RegistryServer, run
from .sdk.client import RegistryClient

__all__ = [
    "run",
    "RegistryServer",
    "RegistryClient",
    "InMemoryRegistry",
    "Record",
    "RegistrySettings",
    "ErrorKind",
    "RegistryError",
    "AlreadyRegistered",
    "NotFound",
    "Unauthorized",
    "OperationResult",
    "attempt",
]
