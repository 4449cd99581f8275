from __future__ import annotations

from .client import RegistryClient

__all__ = ["RegistryClient"]
