from __future__ import annotations

from .service import InMemoryRegistry

__all__ = ["InMemoryRegistry"]
