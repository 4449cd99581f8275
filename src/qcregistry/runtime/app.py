from __future__ import annotations

from fastapi import FastAPI

from ..api import create_api_app
from ..core.registry import InMemoryRegistry
from ..core.settings import RegistrySettings


def create_app(registry: InMemoryRegistry | None = None) -> FastAPI:
    """Create the full app around `registry`.

    Without an explicit registry a fresh one is created, seeded with the
    admin identity from `QCREGISTRY_ADMIN`.
    """

    if registry is None:
        registry = InMemoryRegistry(admin=RegistrySettings.from_env().admin)
    return create_api_app(registry)
