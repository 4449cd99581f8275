from __future__ import annotations

from fastapi import FastAPI

from ..core.registry import InMemoryRegistry
from .routes.records import mount_records_api


def create_api_app(registry: InMemoryRegistry) -> FastAPI:
    app = FastAPI(title="qcregistry", version="0.1.0")
    app.state.registry = registry

    mount_records_api(app, registry)

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/events")
    def events() -> dict[str, int]:
        # Minimal polling endpoint.
        return {"revision": registry.revision()}

    return app
