from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException

from ...core.errors import ErrorKind, OperationResult, attempt
from ...core.registry import InMemoryRegistry
from ..parsing import parse_bool, parse_identity, parse_int
from ..serializers import error_to_detail, record_to_item

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.ALREADY_REGISTERED: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 403,
}


def _raise_for_result(result: OperationResult[Any]) -> None:
    if result.error is not None:
        raise HTTPException(
            status_code=_STATUS_BY_KIND[result.error.kind],
            detail=error_to_detail(result.error),
        )


def mount_records_api(app: FastAPI, registry: InMemoryRegistry) -> None:
    """Mount record and admin endpoints backed by `registry`.

    There is intentionally no list endpoint: records are only reachable by id.
    """

    @app.post("/api/records")
    def register_record(body: dict) -> dict[str, Any]:
        try:
            capacity = parse_int(body.get("capacity"), field="capacity")
            owner = parse_identity(body.get("owner"), field="owner")
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        result = attempt(registry.register, capacity, owner)
        _raise_for_result(result)
        return {"ok": True, "id": int(result.unwrap())}

    @app.get("/api/records/{record_id}")
    def get_record(record_id: int) -> dict[str, Any]:
        record = registry.get_record(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Unknown record")
        return record_to_item(record)

    @app.patch("/api/records/{record_id}/availability")
    def update_availability(record_id: int, body: dict) -> dict[str, bool]:
        try:
            available = parse_bool(body.get("available"), field="available")
            caller = parse_identity(body.get("caller"), field="caller")
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        result = attempt(registry.update_availability, record_id, available, caller)
        _raise_for_result(result)
        return {"ok": bool(result.unwrap())}

    @app.get("/api/admin")
    def get_admin() -> dict[str, str]:
        return {"admin": registry.admin}

    @app.put("/api/admin")
    def set_admin(body: dict) -> dict[str, bool]:
        try:
            new_admin = parse_identity(body.get("admin"), field="admin")
            caller = parse_identity(body.get("caller"), field="caller")
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        result = attempt(registry.set_admin, new_admin, caller)
        _raise_for_result(result)
        return {"ok": bool(result.unwrap())}
