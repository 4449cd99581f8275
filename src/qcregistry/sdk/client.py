from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Any, Iterator

from ..core.errors import ErrorKind, error_from_kind
from ..core.records import Record

if TYPE_CHECKING:
    import httpx


def _record_from_item(item: dict[str, Any]) -> Record:
    return Record(
        id=int(item["id"]),
        owner=str(item["owner"]),
        capacity=int(item["capacity"]),
        available=bool(item["available"]),
    )


def _response_detail(res: "httpx.Response") -> Any:
    try:
        payload = res.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    return payload.get("detail")


def _raise_for_response(res: "httpx.Response", action: str) -> None:
    """Re-raise typed registry errors; anything else becomes a RuntimeError."""

    if res.status_code < 400:
        return
    detail = _response_detail(res)
    if isinstance(detail, dict) and "error" in detail:
        try:
            kind = ErrorKind.from_any(detail["error"])
        except ValueError:
            kind = None
        if kind is not None:
            raise error_from_kind(kind, str(detail.get("message") or kind.value))
    raise RuntimeError(f"Failed to {action}: {res.status_code} {res.text}")


class RegistryClient:
    """HTTP client for a running qcregistry server.

    Registry refusals come back as the same exceptions the in-process registry
    raises (`AlreadyRegistered`, `NotFound`, `Unauthorized`), so code can be
    moved between local and remote registries without changing its error handling.

    `http` may be an existing `httpx.Client` (for example a Starlette
    `TestClient`); it is then used for every call and never closed here.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8000", *, http: "httpx.Client | None" = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = http

    @contextlib.contextmanager
    def _session(self, timeout_s: float) -> Iterator["httpx.Client"]:
        if self._http is not None:
            yield self._http
            return

        import httpx

        with httpx.Client(base_url=self.base_url, timeout=timeout_s) as client:
            yield client

    def register(self, capacity: int, owner: str, *, timeout_s: float = 10.0) -> int:
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ValueError("capacity must be an integer")
        with self._session(timeout_s) as client:
            res = client.post("/api/records", json={"capacity": capacity, "owner": owner})
            _raise_for_response(res, "register record")
            return int(res.json()["id"])

    def update_availability(self, record_id: int, available: bool, caller: str, *, timeout_s: float = 10.0) -> bool:
        if not isinstance(available, bool):
            raise ValueError("available must be a boolean")

        with self._session(timeout_s) as client:
            res = client.patch(
                f"/api/records/{int(record_id)}/availability",
                json={"available": available, "caller": caller},
            )
            _raise_for_response(res, "update availability")
            return bool(res.json().get("ok"))

    def get_record(self, record_id: int, *, timeout_s: float = 10.0) -> Record | None:
        with self._session(timeout_s) as client:
            res = client.get(f"/api/records/{int(record_id)}")
            # Absent records are a normal answer; any other 404 is not ours.
            if res.status_code == 404 and _response_detail(res) == "Unknown record":
                return None
            _raise_for_response(res, "get record")
            return _record_from_item(res.json())

    def get_admin(self, *, timeout_s: float = 10.0) -> str:
        with self._session(timeout_s) as client:
            res = client.get("/api/admin")
            _raise_for_response(res, "get admin")
            return str(res.json()["admin"])

    def set_admin(self, new_admin: str, caller: str, *, timeout_s: float = 10.0) -> bool:
        with self._session(timeout_s) as client:
            res = client.put("/api/admin", json={"admin": new_admin, "caller": caller})
            _raise_for_response(res, "set admin")
            return bool(res.json().get("ok"))

    def revision(self, *, timeout_s: float = 10.0) -> int:
        with self._session(timeout_s) as client:
            res = client.get("/api/events")
            _raise_for_response(res, "get events")
            return int(res.json()["revision"])
