from __future__ import annotations

from typing import Any

from ...core.errors import RegistryError
from ...core.records import Record


def record_to_item(record: Record) -> dict[str, Any]:
    return {
        "id": int(record.id),
        "owner": str(record.owner),
        "capacity": int(record.capacity),
        "available": bool(record.available),
    }


def error_to_detail(error: RegistryError) -> dict[str, str]:
    """Wire form of a registry error; clients branch on `error`, not `message`."""
    return {"error": error.kind.value, "message": error.message}
