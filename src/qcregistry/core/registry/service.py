from __future__ import annotations

import logging
import threading
from dataclasses import replace

from ..errors import AlreadyRegistered, NotFound, Unauthorized
from ..records import Record
from ..settings import DEFAULT_ADMIN

logger = logging.getLogger(__name__)


class InMemoryRegistry:
    """Ownership-gated record registry.

    One `RLock` guards all state, so every public method is atomic with
    respect to the others and reads see a consistent snapshot.
    """

    def __init__(self, *, admin: str = DEFAULT_ADMIN) -> None:
        self._lock = threading.RLock()
        self._initial_admin = self._require_identity(admin, name="admin")
        self._records: dict[int, Record] = {}
        self._next_id = 0
        self._admin = self._initial_admin
        self._revision = 0

    @staticmethod
    def _require_identity(value: object, *, name: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{name} must be a non-empty string")
        return value

    @staticmethod
    def _require_int(value: object, *, name: str) -> int:
        # bool is an int subclass; a flag is never a valid capacity.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an integer")
        return int(value)

    @property
    def admin(self) -> str:
        with self._lock:
            return self._admin

    def revision(self) -> int:
        with self._lock:
            return self._revision

    def register(self, capacity: int, owner: str) -> int:
        capacity_v = self._require_int(capacity, name="capacity")
        owner_v = self._require_identity(owner, name="owner")

        with self._lock:
            self._next_id += 1
            record_id = self._next_id
            if record_id in self._records:
                logger.info("register rejected: id %d already registered", record_id)
                raise AlreadyRegistered(record_id)

            self._records[record_id] = Record(id=record_id, owner=owner_v, capacity=capacity_v, available=True)
            self._revision += 1
            logger.debug("registered record %d (owner=%r, capacity=%d)", record_id, owner_v, capacity_v)
            return record_id

    def update_availability(self, record_id: int, available: bool, caller: str) -> bool:
        if not isinstance(available, bool):
            raise ValueError("available must be a boolean")

        with self._lock:
            prev = self._records.get(record_id)
            if prev is None:
                logger.info("availability update rejected: unknown record %r", record_id)
                raise NotFound(record_id)
            if caller != prev.owner:
                logger.info("availability update rejected: %r does not own record %d", caller, record_id)
                raise Unauthorized(caller, f"Only the owner of record {record_id} may update it")

            self._records[record_id] = replace(prev, available=available)
            self._revision += 1
            logger.debug("record %d availability -> %s", record_id, available)
            return True

    def get_record(self, record_id: int) -> Record | None:
        with self._lock:
            return self._records.get(record_id)

    def set_admin(self, new_admin: str, caller: str) -> bool:
        with self._lock:
            if caller != self._admin:
                logger.info("admin change rejected: %r is not the admin", caller)
                raise Unauthorized(caller, "Only the current admin may reassign the admin role")
            new_admin_v = self._require_identity(new_admin, name="new_admin")

            self._admin = new_admin_v
            self._revision += 1
            logger.debug("admin -> %r", new_admin_v)
            return True

    def reset(self) -> None:
        """Drop all records and restore the initial admin and id counter."""

        with self._lock:
            self._records.clear()
            self._next_id = 0
            self._admin = self._initial_admin
            self._revision += 1
