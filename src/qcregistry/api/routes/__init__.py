from __future__ import annotations

from .records import mount_records_api

__all__ = ["mount_records_api"]
