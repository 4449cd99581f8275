from __future__ import annotations

from .records import error_to_detail, record_to_item

__all__ = [
    "error_to_detail",
    "record_to_item",
]
