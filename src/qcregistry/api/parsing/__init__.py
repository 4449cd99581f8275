from __future__ import annotations

from .fields import parse_bool, parse_identity, parse_int

__all__ = [
    "parse_bool",
    "parse_identity",
    "parse_int",
]
