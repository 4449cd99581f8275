from __future__ import annotations

from typing import Any


def parse_bool(value: Any, *, field: str) -> bool:
    # Only JSON true/false; 0/1 and "yes"/"no" are not flags here.
    if value is None:
        raise ValueError(f"Missing {field}")
    if not isinstance(value, bool):
        raise ValueError(f"Invalid {field}: expected a boolean")
    return value


def parse_int(value: Any, *, field: str) -> int:
    if value is None:
        raise ValueError(f"Missing {field}")
    # bool is an int subclass; JSON true/false would otherwise pass as 1/0.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Invalid {field}: expected an integer")
    return value


def parse_identity(value: Any, *, field: str) -> str:
    if value is None:
        raise ValueError(f"Missing {field}")
    if not isinstance(value, str):
        raise ValueError(f"Invalid {field}")
    if not value.strip():
        raise ValueError(f"{field} cannot be empty")
    return value
