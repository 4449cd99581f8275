from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Record:
    """A registered compute resource.

    Notes:
    - `id`, `owner` and `capacity` are fixed at registration.
    - `available` is the only mutable field; updates store a new `Record`
      so values handed out to callers never change underneath them.
    """

    id: int
    owner: str
    capacity: int
    available: bool = True
