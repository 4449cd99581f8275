from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_ADMIN = "owner"
DEFAULT_LOG_LEVEL = "info"


def normalize_base_url(url: str) -> str:
    url = url.strip()
    if not url:
        return ""
    # Allow passing just host:port.
    if "://" not in url:
        url = "http://" + url
    return url.rstrip("/")


@dataclass(frozen=True)
class RegistrySettings:
    """Process configuration, read from `QCREGISTRY_*` environment variables.

    Notes:
    - `admin` seeds the admin identity of a freshly created registry only.
      Later admin changes go through `set_admin`.
    - `url` is only used by `run()` to attach to an already running server.
    """

    admin: str = DEFAULT_ADMIN
    url: str = ""
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "RegistrySettings":
        admin = os.getenv("QCREGISTRY_ADMIN", "").strip() or DEFAULT_ADMIN
        log_level = os.getenv("QCREGISTRY_LOG_LEVEL", "").strip().lower() or DEFAULT_LOG_LEVEL
        return cls(
            admin=admin,
            url=normalize_base_url(os.getenv("QCREGISTRY_URL", "")),
            log_level=log_level,
        )
