from __future__ import annotations

import contextlib
import logging
import socket
import threading
import time
from dataclasses import dataclass, field

import uvicorn

from ..core.registry import InMemoryRegistry
from ..core.settings import RegistrySettings, normalize_base_url
from ..sdk.client import RegistryClient
from .app import create_app

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryServer:
    host: str
    port: int
    url: str
    registry: InMemoryRegistry
    _server: uvicorn.Server | None = field(default=None, repr=False, compare=False)
    _thread: threading.Thread | None = field(default=None, repr=False, compare=False)

    def client(self) -> RegistryClient:
        """HTTP client talking to this server."""
        return RegistryClient(self.url.rstrip("/"))

    def stop(self, *, timeout_s: float = 5.0) -> None:
        if self._server is None:
            return
        self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=timeout_s)
        logger.info("qcregistry server at %s stopped", self.url)


def _find_free_port(host: str) -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _is_server_alive(base_url: str, *, timeout_s: float = 0.2) -> bool:
    """Best-effort probe to determine if a qcregistry server is reachable."""

    import httpx

    try:
        with httpx.Client(base_url=base_url, timeout=timeout_s) as client:
            r = client.get("/healthz")
            if r.status_code != 200:
                return False
            data = r.json()
            return bool(data.get("ok"))
    except (httpx.HTTPError, ValueError):
        return False


def _wait_until_started(server: uvicorn.Server, thread: threading.Thread, *, timeout_s: float) -> None:
    deadline = time.monotonic() + timeout_s
    while not server.started:
        if not thread.is_alive():
            raise RuntimeError(
                f"qcregistry server exited during startup (is {server.config.host}:{server.config.port} already in use?)"
            )
        if time.monotonic() > deadline:
            raise RuntimeError(f"qcregistry server did not start within {timeout_s:.1f}s")
        time.sleep(0.01)


def run(
    *,
    host: str = "127.0.0.1",
    port: int = 0,
    registry: InMemoryRegistry | None = None,
    settings: RegistrySettings | None = None,
    log_level: str | None = None,
    access_log: bool = False,
    new_server: bool = False,
    connect_timeout_s: float = 0.2,
    startup_timeout_s: float = 10.0,
) -> RegistryServer | RegistryClient:
    """Start a qcregistry server with a single Python call, or attach to one.

    Behavior:
    - If QCREGISTRY_URL is set, we *attach* to that existing server (client mode)
      unless `new_server=True`.
    - Otherwise, if `port != 0` and a server is already reachable at http://{host}:{port},
      we attach to it (client mode) unless `new_server=True`.
    - Otherwise we start a new local server in a daemon thread and return a
      `RegistryServer` owning a fresh registry.

    Notes:
    - `port=0` means "pick a free port", so there's nothing to attach to.
    - Uvicorn's per-request access log is off by default.
    """

    settings = settings or RegistrySettings.from_env()
    env_url = normalize_base_url(settings.url)

    # 1) Try attaching to an explicitly provided server.
    if env_url and not new_server:
        if _is_server_alive(env_url, timeout_s=connect_timeout_s):
            logger.info("attaching to qcregistry server at %s", env_url)
            return RegistryClient(env_url)

    # 2) Try attaching to host/port if they are explicitly chosen.
    if port != 0 and not new_server:
        default_url = normalize_base_url(f"http://{host}:{port}")
        if _is_server_alive(default_url, timeout_s=connect_timeout_s):
            logger.info("attaching to qcregistry server at %s", default_url)
            return RegistryClient(default_url)

    # 3) Start a fresh server.
    if port == 0:
        port = _find_free_port(host)

    if registry is None:
        registry = InMemoryRegistry(admin=settings.admin)
    app = create_app(registry)

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=log_level or settings.log_level,
        access_log=access_log,
    )
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()
    _wait_until_started(server, thread, timeout_s=startup_timeout_s)

    url = f"http://{host}:{port}/"
    logger.info("qcregistry server listening on %s (admin=%r)", url, registry.admin)
    return RegistryServer(host=host, port=port, url=url, registry=registry, _server=server, _thread=thread)
