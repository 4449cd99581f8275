from __future__ import annotations

import argparse
import logging
import time

from .core.registry import InMemoryRegistry
from .core.settings import RegistrySettings
from .runtime.server import RegistryServer, run


def main(argv: list[str] | None = None) -> None:
    settings = RegistrySettings.from_env()

    p = argparse.ArgumentParser(prog="qcregistry", description="qcregistry: ownership-gated resource registry")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--admin", default=settings.admin, help="initial admin identity")
    p.add_argument(
        "--log-level",
        default=settings.log_level,
        type=str.lower,
        choices=["critical", "error", "warning", "info", "debug", "trace"],
    )
    args = p.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    srv = run(
        host=args.host,
        port=args.port,
        registry=InMemoryRegistry(admin=args.admin),
        settings=settings,
        log_level=args.log_level,
        new_server=True,
    )
    if not isinstance(srv, RegistryServer):
        raise RuntimeError(f"Expected a local server, got {srv!r}")
    print(srv.url)

    # Block forever (so it behaves like a normal CLI server)
    try:
        while True:
            time.sleep(3600)
    except KeyboardInterrupt:
        srv.stop()


if __name__ == "__main__":
    main()
