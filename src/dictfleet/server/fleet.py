# src/dictfleet/server/fleet.py
"""
The fleet: one HTTP listener per dictionary bundle.

Ports are handed out sequentially from a fixed base, in discovery order:
bundle i listens on base_port + i. Nothing is negotiated with the OS; if a
port is taken, the whole launch fails.
"""

import logging
import socket
from dataclasses import dataclass
from typing import Callable

from fastapi import FastAPI, Request

from dictfleet.core.bundle import Bundle
from dictfleet.core.engine import EngineFactory, FileLookupEngine, LookupEngine
from dictfleet.core.errors import DiscoveryError
from dictfleet.core.settings import DEFAULT_HOST
from dictfleet.server.etag import WeakETagMiddleware
from dictfleet.server.listener import Listener, bind_socket

log = logging.getLogger(__name__)


@dataclass
class ServerHandle:
    port: int
    bundle: Bundle
    engine: LookupEngine
    listener: Listener


def create_fleet_app(engine: LookupEngine) -> FastAPI:
    app = FastAPI(
        title=f"dictfleet: {engine.bundle.name}",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.add_middleware(WeakETagMiddleware)

    @app.get("/{path:path}")
    async def lookup(request: Request):
        return await engine.lookup(request)

    return app


def launch(
    bundles: list[Bundle],
    base_port: int,
    engine_factory: EngineFactory = FileLookupEngine,
    host: str = DEFAULT_HOST,
    log_level: str = "info",
    bind: Callable[[str, int], socket.socket] = bind_socket,
) -> list[ServerHandle]:
    """
    Bind one listener per bundle on base_port, base_port+1, ...

    Every socket is bound before this returns; on the first failure the
    sockets bound so far are closed and the error propagates.
    """
    if not bundles:
        raise DiscoveryError("No dictionaries to serve.")

    handles = []
    try:
        for index, bundle in enumerate(bundles):
            port = base_port + index
            sock = bind(host, port)
            try:
                engine = engine_factory(bundle, port)
                listener = Listener(f"fleet:{port}", create_fleet_app(engine), sock, log_level)
            except BaseException:
                sock.close()
                raise
            handles.append(ServerHandle(port=port, bundle=bundle, engine=engine, listener=listener))
            log.debug("Bound %s to %s:%d", bundle.root_path, host, port)
    except BaseException:
        for handle in handles:
            handle.listener.socket.close()
        raise

    return handles


def print_fleet(handles: list[ServerHandle]) -> None:
    print("\n" + "=" * 60)
    print("Dictionaries")
    print("=" * 60)

    for handle in handles:
        bundle = handle.bundle
        print(f"  {handle.port:<6} {bundle.name:24} {bundle.main_file}  (+{len(bundle.aux_files)} mdd)")
        print(f"         {bundle.root_path}")

    print("=" * 60 + "\n")
