"""
One uvicorn server on a pre-bound socket.

Sockets are bound up front so that a port collision aborts startup before
any listener serves traffic.
"""

import asyncio
import contextlib
import logging
import socket

import uvicorn
from fastapi import FastAPI

from dictfleet.core.errors import BindError

log = logging.getLogger(__name__)


def bind_socket(host: str, port: int) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
        sock.listen(socket.SOMAXCONN)
    except OSError as e:
        sock.close()
        raise BindError(f"cannot listen on {host}:{port}: {e.strerror or e}") from e
    sock.set_inheritable(True)
    return sock


class ListenerServer(uvicorn.Server):
    """Signals are handled once for the whole process, not per server."""

    @contextlib.contextmanager
    def capture_signals(self):
        yield

    def install_signal_handlers(self) -> None:
        pass


class Listener:
    def __init__(self, name: str, app: FastAPI, sock: socket.socket, log_level: str = "info"):
        self.name = name
        self.app = app
        self.socket = sock
        self.host, self.port = sock.getsockname()[:2]
        config = uvicorn.Config(app, log_level=log_level)
        self.server = ListenerServer(config)
        self.task: asyncio.Task | None = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/"

    @property
    def started(self) -> bool:
        return self.server.started

    @property
    def closed(self) -> bool:
        return self.socket.fileno() == -1

    def start(self) -> asyncio.Task:
        self.task = asyncio.create_task(self.server.serve(sockets=[self.socket]), name=self.name)
        return self.task

    async def close(self, timeout: float) -> None:
        """Stop accepting, let uvicorn finish its shutdown, give up after `timeout`."""
        self.server.should_exit = True
        try:
            if self.task is not None:
                await asyncio.wait_for(asyncio.shield(self.task), timeout)
        except asyncio.TimeoutError:
            self.server.force_exit = True
            self.task.cancel()
            raise
        finally:
            self.socket.close()
