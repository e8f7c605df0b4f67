# src/dictfleet/server/lifecycle.py
"""
Process lifecycle: run every listener, then tear everything down on
SIGINT / SIGTERM.

Shutdown closes the fleet, the front door and the word index concurrently
and waits for all of them, each bounded by `close_timeout`, before the
process exits.
"""

import asyncio
import logging
import signal

from dictfleet.core.autocomplete import AutocompleteIndex
from dictfleet.core.settings import DEFAULT_CLOSE_TIMEOUT
from dictfleet.server.fleet import ServerHandle
from dictfleet.server.listener import Listener

log = logging.getLogger(__name__)


EXIT_OK = 0


class LifecycleCoordinator:
    def __init__(
        self,
        handles: list[ServerHandle],
        front: Listener,
        index: AutocompleteIndex | None = None,
        close_timeout: float = DEFAULT_CLOSE_TIMEOUT,
    ):
        self.handles = handles
        self.front = front
        self.index = index
        self.close_timeout = close_timeout
        self._stop: asyncio.Event | None = None
        self._shutdown: asyncio.Task | None = None

    @property
    def listeners(self) -> list[Listener]:
        return [handle.listener for handle in self.handles] + [self.front]

    def stop(self) -> None:
        """Ask run() to shut down. Safe to call from a signal handler."""
        if self._stop is not None:
            self._stop.set()

    def _install_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self.stop)
            except (NotImplementedError, RuntimeError):
                # Not on the main thread, or no loop signal support (Windows).
                log.debug("Signal handler for %s not installed", sig.name)

    async def run(self) -> int:
        self._stop = asyncio.Event()
        self._install_signal_handlers()

        tasks = [listener.start() for listener in self.listeners]
        stopper = asyncio.create_task(self._stop.wait(), name="stop")
        done, _ = await asyncio.wait([stopper, *tasks], return_when=asyncio.FIRST_COMPLETED)

        for task in done:
            if task is not stopper and self._shutdown is None:
                # A listener died on its own; bring the rest down with it.
                log.error("Listener %s exited unexpectedly", task.get_name())
        stopper.cancel()

        return await self.shutdown()

    async def shutdown(self) -> int:
        """Close everything once; later calls wait for the first one."""
        if self._shutdown is None:
            self._shutdown = asyncio.create_task(self._close_all())
        return await asyncio.shield(self._shutdown)

    async def _close_all(self) -> int:
        print("\nShutting down all servers...")

        names = [listener.name for listener in self.listeners]
        closes = [listener.close(self.close_timeout) for listener in self.listeners]
        if self.index is not None:
            names.append("index")
            closes.append(asyncio.wait_for(self.index.close(), self.close_timeout))

        results = await asyncio.gather(*closes, return_exceptions=True)
        for name, result in zip(names, results):
            if isinstance(result, asyncio.TimeoutError):
                log.warning("%s did not close within %.1fs", name, self.close_timeout)
            elif isinstance(result, Exception):
                log.warning("%s failed to close: %s", name, result)

        return EXIT_OK
