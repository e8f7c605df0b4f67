"""
dictfleet server entry: discover, launch, serve until signalled.
"""

import logging

from dictfleet.core.autocomplete import AutocompleteIndex
from dictfleet.core.bundle import discover
from dictfleet.core.engine import EngineFactory, FileLookupEngine
from dictfleet.core.settings import Settings
from dictfleet.server.fleet import launch, print_fleet
from dictfleet.server.front import create_front_app, print_front_door
from dictfleet.server.lifecycle import LifecycleCoordinator
from dictfleet.server.listener import Listener, bind_socket
from dictfleet.server.state import FrontDoorState

log = logging.getLogger(__name__)


async def serve(settings: Settings, engine_factory: EngineFactory = FileLookupEngine) -> int:
    """
    Start the fleet and the front door, block until shutdown.

    Raises a StartupError before anything serves traffic; returns the exit
    status once everything has been closed.
    """
    bundles = discover(settings.dir)
    settings.check_fleet_range(len(bundles))

    handles = launch(
        bundles,
        settings.base_port,
        engine_factory=engine_factory,
        host=settings.host,
        log_level=settings.log_level,
    )
    print_fleet(handles)

    index = AutocompleteIndex(settings.dir, settings.index_file)
    state = FrontDoorState(bundles=bundles, handles=handles, index=index)
    app = create_front_app(state, settings.static_dir)

    try:
        sock = bind_socket(settings.host, settings.port)
    except Exception:
        for handle in handles:
            handle.listener.socket.close()
        raise
    front = Listener("front", app, sock, settings.log_level)

    print_front_door(app, front.url)

    coordinator = LifecycleCoordinator(handles, front, index, settings.close_timeout)
    return await coordinator.run()
