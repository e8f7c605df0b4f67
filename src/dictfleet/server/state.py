"""
Front door state, built once at startup and handed to the app.
"""

from dataclasses import dataclass

from dictfleet.core.autocomplete import AutocompleteIndex
from dictfleet.core.bundle import Bundle
from dictfleet.server.fleet import ServerHandle


@dataclass
class FrontDoorState:
    bundles: list[Bundle]
    handles: list[ServerHandle]
    index: AutocompleteIndex

    def descriptors(self) -> list[dict]:
        return [handle.engine.describe() for handle in self.handles]
