"""
Shared dependencies for routes.
"""

from fastapi import Request

from dictfleet.core.autocomplete import AutocompleteIndex
from dictfleet.server.state import FrontDoorState


def get_front_state(request: Request) -> FrontDoorState:
    return request.app.state.front


def get_index(request: Request) -> AutocompleteIndex:
    return get_front_state(request).index
