"""
The front door: bundle metadata, word autocomplete and the web UI.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from dictfleet import __version__
from dictfleet.server.etag import WeakETagMiddleware
from dictfleet.server.routes import api, content
from dictfleet.server.state import FrontDoorState


def print_front_door(app: FastAPI, url: str) -> None:
    """Startup banner: where the front door listens and what it answers."""
    api_routes = []
    for route in app.routes:
        if isinstance(route, APIRoute) and route.path.startswith("/api/"):
            api_routes.append((sorted(route.methods)[0], route.path))

    print("Server is running.")
    print(f"Please open: {url}")
    for method, path in api_routes:
        print(f"  {method:5} {url.rstrip('/')}{path}")
    print()


def create_front_app(state: FrontDoorState, static_dir: str | None = None) -> FastAPI:
    app = FastAPI(title="dictfleet", version=__version__)
    app.state.front = state
    app.state.static_dir = static_dir

    # Added last, runs first: 304s carry CORS headers too.
    app.add_middleware(WeakETagMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api.router)
    # Catch-all, keep it last.
    app.include_router(content.router)
    return app
