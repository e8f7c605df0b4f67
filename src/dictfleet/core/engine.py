"""
Lookup engine contract.

One engine per bundle answers content requests for that bundle's fleet
listener and describes the bundle for the front door.
"""

import mimetypes
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable

from fastapi import Request
from fastapi.responses import FileResponse, JSONResponse, Response

from dictfleet.core.bundle import Bundle


FALLBACK_MIME_TYPE = "application/octet-stream"


class LookupEngine(ABC):
    """Base class for bundle engines."""

    def __init__(self, bundle: Bundle, port: int):
        self.bundle = bundle
        self.port = port

    @abstractmethod
    async def lookup(self, request: Request) -> Response:
        """Answer one GET against this bundle."""
        pass

    @abstractmethod
    def describe(self) -> dict[str, Any]:
        """Descriptor aggregated by the front door's /api/info."""
        pass


EngineFactory = Callable[[Bundle, int], LookupEngine]


class FileLookupEngine(LookupEngine):
    """
    Serves files that sit directly in the bundle directory.

    GET /oaldpe.css  ->  <bundle dir>/oaldpe.css

    Decoding .mdx entries belongs to a real dictionary engine; this one only
    exposes the raw resources next to it.
    """

    def __init__(self, bundle: Bundle, port: int):
        super().__init__(bundle, port)
        self.root = Path(bundle.root_path).resolve()

    def resolve(self, path: str) -> Path | None:
        name = path.strip("/")
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            return None
        target = self.root / name
        if not target.is_file():
            return None
        return target

    async def lookup(self, request: Request) -> Response:
        target = self.resolve(request.url.path)
        if target is None:
            return JSONResponse({"error": "Not found"}, status_code=404)
        media_type, _ = mimetypes.guess_type(target.name)
        return FileResponse(target, media_type=media_type or FALLBACK_MIME_TYPE)

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.bundle.name,
            "port": self.port,
            **self.bundle.to_dict(),
        }
