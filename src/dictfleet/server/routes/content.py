"""
Catch-all GET on the front door: the web UI.
"""

import mimetypes
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

from dictfleet import __version__
from dictfleet.core.engine import FALLBACK_MIME_TYPE


router = APIRouter(tags=["content"])


def resolve_static(static_dir: str, path: str) -> Path | None:
    root = Path(static_dir).resolve()
    target = (root / (path or "index.html")).resolve()
    if target.is_dir():
        target = target / "index.html"
    if root not in target.parents or not target.is_file():
        return None
    return target


@router.get("/{path:path}")
async def content(path: str, request: Request):
    static_dir = request.app.state.static_dir
    if static_dir is None:
        if not path:
            return {"name": "dictfleet", "version": __version__}
        raise HTTPException(status_code=404, detail="Not found")

    target = resolve_static(static_dir, path)
    if target is None:
        raise HTTPException(status_code=404, detail="Not found")
    media_type, _ = mimetypes.guess_type(target.name)
    return FileResponse(target, media_type=media_type or FALLBACK_MIME_TYPE)
