"""
Front door API routes: /api/info, /api/wq
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from dictfleet.core.autocomplete import AutocompleteIndex, IndexQueryError
from dictfleet.server.deps import get_front_state, get_index
from dictfleet.server.state import FrontDoorState

log = logging.getLogger(__name__)


router = APIRouter(prefix="/api", tags=["api"])


class InfoResponse(BaseModel):
    data: list[dict]


class SuggestionsResponse(BaseModel):
    suggestions: list[str]


class ErrorResponse(BaseModel):
    error: str


@router.post("/info", response_model=InfoResponse)
async def info(state: FrontDoorState = Depends(get_front_state)):
    """Descriptors of every dictionary in the fleet."""
    return {"data": state.descriptors()}


@router.get("/wq", response_model=SuggestionsResponse, responses={500: {"model": ErrorResponse}})
async def word_query(q: str | None = None, index: AutocompleteIndex = Depends(get_index)):
    """Words containing `q`, case-insensitive."""
    if not q:
        return {"suggestions": []}
    log.debug("Query: %s", q)

    try:
        suggestions = await index.query(q.lower())
    except IndexQueryError:
        log.exception("Database error")
        return JSONResponse({"error": "Database error"}, status_code=500)

    return {"suggestions": suggestions}
