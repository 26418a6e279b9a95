"""Glue between the HTTP routes and the app's LifeEngine.

The engine lives on app.state (one per app instance) and reaches routes via
the get_engine dependency. respond() turns an Outcome into a response body or
an HTTPException and runs the autosave after successful mutations.
"""

import logging

from fastapi import HTTPException, Request

from backend import storage
from minilife import LifeEngine, Outcome

logger = logging.getLogger(__name__)

# Outcome codes → HTTP status; every other failure code is a precondition (409)
_STATUS_BY_CODE = {
    "invalid_input": 404,
    "codec_failure": 400,
}


def get_engine(request: Request) -> LifeEngine:
    return request.app.state.engine


def autosave(engine: LifeEngine) -> None:
    if not engine.state.settings.autosave:
        return
    slot = storage.get_config()["autosave_slot"]
    storage.write_save(slot, engine.export_text())
    logger.debug(f"Autosaved to slot '{slot}'")


def respond(engine: LifeEngine, outcome: Outcome, *, save: bool = True) -> dict:
    """Body for an engine operation: {"outcome", "state"}; raises on failure."""
    if not outcome.ok:
        status = _STATUS_BY_CODE.get(outcome.code or "", 409)
        raise HTTPException(status, {"code": outcome.code, "message": outcome.message})
    if save:
        autosave(engine)
    return {"outcome": outcome, "state": engine.state}
