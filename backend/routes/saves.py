"""Save slot, export, and import endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from backend import storage
from backend.session import get_engine, respond
from minilife import LifeEngine

router = APIRouter()


@router.get("/saves")
async def list_saves():
    """List save slots with a short summary of each."""
    return storage.list_saves()


@router.post("/saves/{slot}", status_code=201)
async def save_to_slot(slot: str, engine: LifeEngine = Depends(get_engine)):
    """Write the current life to a slot (overwrites)."""
    stored = storage.write_save(slot, engine.export_text())
    return {"slot": stored}


@router.post("/saves/{slot}/load")
async def load_from_slot(slot: str, engine: LifeEngine = Depends(get_engine)):
    """Replace the current life with a saved one; 400 if the slot is corrupt."""
    try:
        text = storage.read_save(slot)
    except FileNotFoundError:
        raise HTTPException(404, "No save found")
    return respond(engine, engine.import_text(text), save=False)


@router.delete("/saves/{slot}")
async def delete_slot(slot: str):
    """Delete a save slot."""
    if not storage.delete_save(slot):
        raise HTTPException(404, "No save found")
    return {"ok": True}


@router.get("/export")
async def export_life(engine: LifeEngine = Depends(get_engine)):
    """Download the current life as a JSON file."""
    return Response(
        content=engine.export_text(),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="minilife-save.json"'},
    )


@router.post("/import")
async def import_life(request: Request, engine: LifeEngine = Depends(get_engine)):
    """Replace the current life with an uploaded save (raw JSON body)."""
    text = await request.body()
    return respond(engine, engine.import_text(text))
