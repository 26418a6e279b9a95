"""Health check and global settings endpoints."""

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from backend import storage

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/settings")
async def get_settings():
    """Get global app settings (rules, default settings, autosave slot)."""
    return storage.get_config()


@router.patch("/settings")
async def update_settings(body: dict):
    """Update global app settings (partial merge). Rule changes apply to new apps."""
    try:
        return storage.update_config(body)
    except ValidationError as e:
        raise HTTPException(400, f"Invalid settings: {e.error_count()} error(s)")
