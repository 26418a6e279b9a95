"""Save slots, one JSON file per named slot.

Slots hold the raw text produced by minilife.codec.dumps(); this module does
not decode them, so a corrupt slot is only detected when the engine loads it.
Slot names are slugified ("My Run" → "my-run.json").
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .core import saves_dir, slugify

logger = logging.getLogger(__name__)

AUTOSAVE_SLOT = "autosave"


def _slot_path(slot: str) -> Path:
    return saves_dir() / f"{slugify(slot)}.json"


def list_saves() -> list[dict[str, Any]]:
    """Summaries of every slot: slot, name, age, alive, saved_at."""
    results = []
    for path in sorted(saves_dir().glob("*.json")):
        summary: dict[str, Any] = {
            "slot": path.stem,
            "saved_at": datetime.fromtimestamp(path.stat().st_mtime, timezone.utc).isoformat(),
        }
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            logger.warning(f"Save slot '{path.stem}' is not valid JSON")
            data = None
        if isinstance(data, dict):
            summary["name"] = data.get("name", "")
            summary["age"] = data.get("age", 0)
            summary["alive"] = data.get("alive", True)
        results.append(summary)
    return results


def read_save(slot: str) -> str:
    """Raw text of a slot. Raises FileNotFoundError if it does not exist."""
    path = _slot_path(slot)
    if not path.is_file():
        raise FileNotFoundError(f"No save in slot '{slot}'")
    return path.read_text()


def write_save(slot: str, text: str) -> str:
    """Write a slot (overwriting). Returns the slug it was stored under."""
    path = _slot_path(slot)
    path.write_text(text)
    return path.stem


def delete_save(slot: str) -> bool:
    path = _slot_path(slot)
    if not path.is_file():
        return False
    path.unlink()
    return True
