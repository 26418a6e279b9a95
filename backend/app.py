import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from backend.routes import router
from backend import storage
from minilife import LifeEngine

load_dotenv(Path(__file__).parent.parent / ".env")

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"

logger = logging.getLogger(__name__)


def _start_engine() -> LifeEngine:
    """A fresh life with configured rules, resumed from the autosave slot if one exists."""
    config = storage.get_config()
    engine = LifeEngine(rules=storage.get_rules())
    engine.update_settings(**config["default_settings"])
    try:
        text = storage.read_save(config["autosave_slot"])
    except FileNotFoundError:
        return engine
    outcome = engine.import_text(text)
    if not outcome.ok:
        logger.warning(f"Ignoring unreadable autosave: {outcome.message}")
    return engine


def create_app(data_dir: Path | None = None, engine: LifeEngine | None = None) -> FastAPI:
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    storage.init_storage(resolved)

    app = FastAPI(title="MiniLife")
    app.state.engine = engine or _start_engine()
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
