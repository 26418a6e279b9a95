"""FastAPI API endpoints under /api.

Endpoint groups: settings + health, life (state, ageing, activities, jobs,
achievements, per-life settings), people (relations and interactions), and
saves (slots, export, import). Every mutation goes through the app's
LifeEngine; responses to engine operations are {"outcome": ..., "state": ...}.
"""

from fastapi import APIRouter

from .life import router as life_router
from .people import router as people_router
from .saves import router as saves_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(life_router)
router.include_router(people_router)
router.include_router(saves_router)
