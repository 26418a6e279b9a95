"""Life endpoints: state, new life, ageing, activities, jobs, achievements."""

from fastapi import APIRouter, Depends

from backend.session import get_engine, respond
from minilife import LifeEngine

from .models import NewLifeBody, UpdateLifeSettings

router = APIRouter()


@router.get("/life")
async def get_life(engine: LifeEngine = Depends(get_engine)):
    """Full current state of the life."""
    return engine.state


@router.post("/life", status_code=201)
async def new_life(body: NewLifeBody, engine: LifeEngine = Depends(get_engine)):
    """Start a fresh life (optionally named), keeping the current settings."""
    return respond(engine, engine.new_life(body.name))


@router.post("/life/age-up")
async def age_up(engine: LifeEngine = Depends(get_engine)):
    """Advance the life by one year."""
    return respond(engine, engine.advance_year())


@router.get("/activities")
async def list_activities(engine: LifeEngine = Depends(get_engine)):
    """List the activity catalog."""
    return engine.catalog.activities


@router.post("/life/activities/{activity_id}")
async def perform_activity(activity_id: str, engine: LifeEngine = Depends(get_engine)):
    """Do an activity from the catalog."""
    return respond(engine, engine.perform_activity(activity_id))


@router.get("/jobs")
async def list_jobs(engine: LifeEngine = Depends(get_engine)):
    """List the job catalog."""
    return engine.catalog.jobs


@router.post("/life/jobs/{job_id}")
async def apply_for_job(job_id: str, engine: LifeEngine = Depends(get_engine)):
    """Apply for a job; 409 when not qualified or too young."""
    return respond(engine, engine.apply_for_job(job_id))


@router.delete("/life/job")
async def quit_job(engine: LifeEngine = Depends(get_engine)):
    """Quit the current job."""
    return respond(engine, engine.quit_job())


@router.get("/life/achievements")
async def list_achievements(engine: LifeEngine = Depends(get_engine)):
    """Unlocked achievement keys."""
    return [key for key, granted in engine.state.achievements.items() if granted]


@router.patch("/life/settings")
async def update_life_settings(body: UpdateLifeSettings, engine: LifeEngine = Depends(get_engine)):
    """Update theme / autosave for this life."""
    return respond(engine, engine.update_settings(body.theme, body.autosave))
