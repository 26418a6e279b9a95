"""Relationship endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from backend.session import get_engine, respond
from minilife import LifeEngine

from .models import InteractBody

router = APIRouter()


@router.get("/life/people")
async def list_people(engine: LifeEngine = Depends(get_engine)):
    """List every relation, living or not, in creation order."""
    return engine.state.people


@router.get("/life/people/{person_id}")
async def get_person(person_id: str, engine: LifeEngine = Depends(get_engine)):
    """Get a single relation with their interaction history."""
    person = engine.state.find_person(person_id)
    if not person:
        raise HTTPException(404, "Person not found")
    return person


@router.post("/life/people/{person_id}/interact")
async def interact(person_id: str, body: InteractBody, engine: LifeEngine = Depends(get_engine)):
    """Talk, compliment, gift, spend_time, insult, or ask_for_money."""
    return respond(engine, engine.interact_with_person(person_id, body.action))
