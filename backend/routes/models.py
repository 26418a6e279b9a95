"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel

from minilife.models import Theme


class NewLifeBody(BaseModel):
    name: str | None = None


class InteractBody(BaseModel):
    action: str


class UpdateLifeSettings(BaseModel):
    theme: Theme | None = None
    autosave: bool | None = None
