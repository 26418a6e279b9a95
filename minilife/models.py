"""Core domain models.

The engine, codec, catalog and HTTP layer all operate on these types.
Pydantic is used for validation and serialisation at every data boundary.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from minilife.rng import new_seed, uid

Relation = Literal["parent", "sibling", "grandparent", "friend"]

Theme = Literal["dark", "light"]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Delta(BaseModel):
    """Fixed-shape attribute change. Every field is applied; zero is a no-op."""

    model_config = ConfigDict(extra="ignore")

    happiness: int = 0
    health: int = 0
    smarts: int = 0
    looks: int = 0
    money: int = 0


class Job(BaseModel):
    """A catalog job. The player's `job` holds a copy of one of these."""

    id: str
    title: str
    pay: int
    requires_smarts: int | None = Field(
        default=None,
        validation_alias=AliasChoices("requires_smarts", "requiresSmarts"),
    )


class Activity(BaseModel):
    id: str
    title: str
    desc: str = ""
    delta: Delta = Field(default_factory=Delta)


class LifeEvent(BaseModel):
    """A materialised random event: concrete text and delta."""

    text: str
    delta: Delta = Field(default_factory=Delta)
    tag: str | None = None


class LogEntry(BaseModel):
    """A single entry in the player's chronological, capped life log."""

    id: str = Field(default_factory=uid)
    text: str
    age: int = 0
    timestamp: str = Field(
        default_factory=_now_iso,
        validation_alias=AliasChoices("timestamp", "ts"),
    )

    @field_validator("timestamp", mode="before")
    @classmethod
    def _epoch_millis(cls, value):
        # older saves stored milliseconds since the epoch
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000, timezone.utc).isoformat()
        return value


class Person(BaseModel):
    """A relation of the player (family member or friend)."""

    id: str = Field(default_factory=uid)
    name: str
    relation: Relation
    relationship: int = 50  # closeness 0–100
    age: int = 1
    alive: bool = True
    history: list[str] = Field(default_factory=list)


class Settings(BaseModel):
    theme: Theme = "dark"
    autosave: bool = True


class PlayerState(BaseModel):
    """The whole simulated life. Owned by exactly one LifeEngine."""

    name: str = ""
    age: int = 0
    happiness: int = 60
    health: int = 70
    smarts: int = 50
    looks: int = 50
    money: int = 100
    log: list[LogEntry] = Field(default_factory=list)
    job: Job | None = None
    alive: bool = True
    people: list[Person] = Field(default_factory=list)
    achievements: dict[str, bool] = Field(default_factory=dict)
    settings: Settings = Field(default_factory=Settings)
    seed: int = Field(default_factory=new_seed)

    def add_log(self, text: str, cap: int) -> LogEntry:
        """Append a log entry stamped with the current age; drop the oldest past `cap`."""
        entry = LogEntry(text=text, age=self.age)
        self.log.append(entry)
        if len(self.log) > cap:
            del self.log[: len(self.log) - cap]
        return entry

    def find_person(self, person_id: str) -> Person | None:
        for person in self.people:
            if person.id == person_id:
                return person
        return None


class LifeRules(BaseModel):
    """Tunable constants for drift, mortality, and thresholds.

    The death ramps are plain linear probabilities, kept configurable:
    probability = (age - offset) / divisor once age passes the threshold.
    """

    model_config = ConfigDict(extra="ignore")

    event_chance: float = Field(default=0.8, ge=0, le=1)
    person_death_age: int = Field(default=80, ge=0)
    person_death_offset: int = 75
    person_death_divisor: int = Field(default=200, gt=0)
    elder_age: int = Field(default=85, ge=0)
    elder_offset: int = 80
    elder_divisor: int = Field(default=200, gt=0)
    bankruptcy_floor: int = -5000
    min_working_age: int = Field(default=16, ge=0)
    adult_age: int = Field(default=18, ge=0)
    wealthy_threshold: int = 10000
    log_cap: int = Field(default=600, ge=1)


class Outcome(BaseModel):
    """Result of one engine operation."""

    ok: bool
    code: str | None = None  # LifeError.code when ok is False
    message: str = ""
    achievements: list[str] = Field(default_factory=list)  # newly granted
