"""Age-banded random life events.

events.json layout:
  tag_min_age  {tag: minimum age}      e.g. school 4, job 16, promotion 18
  fallback     {text, delta?}          neutral event substituted for gated draws
  bands        [{max_age, events}]     max_age inclusive; null = open-ended

An event template's delta maps a stat to either a fixed int or an inclusive
[lo, hi] range. Ranges are rolled when the event is drawn, so two draws of
the same template can carry different amounts.

Selection: band for the current age → uniform template in the band →
materialise → re-check the tag against tag_min_age. A gated event that
slipped through (e.g. a promotion reaching a 17-year-old) becomes the
fallback event.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

from minilife.catalog import PRESETS_DIR
from minilife.models import Delta, LifeEvent
from minilife.rng import RandomSource, roll

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_TEXT = "A quiet year passed."


class EventTemplate(BaseModel):
    text: str
    delta: dict[str, int | tuple[int, int]] = Field(default_factory=dict)
    tag: str | None = None

    def materialize(self, rng: RandomSource) -> LifeEvent:
        values: dict[str, int] = {}
        for stat, amount in self.delta.items():
            if isinstance(amount, tuple):
                values[stat] = roll(rng, amount[0], amount[1])
            else:
                values[stat] = amount
        return LifeEvent(text=self.text, delta=Delta(**values), tag=self.tag)


class AgeBand(BaseModel):
    max_age: int | None = None
    events: list[EventTemplate] = Field(default_factory=list)

    def covers(self, age: int) -> bool:
        return self.max_age is None or age <= self.max_age


class EventSelector:
    def __init__(
        self,
        bands: list[AgeBand],
        fallback: LifeEvent | None = None,
        tag_min_age: dict[str, int] | None = None,
    ) -> None:
        # open-ended band last
        self.bands = sorted(bands, key=lambda b: (b.max_age is None, b.max_age or 0))
        self.fallback = fallback or LifeEvent(text=DEFAULT_FALLBACK_TEXT)
        self.tag_min_age = dict(tag_min_age or {})

    @classmethod
    def from_file(cls, path: Path | None = None) -> "EventSelector":
        data = json.loads((path or PRESETS_DIR / "events.json").read_text())
        bands = [AgeBand.model_validate(b) for b in data.get("bands", [])]
        fallback = LifeEvent.model_validate(data["fallback"]) if data.get("fallback") else None
        return cls(bands, fallback=fallback, tag_min_age=data.get("tag_min_age"))

    def band_for(self, age: int) -> AgeBand | None:
        for band in self.bands:
            if band.covers(age):
                return band
        return None

    def is_allowed(self, tag: str | None, age: int) -> bool:
        if tag is None:
            return True
        return age >= self.tag_min_age.get(tag, 0)

    def validate(self, event: LifeEvent, age: int) -> LifeEvent:
        """Swap a tag-gated event the age does not qualify for with the fallback."""
        if not self.is_allowed(event.tag, age):
            logger.debug(f"Event '{event.text}' (tag={event.tag}) not allowed at age {age}")
            return self.fallback.model_copy(deep=True)
        return event

    def pick(self, age: int, rng: RandomSource) -> LifeEvent:
        band = self.band_for(age)
        if band is None or not band.events:
            return self.fallback.model_copy(deep=True)
        template = rng.choice(band.events)
        event = template.materialize(rng)
        logger.debug(f"Drew event '{event.text}' at age {age}")
        return self.validate(event, age)
