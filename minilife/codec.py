"""PlayerState <-> plain record / JSON text.

Record fields: name, age, happiness, health, smarts, looks, money, log[],
job, alive, people[], achievements{}, settings{}, seed.

Decoding is a defaulting merge, used for both saved and imported data:
  - missing or null top-level fields take PlayerState defaults
  - log / people that are not lists become []; bad entries are dropped
  - achievements / settings that are not objects take defaults; within
    settings each valid key is kept and each invalid one is defaulted
  - an unusable job becomes None (unemployed)
  - bounded stats and closeness are clamped to 0-100, ages floored
  - duplicate person ids are re-issued
Anything that cannot be salvaged (non-JSON text, a non-object top level, a
scalar of the wrong kind such as age "old") raises CodecFailure.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from minilife.errors import CodecFailure
from minilife.models import Job, LogEntry, Person, PlayerState, Settings
from minilife.rng import clamp, uid

logger = logging.getLogger(__name__)

_SCALAR_FIELDS = ("name", "age", "happiness", "health", "smarts", "looks", "money", "alive", "seed")

_BOUNDED_STATS = ("happiness", "health", "smarts", "looks")


def to_record(state: PlayerState) -> dict[str, Any]:
    return state.model_dump(mode="json")


def dumps(state: PlayerState) -> str:
    return json.dumps(to_record(state), indent=2)


def loads(text: str | bytes) -> PlayerState:
    try:
        obj = json.loads(text)
    except (ValueError, RecursionError, TypeError) as e:
        # ValueError covers JSONDecodeError, UnicodeDecodeError and oversized ints
        raise CodecFailure(f"Save data is not valid JSON: {e}") from e
    return from_record(obj)


def _log_entries(value: Any) -> list[LogEntry]:
    if not isinstance(value, list):
        return []
    entries = []
    for raw in value:
        try:
            entries.append(LogEntry.model_validate(raw))
        except ValidationError:
            logger.warning(f"Dropping malformed log entry: {raw!r}")
    return entries


def _people(value: Any) -> list[Person]:
    if not isinstance(value, list):
        return []
    people: list[Person] = []
    seen: set[str] = set()
    for raw in value:
        try:
            person = Person.model_validate(raw)
        except ValidationError:
            logger.warning(f"Dropping malformed person: {raw!r}")
            continue
        if person.id in seen:
            person.id = uid()
        seen.add(person.id)
        person.relationship = clamp(person.relationship)
        person.age = max(1, person.age)
        people.append(person)
    return people


def _job(value: Any) -> Job | None:
    if value is None:
        return None
    try:
        return Job.model_validate(value)
    except ValidationError:
        logger.warning(f"Dropping unusable job: {value!r}")
        return None


def _achievements(value: Any) -> dict[str, bool]:
    if not isinstance(value, dict):
        return {}
    return {str(k): v for k, v in value.items() if isinstance(v, bool)}


def _settings(value: Any) -> Settings:
    settings = Settings()
    if not isinstance(value, dict):
        return settings
    for key in Settings.model_fields:
        if key not in value:
            continue
        try:
            settings = Settings.model_validate({**settings.model_dump(), key: value[key]})
        except ValidationError:
            logger.warning(f"Ignoring invalid setting {key}={value[key]!r}")
    return settings


def from_record(obj: Any) -> PlayerState:
    """Build a PlayerState from an untrusted record, backfilling defaults."""
    if not isinstance(obj, dict):
        raise CodecFailure("Save data must be a JSON object")

    record: dict[str, Any] = {
        key: obj[key] for key in _SCALAR_FIELDS if obj.get(key) is not None
    }
    record["log"] = _log_entries(obj.get("log"))
    record["people"] = _people(obj.get("people"))
    record["job"] = _job(obj.get("job"))
    record["achievements"] = _achievements(obj.get("achievements"))
    record["settings"] = _settings(obj.get("settings"))

    try:
        state = PlayerState.model_validate(record)
    except ValidationError as e:
        raise CodecFailure(f"Save data has {e.error_count()} invalid field(s)") from e

    for stat in _BOUNDED_STATS:
        setattr(state, stat, clamp(getattr(state, stat)))
    state.age = max(0, state.age)
    return state
