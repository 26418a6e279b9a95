"""Life simulation engine: the only way to change a PlayerState.

LifeEngine owns one PlayerState plus the collaborators it consults (random
source, catalog, event selector, rules). Callers read `engine.state` (a deep
copy) and change it only through the operations below. Each operation
returns an Outcome and runs achievement evaluation on success, so the
milestone and mortality checks cannot be bypassed.

advance_year() order (fixed):
  1. age + 1
  2. drift: happiness -2..+3, health -4..+2, smarts 0..+2, looks -2..+1
  3. salary, if employed
  4. random life event with probability rules.event_chance
  5. tick every living relation (drift, ageing, death)
  6. old-age mortality roll past rules.elder_age
  7. bankruptcy below rules.bankruptcy_floor (deterministic, overrides 6)
  8. achievements

Failures are LifeError subclasses raised inside an operation and turned into
Outcome(ok=False, code=...) at its boundary. Apart from the log entries
written for failed job applications, a failed operation leaves the state
untouched.
"""

import functools
import logging
from typing import Any, Callable

from pydantic import ValidationError

from minilife import codec
from minilife.achievements import ACHIEVEMENTS, Predicate, evaluate_achievements
from minilife.catalog import Catalog, load_catalog
from minilife.errors import (
    AlreadyDeceasedError,
    InvalidInput,
    LifeError,
    NotQualifiedError,
    PersonDeceasedError,
    TooYoungError,
    UnemployedError,
)
from minilife.events import EventSelector
from minilife.models import Delta, LifeRules, Outcome, PlayerState, Settings
from minilife.people import generate_family, normalize_action, resolve_interaction, tick_person
from minilife.rng import RandomSource, chance, clamp, make_rng, new_seed, roll

logger = logging.getLogger(__name__)

BANKRUPTCY_CAUSE = "You bankrupted and left no way forward."


def _operation(method: Callable[..., Outcome]) -> Callable[..., Outcome]:
    @functools.wraps(method)
    def wrapper(self: "LifeEngine", *args: Any, **kwargs: Any) -> Outcome:
        try:
            return method(self, *args, **kwargs)
        except LifeError as e:
            logger.debug(f"{method.__name__} failed ({e.code}): {e}")
            return Outcome(ok=False, code=e.code, message=str(e))
    return wrapper


def apply_delta(state: PlayerState, delta: Delta) -> None:
    """Apply every field of `delta`; bounded stats are clamped, money is not."""
    state.happiness = clamp(state.happiness + delta.happiness)
    state.health = clamp(state.health + delta.health)
    state.smarts = clamp(state.smarts + delta.smarts)
    state.looks = clamp(state.looks + delta.looks)
    state.money += delta.money


def create_life(
    rng: RandomSource,
    catalog: Catalog,
    rules: LifeRules,
    name: str | None = None,
    seed: int | None = None,
) -> PlayerState:
    """A newborn with a generated family and a birth log entry."""
    state = PlayerState(name=name or catalog.random_name(rng))
    if seed is not None:
        state.seed = seed
    state.people = generate_family(rng, catalog)
    state.add_log("You were born.", rules.log_cap)
    return state


class LifeEngine:
    def __init__(
        self,
        state: PlayerState | None = None,
        *,
        rng: RandomSource | None = None,
        catalog: Catalog | None = None,
        events: EventSelector | None = None,
        rules: LifeRules | None = None,
        achievements: dict[str, Predicate] | None = None,
    ) -> None:
        self.catalog = catalog or load_catalog()
        self.events = events or EventSelector.from_file()
        self.rules = rules or LifeRules()
        self.achievements = dict(ACHIEVEMENTS if achievements is None else achievements)
        if state is None:
            seed = new_seed()
            self.rng = rng or make_rng(seed)
            state = create_life(self.rng, self.catalog, self.rules, seed=seed)
        else:
            self.rng = rng or make_rng(state.seed)
        self._state = state

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlayerState:
        return self._state.model_copy(deep=True)

    def export_text(self) -> str:
        return codec.dumps(self._state)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _log(self, text: str) -> None:
        self._state.add_log(text, self.rules.log_cap)

    def _require_alive(self) -> PlayerState:
        if not self._state.alive:
            raise AlreadyDeceasedError("You're no longer alive.")
        return self._state

    def _die(self, cause: str) -> None:
        self._state.alive = False
        self._log(f"Death: {cause}")
        logger.info(f"{self._state.name} died at age {self._state.age}: {cause}")

    def _finish(self, message: str) -> Outcome:
        granted = evaluate_achievements(self._state, self.rules, self.achievements)
        return Outcome(ok=True, message=message, achievements=granted)

    def _replace_state(self, state: PlayerState) -> None:
        overflow = len(state.log) - self.rules.log_cap
        if overflow > 0:
            del state.log[:overflow]
        self._state = state

    # ------------------------------------------------------------------
    # Yearly tick
    # ------------------------------------------------------------------

    @_operation
    def advance_year(self) -> Outcome:
        state = self._require_alive()
        rng, rules = self.rng, self.rules

        state.age += 1

        state.happiness = clamp(state.happiness + roll(rng, -2, 3))
        state.health = clamp(state.health + roll(rng, -4, 2))
        state.smarts = clamp(state.smarts + roll(rng, 0, 2))
        state.looks = clamp(state.looks + roll(rng, -2, 1))

        if state.job is not None:
            state.money += state.job.pay
            self._log(f"Worked as {state.job.title} and earned ${state.job.pay}.")

        if chance(rng, rules.event_chance):
            event = self.events.pick(state.age, rng)
            apply_delta(state, event.delta)
            self._log(event.text)

        for person in state.people:
            if tick_person(person, rng, rules):
                self._log(f"{person.name} died at age {person.age}.")
                state.happiness = clamp(state.happiness - roll(rng, 3, 10))

        cause = None
        if state.age > rules.elder_age:
            if chance(rng, (state.age - rules.elder_offset) / rules.elder_divisor):
                cause = f"At {state.age}, your body gave out."
        if state.money < rules.bankruptcy_floor:
            cause = BANKRUPTCY_CAUSE
        if cause is not None:
            self._die(cause)

        return self._finish(f"You are now {state.age}.")

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------

    @_operation
    def perform_activity(self, activity_id: str) -> Outcome:
        state = self._require_alive()
        activity = self.catalog.get_activity(activity_id)
        if activity is None:
            raise InvalidInput(f"Unknown activity: {activity_id}")
        apply_delta(state, activity.delta)
        text = activity.desc or f"You did {activity.title}."
        self._log(text)
        return self._finish(text)

    @_operation
    def apply_for_job(self, job_id: str) -> Outcome:
        state = self._require_alive()
        job = self.catalog.get_job(job_id)
        if job is None:
            raise InvalidInput(f"Unknown job: {job_id}")
        if job.requires_smarts is not None and state.smarts < job.requires_smarts:
            self._log(f"You failed to qualify for {job.title}.")
            raise NotQualifiedError("You lack the smarts for that job.")
        if state.age < self.rules.min_working_age:
            self._log(f"You are too young for {job.title}.")
            raise TooYoungError("Too young to work.")
        state.job = job.model_copy()
        text = f"You got a job as {job.title}."
        self._log(text)
        logger.info(f"{state.name} is now working as {job.title}")
        return self._finish(text)

    @_operation
    def quit_job(self) -> Outcome:
        state = self._require_alive()
        if state.job is None:
            raise UnemployedError("You don't have a job.")
        text = f"You quit your job as {state.job.title}."
        state.job = None
        self._log(text)
        return self._finish(text)

    @_operation
    def interact_with_person(self, person_id: str, action: str) -> Outcome:
        state = self._require_alive()
        person = state.find_person(person_id)
        if person is None:
            raise InvalidInput(f"Unknown person: {person_id}")
        canonical = normalize_action(action)
        if canonical is None:
            raise InvalidInput(f"Unknown action: {action}")
        if not person.alive:
            raise PersonDeceasedError(f"{person.name} has passed away.")

        result = resolve_interaction(person, canonical, state.money, self.rng)
        person.relationship = clamp(person.relationship + result.closeness)
        state.happiness = clamp(state.happiness + result.happiness)
        state.money += result.money
        person.history.append(f"{result.text} (Age {state.age})")
        self._log(result.text)
        return self._finish(result.text)

    # ------------------------------------------------------------------
    # Session management
    # ------------------------------------------------------------------

    @_operation
    def update_settings(self, theme: str | None = None, autosave: bool | None = None) -> Outcome:
        fields = self._state.settings.model_dump()
        if theme is not None:
            fields["theme"] = theme
        if autosave is not None:
            fields["autosave"] = autosave
        try:
            self._state.settings = Settings.model_validate(fields)
        except ValidationError as e:
            raise InvalidInput(f"Invalid settings: {e.error_count()} error(s)") from e
        return Outcome(ok=True, message="Settings updated.")

    @_operation
    def new_life(self, name: str | None = None) -> Outcome:
        seed = new_seed()
        state = create_life(self.rng, self.catalog, self.rules, name=name, seed=seed)
        state.settings = self._state.settings.model_copy()
        self._state = state
        logger.info(f"New life started for {state.name}")
        return self._finish(f"{state.name} was born.")

    @_operation
    def load(self, record: Any) -> Outcome:
        """Replace the state with a decoded record; on failure nothing changes."""
        state = codec.from_record(record)
        self._replace_state(state)
        logger.info(f"Loaded life of {state.name} (age {state.age})")
        return Outcome(ok=True, message="Loaded.")

    @_operation
    def import_text(self, text: str | bytes) -> Outcome:
        state = codec.loads(text)
        self._replace_state(state)
        logger.info(f"Imported life of {state.name} (age {state.age})")
        return Outcome(ok=True, message="Imported save file.")
