"""Milestone achievements.

Each achievement is a key plus a predicate over (state, rules). Evaluation
grants every not-yet-granted key whose predicate holds and logs
"Achievement unlocked: <key>". Flags only go False -> True, so evaluation
order never matters and re-running it is harmless.
"""

from typing import Callable

from minilife.models import LifeRules, PlayerState

Predicate = Callable[[PlayerState, LifeRules], bool]

ACHIEVEMENTS: dict[str, Predicate] = {
    "Age 18": lambda state, rules: state.age >= rules.adult_age,
    "First Job": lambda state, rules: state.job is not None,
    "Wealthy": lambda state, rules: state.money >= rules.wealthy_threshold,
}


def register_achievement(key: str, predicate: Predicate) -> None:
    """Add a predicate to the default registry.

    Engines copy the registry when they are built, so a registration only
    affects engines created afterwards.
    """
    ACHIEVEMENTS[key] = predicate


def evaluate_achievements(
    state: PlayerState,
    rules: LifeRules,
    achievements: dict[str, Predicate] | None = None,
) -> list[str]:
    """Grant newly satisfied achievements. Returns the keys granted this call."""
    granted: list[str] = []
    for key, predicate in (ACHIEVEMENTS if achievements is None else achievements).items():
        if state.achievements.get(key):
            continue
        if predicate(state, rules):
            state.achievements[key] = True
            state.add_log(f"Achievement unlocked: {key}", rules.log_cap)
            granted.append(key)
    return granted
