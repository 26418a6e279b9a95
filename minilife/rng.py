"""Random source, bounded rolls, and clamping.

Every roll in the engine goes through an injected source with the
random.Random interface (random(), randint(), choice()). Passing a seeded
random.Random, or a subclass with scripted draws, makes a session
reproducible.
"""

import random
import uuid
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")

STAT_MIN = 0
STAT_MAX = 100


class RandomSource(Protocol):
    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def make_rng(seed: int | None = None) -> random.Random:
    return random.Random(seed)


def new_seed() -> int:
    return random.SystemRandom().randrange(2**32)


def clamp(value: int, lo: int = STAT_MIN, hi: int = STAT_MAX) -> int:
    """Clamp an int into [lo, hi] (defaults to the 0–100 stat range)."""
    return max(lo, min(hi, value))


def roll(rng: RandomSource, lo: int, hi: int) -> int:
    """Inclusive integer roll. Accepts reversed bounds."""
    if lo > hi:
        lo, hi = hi, lo
    return rng.randint(lo, hi)


def chance(rng: RandomSource, probability: float) -> bool:
    """True with the given probability; <= 0 never fires, >= 1 always does."""
    if probability <= 0:
        return False
    return rng.random() < probability


def uid() -> str:
    return uuid.uuid4().hex
