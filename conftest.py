import os
import random
import shutil
from pathlib import Path

import pytest

TEST_DATA_DIR = Path("data-tests")

# The module-level app in backend.app must not touch ./data during collection
os.environ.setdefault("DATA_DIR", str(TEST_DATA_DIR))

from backend import storage  # noqa: E402


@pytest.fixture(autouse=True)
def clean_test_data():
    """Wipe and re-init data-tests/ before every test."""
    if TEST_DATA_DIR.exists():
        shutil.rmtree(TEST_DATA_DIR)
    storage.init_storage(TEST_DATA_DIR)
    yield
    # leave data-tests around after tests for inspection; CI can ignore it


class FixedRandom(random.Random):
    """Random source with pinned draws.

    random() always returns `value`; randint() returns the low end, the high
    end, or the middle of its range; choice() returns element `index`.
    """

    def __init__(self, value: float = 0.5, pick: str = "low", index: int = 0):
        super().__init__(0)
        self.value = value
        self.pick = pick
        self.index = index

    def random(self) -> float:
        return self.value

    def randint(self, a: int, b: int) -> int:
        if self.pick == "high":
            return b
        if self.pick == "mid":
            return (a + b) // 2
        return a

    def choice(self, seq):
        return seq[min(self.index, len(seq) - 1)]


@pytest.fixture
def fixed_random():
    """Factory for FixedRandom sources."""
    return FixedRandom
