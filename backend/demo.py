"""Create demo save slots for development/testing."""

import random

from backend import storage
from minilife import LifeEngine

DEMO_LIVES = [
    {"slot": "demo-child", "name": "Mia", "seed": 7, "years": 9, "activities": ["read"]},
    {"slot": "demo-adult", "name": "Henry", "seed": 42, "years": 24, "activities": ["study", "study"], "job": "cashier"},
]


def create_demo_data() -> list[str]:
    """Write the demo lives into their save slots. Returns the slots written."""
    slots = []
    for demo in DEMO_LIVES:
        engine = LifeEngine(rng=random.Random(demo["seed"]))
        engine.new_life(demo["name"])
        for _ in range(demo["years"]):
            engine.advance_year()
            for activity in demo["activities"]:
                engine.perform_activity(activity)
        if "job" in demo:
            engine.apply_for_job(demo["job"])
        slots.append(storage.write_save(demo["slot"], engine.export_text()))
    return slots
