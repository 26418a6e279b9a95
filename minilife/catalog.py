"""Static reference data: jobs, activities, and the name list.

Loaded from a presets directory (default: minilife/presets):
  jobs.json        [{id, title, pay, requires_smarts?}]
  activities.json  [{id, title, desc, delta: {happiness?, health?, smarts?, looks?, money?}}]
  names.txt        "# Section" headers followed by one name per line

The engine only reads a Catalog; it never mutates one.
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field

from minilife.models import Activity, Job
from minilife.rng import RandomSource

PRESETS_DIR = Path(__file__).parent / "presets"

_FALLBACK_NAME = "Alex"


class Catalog(BaseModel):
    jobs: list[Job] = Field(default_factory=list)
    activities: list[Activity] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)

    def get_job(self, job_id: str) -> Job | None:
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None

    def get_activity(self, activity_id: str) -> Activity | None:
        for activity in self.activities:
            if activity.id == activity_id:
                return activity
        return None

    def random_name(self, rng: RandomSource) -> str:
        if not self.names:
            return _FALLBACK_NAME
        return rng.choice(self.names)


def _load_name_sections(path: Path) -> dict[str, list[str]]:
    sections: dict[str, list[str]] = {}
    current: str | None = None
    if path.is_file():
        for line in path.read_text().splitlines():
            line = line.strip()
            if line.startswith("# "):
                current = line[2:].strip().lower()
                sections[current] = []
            elif line and current is not None:
                sections[current].append(line)
    return sections


def load_catalog(presets_dir: Path | None = None) -> Catalog:
    """Read jobs, activities and names from a presets directory.

    Missing files yield empty tables rather than errors.
    """
    directory = presets_dir or PRESETS_DIR
    jobs_path = directory / "jobs.json"
    activities_path = directory / "activities.json"

    jobs = json.loads(jobs_path.read_text()) if jobs_path.is_file() else []
    activities = json.loads(activities_path.read_text()) if activities_path.is_file() else []
    names: list[str] = []
    for section in _load_name_sections(directory / "names.txt").values():
        names.extend(section)

    return Catalog.model_validate({"jobs": jobs, "activities": activities, "names": names})
