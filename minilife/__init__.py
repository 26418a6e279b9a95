"""MiniLife: a year-by-year life simulation engine.

Package layout:
  rng           injectable random source, bounded rolls, clamp
  errors        LifeError taxonomy (InvalidInput, PreconditionFailed, CodecFailure)
  models        pydantic models (PlayerState, Person, Delta, LifeRules, Outcome, ...)
  catalog       jobs / activities / names loaded from presets/
  events        age-banded event pools with tag gating
  people        family generation, yearly ticks, interaction resolver
  achievements  idempotent milestone predicates
  engine        LifeEngine, the only mutation entry point
  codec         state <-> record / JSON with a defaulting merge
"""

# Re-export the public surface so `import minilife` is enough for callers.

from .catalog import Catalog, load_catalog  # noqa: F401
from .codec import dumps, from_record, loads, to_record  # noqa: F401
from .engine import LifeEngine, apply_delta, create_life  # noqa: F401
from .errors import (  # noqa: F401
    AlreadyDeceasedError,
    CodecFailure,
    InvalidInput,
    LifeError,
    NotQualifiedError,
    PersonDeceasedError,
    PreconditionFailed,
    TooYoungError,
    UnemployedError,
)
from .events import EventSelector  # noqa: F401
from .models import (  # noqa: F401
    Activity,
    Delta,
    Job,
    LifeEvent,
    LifeRules,
    LogEntry,
    Outcome,
    Person,
    PlayerState,
    Settings,
)
