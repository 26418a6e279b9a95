"""File-based JSON storage for save slots and app config.

Data layout:
  data/
    saves/
      <slot>.json    A serialized life (minilife.codec.dumps output)
    config.json      App settings (rule tunables, default settings, autosave slot)

Slug rules: slot name → Unicode normalize → strip non-ASCII → lowercase →
replace non-alnum runs with hyphen → strip leading/trailing hyphens.

Config: get_config() returns defaults merged with stored values.
update_config() applies partial updates: rules and default_settings merged
key-by-key, scalars overwritten.
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    init_storage,
    saves_dir,
    slugify,
)

from .saves import (  # noqa: F401
    AUTOSAVE_SLOT,
    delete_save,
    list_saves,
    read_save,
    write_save,
)

from .config import (  # noqa: F401
    get_config,
    get_rules,
    update_config,
)
