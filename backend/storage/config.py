"""Global app configuration (rule tunables and settings for new lives)."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from minilife.models import LifeRules, Settings

from .core import data_dir
from .saves import AUTOSAVE_SLOT

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    rules: LifeRules = Field(default_factory=LifeRules)
    default_settings: Settings = Field(default_factory=Settings)
    autosave_slot: str = Field(default=AUTOSAVE_SLOT, min_length=1)


_CONFIG_DEFAULTS: dict[str, Any] = AppConfig().model_dump()


def _config_path() -> Path:
    return data_dir() / "config.json"


def _merge_known(target: dict[str, Any], values: Any) -> None:
    """Copy keys of `values` that already exist in `target`."""
    if not isinstance(values, dict):
        return
    for key, value in values.items():
        if key in target:
            target[key] = value


def _merge(config: dict[str, Any], fields: dict[str, Any]) -> None:
    _merge_known(config["rules"], fields.get("rules"))
    _merge_known(config["default_settings"], fields.get("default_settings"))
    if "autosave_slot" in fields:
        config["autosave_slot"] = fields["autosave_slot"]


def _defaults() -> dict[str, Any]:
    return json.loads(json.dumps(_CONFIG_DEFAULTS))


def get_config() -> dict[str, Any]:
    """Read config, returning defaults merged with stored values.

    A hand-edited section that no longer validates falls back to its defaults.
    """
    config = _defaults()
    path = _config_path()
    if path.is_file():
        stored = json.loads(path.read_text())
        if isinstance(stored, dict):
            _merge(config, stored)
    defaults = _defaults()
    for section in AppConfig.model_fields:
        try:
            AppConfig.model_validate({**defaults, section: config[section]})
        except ValidationError:
            logger.warning(f"Ignoring invalid '{section}' in {path}")
            config[section] = defaults[section]
    return config


def update_config(fields: dict[str, Any]) -> dict[str, Any]:
    """Merge fields into config and persist. Returns full config.

    rules and default_settings merge key-by-key; unknown keys are dropped.
    The merged result is validated through AppConfig before writing, so a
    rejected update raises ValidationError and leaves the file untouched.
    """
    config = get_config()
    _merge(config, fields)
    config = AppConfig.model_validate(config).model_dump()
    _config_path().write_text(json.dumps(config, indent=2))
    return config


def get_rules() -> LifeRules:
    return LifeRules.model_validate(get_config()["rules"])
