from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from platformdirs import user_config_dir

from .errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "delve"
CONFIG_FILENAME = "engine.yaml"

# Environment variable override for the config file location
ENV_CONFIG_PATH = "DELVE_CONFIG"


@dataclass(frozen=True)
class EngineConfig:
    """Tunable engine rules.

    - sight_radius: Euclidean field-of-view radius of the actor.
    - max_hp: starting and maximum hit points.
    - pit_damage: hit points lost when falling into a pit.
    - curse_damage: hit points lost on every step onto cursed floor.
    - cursed_sight_radius: sight radius cap while standing on cursed floor.
    - log_capacity: number of messages the game log keeps.
    """

    sight_radius: int = 4
    max_hp: int = 20
    pit_damage: int = 10
    curse_damage: int = 1
    cursed_sight_radius: int = 3
    log_capacity: int = 5

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"{f.name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigError(f"{f.name} must be >= 0, got {value}")
        if self.max_hp <= 0:
            raise ConfigError("max_hp must be > 0")
        if self.log_capacity <= 0:
            raise ConfigError("log_capacity must be > 0")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EngineConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown config key %r", key)
                continue
            values[key] = value
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "EngineConfig":
        """Load configuration from a YAML file. Missing fields fall back to defaults."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        cfg = cls.from_dict(raw)
        logger.debug("Loaded engine config from %s: %s", path, cfg)
        return cfg

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Persist configuration to a YAML file."""
        with Path(path).open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=True)


def default_config_path() -> Path:
    override = os.getenv(ENV_CONFIG_PATH)
    if override:
        return Path(override)
    return Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME


def load_config(path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """Load the engine config.

    An explicit path must exist. Without one, the default location is tried
    and a missing file yields the built-in defaults.
    """
    if path is not None:
        return EngineConfig.from_yaml(path)
    candidate = default_config_path()
    if candidate.exists():
        return EngineConfig.from_yaml(candidate)
    logger.debug("No config at %s; using defaults", candidate)
    return EngineConfig()
