"""
Planning assumptions, layered.

Sources, lowest to highest priority:
    1. Schema defaults (``PathwiseConfig``) plus any caller-supplied defaults
    2. A YAML or JSON file
    3. ``PATHWISE_<SECTION>__<KEY>`` environment variables

Example:
    config = Config("~/.pathwise/config.yaml")
    config.get("house.mortgage_rate")          # raw merged value
    house = config.validated().house           # typed HouseSettings
"""

import json
import os
from typing import Any

import yaml
from pydantic import ValidationError

from .config_schema import PathwiseConfig
from .exceptions import ConfigurationError

ENV_PREFIX = "PATHWISE_"
_MISSING = object()


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> None:
    """Merge ``overlay`` into ``base`` in place; nested mappings merge key by key."""
    for key, value in overlay.items():
        existing = base.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            _deep_merge(existing, value)
        else:
            base[key] = value


def _read_file(path: str) -> dict[str, Any]:
    suffix = os.path.splitext(path)[1].lower()
    if suffix not in (".yaml", ".yml", ".json"):
        raise ConfigurationError(f"Unsupported config file type: {path}")
    try:
        with open(path) as f:
            data = json.load(f) if suffix == ".json" else yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not parse config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")
    return data


def _env_overrides(prefix: str) -> dict[str, Any]:
    """Nested mapping from ``<prefix>A__B=value`` variables (values stay strings)."""
    overrides: dict[str, Any] = {}
    if not prefix:
        return overrides
    for name, value in os.environ.items():
        if not name.startswith(prefix):
            continue
        *sections, leaf = name[len(prefix) :].lower().split("__")
        node = overrides
        for section in sections:
            node = node.setdefault(section, {})
        node[leaf] = value
    return overrides


class Config:
    """Merged configuration with dot-path access.

    Values read through ``get`` are raw: an environment override arrives as
    a string. ``validated()`` coerces and checks everything against the
    schema.
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = ENV_PREFIX,
        defaults: dict[str, Any] | None = None,
    ):
        """
        Args:
            config_file: YAML or JSON file; must exist when given.
            env_prefix: Environment variable prefix; empty disables env overrides.
            defaults: Extra defaults layered over the schema defaults.
        """
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.env_prefix = env_prefix or ""

        self.config_data: dict[str, Any] = PathwiseConfig().model_dump(mode="json")
        _deep_merge(self.config_data, defaults or {})
        if self.config_file:
            if not os.path.exists(self.config_file):
                raise ConfigurationError(f"Config file not found: {self.config_file}")
            _deep_merge(self.config_data, _read_file(self.config_file))
        _deep_merge(self.config_data, _env_overrides(self.env_prefix))

    def get(self, key_path: str, default: Any = None) -> Any:
        """Value at ``key_path`` (e.g. ``"roadmap.investment_return"``), or ``default``."""
        node: Any = self.config_data
        for key in key_path.split("."):
            node = node.get(key, _MISSING) if isinstance(node, dict) else _MISSING
            if node is _MISSING:
                return default
        return node

    def set(self, key_path: str, value: Any) -> None:
        *sections, leaf = key_path.split(".")
        node = self.config_data
        for section in sections:
            node = node.setdefault(section, {})
        node[leaf] = value

    def validated(self) -> PathwiseConfig:
        """The merged data as a ``PathwiseConfig``; raises ``ConfigurationError`` if invalid."""
        try:
            return PathwiseConfig.model_validate(self.config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
