"""
Configuration file loading.

Loads an optional ``hcpmirror.yaml`` and merges it over the built-in defaults.
"""

import copy
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from hcpmirror.config.resolver import resolve_config
from hcpmirror.exceptions import ConfigurationError

CONFIG_FILENAME = "hcpmirror.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "remote": {
        "bucket": "hcp-openaccess",
        "base_path": "HCP_1200",
        "region": "us-east-1",
    },
    "link": {
        "mode": "clone",
    },
    "logging": {
        "level": "INFO",
        "console_type": "plain",
    },
}


class Config:
    """hcpmirror configuration container with dict-like access."""

    def __init__(self, data: dict[str, Any], source: Path | None = None):
        self.data = data
        self.source = source
        # Convenience properties for common config sections
        self.remote = data.get("remote", {})
        self.link = data.get("link", {})
        self.logging = data.get("logging", {})

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split(".")
        value = self.data
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def __getitem__(self, key: str) -> Any:
        """Dict-like access: config['key'] or config['remote.bucket']."""
        if isinstance(key, str) and "." in key:
            return self.get(key)
        if key in self.data:
            value = self.data[key]
            if isinstance(value, dict):
                return Config(value)
            return value
        raise KeyError(f"Config key '{key}' not found")

    def __contains__(self, key: str) -> bool:
        """Check if key exists in config."""
        if isinstance(key, str) and "." in key:
            keys = key.split(".")
            value = self.data
            for k in keys:
                if not isinstance(value, dict) or k not in value:
                    return False
                value = value[k]
            return True
        return key in self.data

    def __iter__(self) -> "Iterator[str]":
        """Iterate over top-level keys."""
        return iter(self.data)

    def validate(self) -> None:
        """Validate configuration structure and content."""
        errors = []

        for section in ("remote", "link", "logging"):
            value = self.data.get(section)
            if value is not None and not isinstance(value, dict):
                errors.append(f"Configuration '{section}' must be a mapping, got {type(value).__name__}")

        if isinstance(self.remote, dict) and not self.remote.get("bucket"):
            errors.append("Configuration 'remote.bucket' must not be empty")

        if errors:
            raise ConfigurationError(errors)


def load_config(config_path: str | Path | None = None, project_dir: Path | None = None) -> Config:
    """
    Load hcpmirror configuration.

    An explicit ``config_path`` must exist. Otherwise ``hcpmirror.yaml`` in
    ``project_dir`` (default: current directory) is used when present, and
    the built-in defaults when not.

    Args:
        config_path: Explicit YAML config file
        project_dir: Directory searched for hcpmirror.yaml

    Returns:
        Config instance with defaults, file values and environment merged

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed
    """
    config_data = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is None:
        candidate = (project_dir or Path.cwd()) / CONFIG_FILENAME
        config_path = candidate if candidate.is_file() else None
    elif not Path(config_path).is_file():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    if config_path is not None:
        config_path = Path(config_path)
        file_data = _read_yaml(config_path)
        _merge_dict(config_data, file_data)

    config = Config(resolve_config(config_data), source=config_path)
    config.validate()
    return config


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                mark = getattr(e, "problem_mark", None)
                if mark is not None:
                    raise ConfigurationError(
                        f"Error parsing {path.name} at line {mark.line + 1}, column {mark.column + 1}: "
                        f"{getattr(e, 'problem', e)}"
                    ) from e
                raise ConfigurationError(f"Error parsing {path.name}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e.strerror or e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration must be a dictionary/mapping, got {type(data).__name__} in {path}"
        )
    return data


def _merge_dict(base: dict, override: dict):
    """Recursively merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_dict(base[key], value)
        else:
            base[key] = value
