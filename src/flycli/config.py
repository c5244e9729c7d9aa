"""Configuration management for Fly CLI.

Configuration is assembled from three layers on top of built-in defaults,
in strictly increasing precedence: environment variables, the config file
(``~/.fly/config.yml``) and command-line flags.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

DEFAULT_API_BASE_URL = "https://api.fly.io"

CONFIG_DIR_NAME = ".fly"
CONFIG_FILE_NAME = "config.yml"

# Environment variable -> option. Earlier entries win for the same option.
ENV_VARS: dict[str, str] = {
    "FLY_API_BASE_URL": "api_base_url",
    "FLY_ACCESS_TOKEN": "access_token",
    "FLY_API_TOKEN": "access_token",
    "FLY_ORG": "organization",
    "FLY_APP": "app_name",
    "FLY_VERBOSE": "verbose",
    "FLY_LOG_GQL_ERRORS": "log_gql_errors",
    "FLY_JSON": "json_output",
    "FLY_UPDATE_CHECK": "update_check",
}

# Config file key -> option.
FILE_KEYS: dict[str, str] = {
    "api_base_url": "api_base_url",
    "access_token": "access_token",
    "org": "organization",
    "app": "app_name",
    "verbose": "verbose",
    "log_gql_errors": "log_gql_errors",
    "json": "json_output",
    "update_check": "update_check",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Config:
    """Resolved configuration for a single invocation."""

    api_base_url: str = DEFAULT_API_BASE_URL
    access_token: str = ""
    organization: str = ""
    app_name: str = ""
    verbose: bool = False
    log_gql_errors: bool = False
    json_output: bool = False
    update_check: bool = True

    def apply_env(self, env: Mapping[str, str]) -> Config:
        """Apply recognized environment variables.

        Args:
            env: The process environment (or any mapping standing in for it).

        Returns:
            A new config with the environment layer applied.

        Raises:
            ConfigError: If a boolean variable holds an unrecognized value.
        """
        changes: dict[str, Any] = {}
        for var, option in ENV_VARS.items():
            if var not in env or option in changes:
                continue
            changes[option] = _coerce(option, env[var], source=var)
        return replace(self, **changes)

    def apply_file(self, data: Mapping[str, Any]) -> Config:
        """Apply recognized keys from a parsed config file.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        changes: dict[str, Any] = {}
        for key, option in FILE_KEYS.items():
            if key in data and data[key] is not None:
                changes[option] = _coerce(option, data[key], source=f"config key {key!r}")
        return replace(self, **changes)

    def apply_flags(self, flags: Mapping[str, Any]) -> Config:
        """Apply command-line flags that were explicitly set.

        Flags are keyed by option name. ``None`` means the flag was not given
        and never overwrites; an explicit empty string does.
        """
        changes = {name: flags[name] for name in option_names() if flags.get(name) is not None}
        return replace(self, **changes)


def option_names() -> list[str]:
    """Names of all recognized configuration options."""
    return [f.name for f in fields(Config)]


def _coerce(option: str, value: Any, source: str) -> Any:
    expected = type(getattr(Config(), option))

    if expected is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
        raise ConfigError(f"Invalid boolean value {value!r} for {source}")

    if not isinstance(value, str):
        raise ConfigError(f"Invalid value {value!r} for {source}: expected a string")
    return value


def read_config_file(path: Path) -> dict[str, Any] | None:
    """Read and parse the YAML config file.

    Args:
        path: Path to the config file.

    Returns:
        The parsed mapping, or None if the file doesn't exist.

    Raises:
        ConfigError: If the file can't be read or isn't a YAML mapping.
    """
    if not path.exists():
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file {path}: expected a mapping at the top level")
    return data


def assemble_config(env: Mapping[str, str], path: Path | None, flags: Mapping[str, Any]) -> Config:
    """Build the configuration from defaults, environment, file and flags.

    Args:
        env: Environment variables.
        path: Path to the config file. A missing file is not an error.
        flags: Explicitly set command-line flags, keyed by option name.

    Returns:
        The assembled configuration.

    Raises:
        ConfigError: If the config file is malformed or a value is invalid.
    """
    config = Config().apply_env(env)

    data = read_config_file(path) if path is not None else None
    if data is not None:
        config = config.apply_file(data)

    return config.apply_flags(flags)
