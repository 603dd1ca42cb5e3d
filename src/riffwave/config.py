"""
Configuration loader merging defaults, config files, environment, and CLI args.
"""

from __future__ import annotations

import argparse
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Mapping, MutableMapping, Tuple

from .decoder import DEFAULT_BLOCK_SIZE, DEFAULT_BUFFER_SIZE
from .logging_utils import LogFormat

DEFAULT_CONFIG_FILENAME = "riffwave.toml"


@dataclass
class AppConfig:
    """High-level application configuration container."""

    log_format: str = "human"
    json_log: bool = False
    block_size: int = DEFAULT_BLOCK_SIZE
    buffer_size: int = DEFAULT_BUFFER_SIZE
    clamp_payload: bool = False
    extra: dict[str, Any] = field(default_factory=dict)


def load_default_config() -> AppConfig:
    """Return default configuration for the CLI."""

    return AppConfig()


def load_config(
    args: argparse.Namespace | None = None,
    *,
    env: Mapping[str, str] | None = None,
    config_file: str | Path | None = None,
) -> AppConfig:
    """
    Load configuration merging defaults, config file, environment, then CLI.

    Precedence: CLI args > environment variables > config file > defaults.
    """

    defaults = load_default_config()
    config_data: dict[str, Any] = {
        key: getattr(defaults, key) for key in _known_fields()
    }
    extras: dict[str, Any] = {}

    resolved_config_path = _resolve_config_path(args, config_file)
    if resolved_config_path is not None:
        file_config, file_extras = _load_from_file(resolved_config_path)
        config_data.update(file_config)
        extras.update(file_extras)

    config_data.update(_load_from_env(env))
    config_data.update(_load_from_cli(args))

    if config_data.get("json_log"):
        config_data["log_format"] = LogFormat.JSON.value

    validated = _validate_config(config_data)
    if extras:
        validated["extra"] = extras

    return AppConfig(**validated)


def _known_fields() -> set[str]:
    return {f.name for f in fields(AppConfig) if f.init and f.name != "extra"}


def _resolve_config_path(
    args: argparse.Namespace | None, config_file: str | Path | None
) -> Path | None:
    candidate: str | Path | None = None
    if args is not None and getattr(args, "config", None):
        candidate = getattr(args, "config")
    elif config_file is not None:
        candidate = config_file

    if candidate is None:
        default_path = Path(DEFAULT_CONFIG_FILENAME)
        return default_path if default_path.exists() else None

    path = Path(candidate).expanduser()
    return path if path.exists() else None


def _load_from_file(path: Path) -> Tuple[dict[str, Any], dict[str, Any]]:
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError:
        return {}, {}

    return _partition_known(data)


def _parse_bool(value: Any) -> bool:
    return str(value).lower() in {"1", "true", "yes"}


ENV_KEY_MAP: dict[str, Tuple[str, Callable[[Any], Any]]] = {
    "RIFFWAVE_LOG_FORMAT": ("log_format", str),
    "RIFFWAVE_JSON_LOG": ("json_log", _parse_bool),
    "RIFFWAVE_BLOCK_SIZE": ("block_size", int),
    "RIFFWAVE_BUFFER_SIZE": ("buffer_size", int),
    "RIFFWAVE_CLAMP_PAYLOAD": ("clamp_payload", _parse_bool),
}


def _load_from_env(env: Mapping[str, str] | None) -> dict[str, Any]:
    source = env if env is not None else os.environ
    result: dict[str, Any] = {}
    for env_key, (config_key, caster) in ENV_KEY_MAP.items():
        if env_key in source and source[env_key] != "":
            result[config_key] = caster(source[env_key])
    return result


CLI_ATTR_MAP: dict[str, Tuple[str, Callable[[Any], Any]]] = {
    "log_format": ("log_format", str),
    "json_log": ("json_log", bool),
    "block_size": ("block_size", int),
    "buffer_size": ("buffer_size", int),
    "clamp": ("clamp_payload", bool),
    "clamp_payload": ("clamp_payload", bool),
}


def _load_from_cli(args: argparse.Namespace | None) -> dict[str, Any]:
    if args is None:
        return {}

    result: dict[str, Any] = {}
    for attr_name, (config_key, caster) in CLI_ATTR_MAP.items():
        if hasattr(args, attr_name):
            value = getattr(args, attr_name)
            if value is None:
                continue
            result[config_key] = caster(value)
    return result


def _partition_known(data: Mapping[str, Any]) -> Tuple[dict[str, Any], dict[str, Any]]:
    known: dict[str, Any] = {}
    extras: dict[str, Any] = {}
    known_keys = _known_fields()
    for key, value in data.items():
        if key in known_keys:
            known[key] = value
        else:
            extras[key] = value
    return known, extras


def _validate_config(data: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    log_format = data.get("log_format")
    if log_format is not None and log_format not in {fmt.value for fmt in LogFormat}:
        raise ValueError("log_format must be 'human' or 'json'")

    block_size = data.get("block_size")
    if block_size is not None:
        data["block_size"] = _as_int("block_size", block_size)
        if data["block_size"] <= 0:
            raise ValueError("block_size must be positive")

    # buffering=1 means line buffering, which binary files do not support
    buffer_size = data.get("buffer_size")
    if buffer_size is not None:
        data["buffer_size"] = _as_int("buffer_size", buffer_size)
        if data["buffer_size"] < 2:
            raise ValueError("buffer_size must be at least 2")

    for key in ("json_log", "clamp_payload"):
        value = data.get(key)
        if value is not None and not isinstance(value, bool):
            raise ValueError(f"{key} must be true or false")

    return data


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be an integer") from exc
