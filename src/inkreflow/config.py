#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration file discovery and loading.

Render options can be kept in a configuration file so the command line stays
short. Supported sources, in discovery order:

- ``.inkreflow.toml``
- ``.inkreflow.yaml`` / ``.inkreflow.yml``
- ``.inkreflow.json``
- ``pyproject.toml`` with a ``[tool.inkreflow]`` table

Keys are :class:`~inkreflow.options.RenderOptions` field names. Environment
variables ``INKREFLOW_WIDTH`` and ``INKREFLOW_JUSTIFY`` override file values.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from inkreflow.constants import CONFIG_FILENAMES, ENV_PREFIX
from inkreflow.exceptions import ConfigError, ValidationError
from inkreflow.options import RenderOptions

logger = logging.getLogger(__name__)

# Environment variable suffix -> RenderOptions field
ENV_OVERRIDES = {"WIDTH": "max_width", "JUSTIFY": "justify"}

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.inkreflow]`` table of a pyproject.toml, or ``{}``."""
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", config_path=str(pyproject_path)) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", config_path=str(pyproject_path)) from e

    config = data.get("tool", {}).get("inkreflow", {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.inkreflow] section in {pyproject_path} must be a table, got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file from ``start_dir`` up to the root.

    In each directory the dedicated ``.inkreflow.*`` files are checked first,
    then a ``pyproject.toml`` that has a ``[tool.inkreflow]`` table.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError:
                logger.debug(f"Skipping unreadable {pyproject_path}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Return the first configuration file in the parents of ``start_dir`` or in the home directory."""
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path
    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration mapping from a TOML, YAML, JSON or pyproject.toml file.

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, malformed or not a mapping.

    Examples
    --------
        >>> config = load_config_file(".inkreflow.toml")
        >>> config.get("max_width")
        72

    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise ConfigError(
                f"Unsupported config file format: {ext}. Use .toml, .yaml or .json",
                config_path=str(config_path),
            )
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}", config_path=str(config_path)) from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}", config_path=str(config_path)) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}",
            config_path=str(config_path),
        )
    return config


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ValidationError(f"{name} must be a boolean, got {value!r}", parameter_name=name, parameter_value=value)


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect option overrides from ``INKREFLOW_*`` environment variables.

    Raises
    ------
    ValidationError
        If a variable holds a value of the wrong type.

    """
    environ = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}
    for suffix, field_name in ENV_OVERRIDES.items():
        name = f"{ENV_PREFIX}{suffix}"
        if name not in environ:
            continue
        value = environ[name]
        if field_name == "justify":
            overrides[field_name] = _parse_bool(name, value)
        else:
            try:
                overrides[field_name] = int(value)
            except ValueError as e:
                raise ValidationError(
                    f"{name} must be an integer, got {value!r}", parameter_name=name, parameter_value=value
                ) from e
    return overrides


def options_from_config(
    config: Mapping[str, Any], base: Optional[RenderOptions] = None, config_path: Optional[str] = None
) -> RenderOptions:
    """Apply a configuration mapping to ``base`` (default ``RenderOptions()``).

    Raises
    ------
    ConfigError
        If the mapping contains keys that are not option names.
    ValidationError
        If a value is out of range.

    """
    base = base or RenderOptions()
    known = set(RenderOptions.field_names())
    unknown = sorted(set(config) - known)
    if unknown:
        raise ConfigError(
            f"Unknown option(s) in configuration: {', '.join(unknown)}. Valid options: {', '.join(sorted(known))}",
            config_path=config_path,
        )
    return base.create_updated(**dict(config)) if config else base


def load_options(
    explicit_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    discover: bool = True,
) -> RenderOptions:
    """Build options from a config file and the environment.

    Priority (highest first): environment variables, the explicit file, a
    discovered file, defaults.
    """
    config_path: Optional[Path] = Path(explicit_path) if explicit_path else None
    if config_path is None and discover:
        config_path = discover_config_file()

    options = RenderOptions()
    if config_path is not None:
        logger.debug(f"Loading configuration from {config_path}")
        options = options_from_config(load_config_file(config_path), options, str(config_path))

    overrides = env_overrides(environ)
    if overrides:
        options = options.create_updated(**overrides)
    return options


__all__ = [
    "find_config_in_parents",
    "discover_config_file",
    "load_config_file",
    "env_overrides",
    "options_from_config",
    "load_options",
]
