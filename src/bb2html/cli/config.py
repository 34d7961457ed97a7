#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration and params loading for the bb2html CLI.

This module handles automatic discovery of configuration files, loading
mappings from TOML, YAML or JSON files, environment variable defaults, and
merging all of these with proper priority handling.

Priority order for option values (highest first):

1. Explicit command-line flags
2. ``BB2HTML_<OPTION>`` environment variables
3. The configuration file
4. Option dataclass defaults
"""

import json
import logging
import os
import sys
from dataclasses import Field, fields
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from bb2html.constants import CONFIG_FILENAMES, ENV_PREFIX, PYPROJECT_TOOL_SECTION
from bb2html.exceptions import FileError, FileNotFoundError, MalformedFileError, ValidationError

logger = logging.getLogger(__name__)

_DEDICATED_CONFIG_FILENAMES = [name for name in CONFIG_FILENAMES if name != "pyproject.toml"]

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def _read_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


_READERS: Dict[str, Callable[[Path], Any]] = {
    ".toml": _read_toml,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".json": _read_json,
}


def load_mapping_file(path: Path | str, kind: str = "config") -> Dict[str, Any]:
    """Load a TOML, YAML or JSON file whose top level is a mapping.

    Parameters
    ----------
    path : Path or str
        File to load; the format is chosen from the extension
    kind : str, default "config"
        What the file holds, used in error messages

    Returns
    -------
    dict
        File contents. An empty YAML file loads as an empty dict.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    MalformedFileError
        If the extension is unsupported, the content cannot be decoded, or the
        top level is not a mapping
    FileError
        If the file cannot be read

    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(str(path), message=f"{kind.capitalize()} file does not exist: {path}")

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise MalformedFileError(
            f"Unsupported {kind} file format: {path.suffix or path.name}. Use .toml, .yaml, .yml or .json",
            file_path=str(path),
        )

    try:
        data = reader(path)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedFileError(f"Invalid {kind} file {path}: {e}", file_path=str(path), original_error=e) from e
    except OSError as e:
        raise FileError(f"Error reading {kind} file {path}: {e}", file_path=str(path), original_error=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedFileError(
            f"{kind.capitalize()} file {path} must contain a mapping at the top level, got {type(data).__name__}",
            file_path=str(path),
        )
    return data


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.bb2html]`` table of a pyproject.toml, or an empty dict."""
    data = load_mapping_file(pyproject_path)
    section = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(section, dict):
        raise MalformedFileError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] in {pyproject_path} must be a table, got {type(section).__name__}",
            file_path=str(pyproject_path),
        )
    return section


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a dedicated config file or a pyproject.toml.

    Examples
    --------
    >>> config = load_config_file(".bb2html.toml")
    >>> config.get("standalone")
    True

    """
    config_path = Path(config_path)
    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)
    return load_mapping_file(config_path)


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by walking up from ``start_dir`` to the root.

    In each directory the dedicated files (``.bb2html.toml``, ``.bb2html.yaml``,
    ``.bb2html.yml``, ``.bb2html.json``) are checked in that order, then a
    ``pyproject.toml`` that has a non-empty ``[tool.bb2html]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First config file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in _DEDICATED_CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                return candidate

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except FileError as e:
                logger.debug("Skipping unreadable %s: %s", pyproject_path, e)

        if current.parent == current:
            return None
        current = current.parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Searches parent directories first (see :func:`find_config_in_parents`),
    then the dedicated config files in the user's home directory.
    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in _DEDICATED_CONFIG_FILENAMES:
        candidate = home / filename
        if candidate.is_file():
            return candidate
    return None


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration from the highest-priority source that exists.

    Priority order:

    1. Explicit config file path (``--config``)
    2. ``BB2HTML_CONFIG`` environment variable
    3. Auto-discovered config file

    Returns
    -------
    dict
        Loaded configuration, empty if no file was found

    """
    if explicit_path:
        return load_config_file(explicit_path)
    if env_var_path:
        return load_config_file(env_var_path)

    discovered = discover_config_file()
    if discovered:
        logger.debug("Using discovered config file: %s", discovered)
        return load_config_file(discovered)
    return {}


def merge_configs(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries; nested dicts are merged recursively.

    Examples
    --------
    >>> merge_configs({"params": {"a": 1}, "title": "x"}, {"params": {"b": 2}})
    {'params': {'a': 1, 'b': 2}, 'title': 'x'}

    """
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def _convert_env_value(env_key: str, raw: str, default: Any) -> Any:
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValidationError(
            f"Environment variable {env_key}={raw!r} is not a boolean", parameter_name=env_key, parameter_value=raw
        )
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError as e:
            raise ValidationError(
                f"Environment variable {env_key}={raw!r} is not an integer",
                parameter_name=env_key,
                parameter_value=raw,
                original_error=e,
            ) from e
    return raw


def load_env_options(option_fields: Iterable[Field], environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect ``BB2HTML_<FIELD>`` environment values for option fields.

    Values are converted to the type of each field's default.

    Raises
    ------
    ValidationError
        If a boolean or integer variable cannot be converted

    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for field in option_fields:
        env_key = f"{ENV_PREFIX}{field.name.upper()}"
        if env_key in environ:
            values[field.name] = _convert_env_value(env_key, environ[env_key], field.default)
    return values


def option_fields(*options_classes: type) -> list[Field]:
    """Return the fields of several options dataclasses, first occurrence wins."""
    seen: Dict[str, Field] = {}
    for options_class in options_classes:
        for field in fields(options_class):
            seen.setdefault(field.name, field)
    return list(seen.values())


def parse_param_assignment(assignment: str) -> tuple[str, Any]:
    """Split a ``--param KEY=VALUE`` string; the value is parsed as a YAML scalar.

    Examples
    --------
    >>> parse_param_assignment("count=3")
    ('count', 3)
    >>> parse_param_assignment("flag=false")
    ('flag', False)
    >>> parse_param_assignment("name=Ann Lee")
    ('name', 'Ann Lee')

    Raises
    ------
    ValidationError
        If there is no ``=`` or the key is empty

    """
    key, sep, raw = assignment.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ValidationError(
            f"Invalid --param {assignment!r}, expected KEY=VALUE", parameter_name="param", parameter_value=assignment
        )
    try:
        value = yaml.safe_load(raw) if raw.strip() else ""
    except yaml.YAMLError:
        value = raw
    return key, value


def load_params(
    params_file: Optional[str] = None,
    assignments: Optional[Iterable[str]] = None,
    base: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the template params for one CLI run.

    ``base`` (the ``params`` table of the config file) is overlaid by the
    params file, which is overlaid by individual ``--param`` assignments.
    """
    params: Dict[str, Any] = dict(base or {})
    if params_file:
        params = merge_configs(params, load_mapping_file(params_file, kind="params"))
    for assignment in assignments or ():
        key, value = parse_param_assignment(assignment)
        params[key] = value
    return params


__all__ = [
    "load_mapping_file",
    "load_config_file",
    "find_config_in_parents",
    "discover_config_file",
    "load_config_with_priority",
    "merge_configs",
    "load_env_options",
    "option_fields",
    "parse_param_assignment",
    "load_params",
]
