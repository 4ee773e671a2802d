#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mdnorm CLI.

Parser options can be stored in ``.mdnorm.toml``, ``.mdnorm.yaml``,
``.mdnorm.json`` or the ``[tool.mdnorm]`` table of ``pyproject.toml``.
Command line flags always win over file values.
"""

import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Callable, Dict, Iterator, Optional

import yaml

from mdnorm.constants import CONFIG_FILENAMES
from mdnorm.exceptions import ConfigError

PYPROJECT = "pyproject.toml"


def _read_toml(path: Path) -> Any:
    with path.open("rb") as stream:
        return tomllib.load(stream)


def _read_yaml(path: Path) -> Any:
    with path.open(encoding="utf-8") as stream:
        # An empty YAML file means "no options"
        return yaml.safe_load(stream) or {}


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as stream:
        return json.load(stream)


_READERS: Dict[str, Callable[[Path], Any]] = {
    ".toml": _read_toml,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".json": _read_json,
}

_DECODE_ERRORS = (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError)


def _require_mapping(value: Any, path: Path, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{where} in {path} must be a mapping, got {type(value).__name__}", str(path))
    return value


def _read_config(path: Path, reader: Callable[[Path], Any]) -> Any:
    try:
        return reader(path)
    except _DECODE_ERRORS as e:
        raise ConfigError(f"Invalid config file {path}: {e}", str(path), e) from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}", str(path), e) from e


def _pyproject_table(path: Path) -> Dict[str, Any]:
    """Return the ``[tool.mdnorm]`` table of a pyproject file, or ``{}`` when it has none."""
    data = _read_config(path, _read_toml)
    return _require_mapping(data.get("tool", {}).get("mdnorm", {}), path, "[tool.mdnorm]")


def _has_mdnorm_table(path: Path) -> bool:
    # A broken pyproject.toml belongs to someone else; it is skipped rather than reported
    try:
        return bool(_pyproject_table(path))
    except ConfigError:
        return False


def _candidates(directory: Path) -> Iterator[Path]:
    """Yield config files in ``directory`` in priority order."""
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            yield candidate

    pyproject = directory / PYPROJECT
    if pyproject.is_file() and _has_mdnorm_table(pyproject):
        yield pyproject


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file that applies to ``start_dir``.

    ``start_dir`` and each of its ancestors are searched in turn; the
    nearest directory holding a dedicated ``.mdnorm.*`` file or a
    ``pyproject.toml`` with a ``[tool.mdnorm]`` table wins. The user's home
    directory is the fallback.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from; the current working directory by default

    Returns
    -------
    Path or None
        The configuration file, or None when there is none

    """
    start = (start_dir or Path.cwd()).resolve()

    for directory in (start, *start.parents):
        found = next(_candidates(directory), None)
        if found is not None:
            return found

    home = Path.home()
    return next((home / name for name in CONFIG_FILENAMES if (home / name).is_file()), None)


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load parser options from a configuration file.

    The format follows the file extension; ``pyproject.toml`` contributes
    only its ``[tool.mdnorm]`` table.

    Parameters
    ----------
    config_path : Path or str
        File to load

    Returns
    -------
    dict
        Option names mapped to values, exactly as written in the file

    Raises
    ------
    ConfigError
        When the file is missing, unreadable, malformed, of an unknown
        format, or does not hold a mapping

    Examples
    --------
    >>> load_config_file(".mdnorm.toml")
    {'breaks': True}

    """
    path = Path(config_path)
    if not path.is_file():
        raise ConfigError(f"Configuration file does not exist: {path}", str(path))

    if path.name.lower() == PYPROJECT:
        return _pyproject_table(path)

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise ConfigError(
            f"Unsupported config file format: {path.suffix or path.name}. Use .json, .toml or .yaml", str(path)
        )

    return _require_mapping(_read_config(path, reader), path, "Configuration root")
