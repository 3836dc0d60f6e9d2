#!/usr/bin/env python3
"""
config.py
---------
Parse entry/MOC config files into plain attribute maps.

YAML (``.yaml``/``.yml``) is the primary format and what ``pull``
writes; TOML (``.toml``) is accepted for configs written by hand.
Either way the result is a mapping of strings to strings, booleans,
lists of strings and lists of mappings; the commit protocol never sees
the raw text.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import tomllib
from pathlib import Path
from typing import Any, Dict

# --- Third party imports ---
import yaml

# --- Local imports ---
from diary.core.exceptions import NotFoundError, ValidationError

YAML_SUFFIXES = {".yaml", ".yml"}
TOML_SUFFIXES = {".toml"}


def load_config(path: Path) -> Dict[str, Any]:
    """
    Read and parse a config file.

    Args:
        path: Config file (format chosen by suffix; unknown suffixes are
            parsed as YAML)

    Returns:
        Parsed attribute map

    Raises:
        NotFoundError: If the file does not exist
        ValidationError: If it cannot be parsed or is not a mapping
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(f"Config file '{path}' doesn't exist")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(f"While reading config file '{path}': {e}") from e

    if path.suffix.lower() in TOML_SUFFIXES:
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ValidationError(f"While parsing config toml '{path}': {e}") from e
    else:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValidationError(f"While parsing config yaml '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"Config file '{path}' must contain a mapping at top level")
    return data


def dump_config(data: Dict[str, Any], path: Path) -> Path:
    """
    Write an attribute map as a YAML config file.

    Args:
        data: Attribute map
        path: Output file

    Returns:
        The output path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return path
