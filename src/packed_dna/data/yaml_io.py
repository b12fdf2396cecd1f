from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import yaml


def read_yaml(path: str | Path) -> Dict[str, Any]:
    """
    Read and parse a YAML file into a mapping.

    Raises
    ------
    ValueError
        If the file does not carry a ``.yml``/``.yaml`` suffix, is not valid
        YAML, or its top level is not a mapping.
    """
    path_obj = Path(path)
    if path_obj.suffix.lower() not in {".yml", ".yaml"}:
        raise ValueError("Only YAML files are supported.")

    # Surface syntax errors as ValueError so callers handle every bad file the same way.
    try:
        data = yaml.safe_load(path_obj.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed YAML in {path_obj}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Top level of {path_obj} must be a mapping, got {type(data).__name__}.")
    return data
