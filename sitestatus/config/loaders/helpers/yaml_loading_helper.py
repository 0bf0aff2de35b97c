from pathlib import Path
from typing import Dict, Any
import yaml

_yaml_cache: Dict[str, Dict[str, Any]] = {}


def load_yaml(path: Path) -> Dict[str, Any]:
    resolved_path = str(path.resolve())
    if resolved_path in _yaml_cache:
        return _yaml_cache[resolved_path]

    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML file {path}: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"YAML file {path} must contain a mapping at the top level")

    # included files are merged first so the including file wins
    merged: Dict[str, Any] = {}
    for include_file in data.pop("include", None) or []:
        merged.update(load_yaml(path.parent / include_file))
    merged.update(data)

    _yaml_cache[resolved_path] = merged
    return merged


def clear_yaml_cache() -> None:
    _yaml_cache.clear()
