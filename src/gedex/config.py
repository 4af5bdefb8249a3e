from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "gedex.yml"

DEFAULTS: Dict[str, Any] = {
    "debug": False,
    "paths": {"logs_dir": "logs"},
    "logging": {
        "level": "INFO",
        "file": "gedex.log",
        "to_file": False,
        "rotate": False,
        "per_module": False,
    },
    "parser": {
        "header_tag": "HEAD",
        "strict": False,
        "relationship_tags": {"father": "FATH", "mother": "MOTH"},
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay ``override`` onto a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class GPConfig:
    def __init__(self, data):
        data = _merge(DEFAULTS, data or {})
        self.paths = data.get("paths", {})
        self.logging = data.get("logging", {})
        self.parser = data.get("parser", {})
        self.debug = data.get("debug", False)

    @property
    def header_tag(self) -> str:
        return str(self.parser.get("header_tag", "HEAD"))

    @property
    def strict(self) -> bool:
        return bool(self.parser.get("strict", False))

    @property
    def relationship_tags(self) -> Dict[str, str]:
        """Map of relationship role (``father``/``mother``) to tag name."""
        tags = self.parser.get("relationship_tags") or {}
        return {role: str(tag) for role, tag in tags.items() if tag}


def load_config(path: Optional[Union[str, Path]] = None) -> 'GPConfig':
    """
    Load configuration from YAML, layered over the built-in defaults.

    An explicit ``path`` must exist. The default project config file is
    optional; without it the defaults apply unchanged.
    """
    config_path = Path(path) if path is not None else CONFIG_PATH

    if not config_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return GPConfig({})

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GPConfig(data)

_config_cache = None

def get_config() -> 'GPConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
