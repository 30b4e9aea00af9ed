"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from pdfdest.errors import DocumentLoadError

DEFAULT_CONFIG: dict[str, Any] = {
    "resolution": {
        "max_redirects": 8,
        "cache_named_lookups": True,
        "null_tokens": ["null"],
    },
    "logging": {
        "level": "WARNING",
        "format": "%(levelname)s %(name)s: %(message)s",
    },
}

# Lists that extend the defaults instead of replacing them
EXTENDING_LISTS = frozenset({"null_tokens"})


def merge_config(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Layer ``overrides`` onto ``defaults`` without touching either.

    Sections merge key by key. Null token lists keep the default tokens and
    append new ones in the order given; any other value simply wins.
    """
    merged = dict(defaults)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_config(current, value)
        elif key in EXTENDING_LISTS and isinstance(current, list):
            extra = value if isinstance(value, list) else [value]
            merged[key] = current + [t for t in extra if t not in current]
        else:
            merged[key] = value
    return merged


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            try:
                user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as e:
                msg = f"Invalid configuration file {path}: {e}"
                raise DocumentLoadError(msg) from e
            config = merge_config(config, user_config)
    return config
