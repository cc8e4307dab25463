"""Environment stores the resolver reads from.

The process environment is the primary store. Deployments can additionally
ship ``.env`` or YAML files whose values sit *beneath* the real environment:
an exported variable always wins over a file entry.

File loaders are forgiving on purpose: a missing or malformed file yields an
empty mapping and a log line, never an exception.
"""

from __future__ import annotations

import logging
import os
from collections import ChainMap
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from dotenv import dotenv_values

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yml", ".yaml"}


def process_env() -> Mapping[str, str]:
    """Return the live process environment (not a snapshot)."""
    return os.environ


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_mapping(data: Mapping[str, Any], *, prefix: str = "") -> dict[str, str]:
    """Flatten a nested mapping into env-style keys.

    Nested sections are joined with underscores:
        server.port -> server_port
        database.primary.url -> database_primary_url

    ``None`` values are dropped; lists are kept as their string form.
    """

    flat: dict[str, str] = {}
    for key, value in data.items():
        flat_key = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_mapping(value, prefix=flat_key))
        elif value is not None:
            flat[flat_key] = _stringify(value)
    return flat


def load_raw_yaml(path: str | Path) -> dict[Any, Any]:
    """Load a YAML file as a mapping, unflattened.

    Returns an empty dict if the file does not exist or is invalid.
    """

    p = Path(path)
    if not p.exists():
        logger.debug("YAML file %s does not exist; skipping", p)
        return {}

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Cannot read YAML env file %s: %s", p, e)
        return {}

    if not isinstance(data, Mapping):
        logger.warning("YAML env file %s is not a mapping; ignoring it", p)
        return {}

    return dict(data)


def load_yaml_file(path: str | Path) -> dict[str, str]:
    """Load a YAML mapping as a flat env-style store."""
    return flatten_mapping(load_raw_yaml(path))


def load_dotenv_file(path: str | Path) -> dict[str, str]:
    """Load a ``KEY=value`` dotenv file.

    Keys declared without a value (a bare ``KEY`` line) are dropped.
    """

    p = Path(path)
    if not p.exists():
        logger.debug("Env file %s does not exist; skipping", p)
        return {}

    try:
        values = dotenv_values(p, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read dotenv file %s: %s", p, e)
        return {}

    return {k: v for k, v in values.items() if v is not None}


def load_env_file(path: str | Path) -> dict[str, str]:
    """Load an env file, picking the format from its suffix."""
    p = Path(path).expanduser()
    if p.suffix.lower() in _YAML_SUFFIXES:
        return load_yaml_file(p)
    return load_dotenv_file(p)


def layered_store(*stores: Mapping[str, str] | None) -> Mapping[str, str]:
    """Combine stores into one read-only view; earlier stores win.

    The view is live: later changes to any underlying mapping (including
    ``os.environ``) are visible through it.
    """

    maps = [s for s in stores if s is not None]
    return MappingProxyType(ChainMap(*maps))
