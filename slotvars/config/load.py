from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import EngineConfig, DEFAULT_CONFIG
from .typed import ConfigLoadError, load_typed

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def read_data_file(path: Path) -> Dict[str, Any]:
    """
    Read a YAML (or JSON, which is a YAML subset) mapping from disk.

    Args:
        path: File to read

    Returns:
        Parsed mapping; an empty file yields an empty dict

    Raises:
        ConfigLoadError: If the file is unreadable, malformed or not a mapping
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError(f"Failed to read {path}: {e}")
    try:
        raw = _yaml.load(text) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}")
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"YAML must be a mapping: {path}")
    # ruamel отдаёт свои типы узлов; нормализуем в обычные dict/list
    return json.loads(json.dumps(raw, default=str))


def load_engine_config(path: Optional[Path]) -> EngineConfig:
    """
    Load engine settings from a YAML file.

    A missing path or file yields the default configuration.

    Args:
        path: Path to slotvars.yaml (or None)

    Returns:
        Typed EngineConfig

    Raises:
        ConfigLoadError: On unknown keys or type mismatches
    """
    if path is None or not path.is_file():
        logger.debug("Engine config not found (%s), using defaults", path)
        return DEFAULT_CONFIG
    raw = read_data_file(path)
    return load_typed(EngineConfig, raw)


__all__ = ["load_engine_config", "read_data_file"]
