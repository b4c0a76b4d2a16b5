"""
Store configuration loader.

A configuration directory holds up to four YAML files; each one is optional
and an absent file means an empty mapping (or an empty label list).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .paths import labels_path, settings_path, store_path, translations_path
from ..errors import ConfigError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def _read_yaml(path: Path) -> Any:
    try:
        return _yaml.load(path.read_text(encoding="utf-8"))
    except YAMLError as e:
        raise ConfigError(path, f"YAML syntax error: {e}") from e
    except OSError as e:
        raise ConfigError(path, str(e)) from e


def _read_yaml_map(path: Path) -> Dict[str, Any]:
    """YAML mapping from a file; {} when the file does not exist."""
    if not path.is_file():
        return {}
    raw = _read_yaml(path) or {}
    if not isinstance(raw, dict):
        raise ConfigError(path, "YAML must be a mapping")
    return raw


def _read_yaml_list(path: Path) -> List[Any]:
    """YAML list from a file; [] when the file does not exist."""
    if not path.is_file():
        return []
    raw = _read_yaml(path) or []
    if not isinstance(raw, list):
        raise ConfigError(path, "YAML must be a list")
    return raw


@dataclass
class StoreConfig:
    store: Dict[str, Any] = field(default_factory=dict)
    settings: Dict[str, Any] = field(default_factory=dict)
    translations: Dict[str, Any] = field(default_factory=dict)
    product_labels: List[Dict[str, Any]] = field(default_factory=list)


def load_store_config(cfg_dir: Path) -> StoreConfig:
    """
    Load the store configuration from a directory.

    Args:
        cfg_dir: Configuration directory (usually <root>/slot-cfg)

    Returns:
        StoreConfig; a missing directory gives an empty configuration

    Raises:
        ConfigError: A file exists but is not valid YAML of the expected shape
    """
    if not cfg_dir.is_dir():
        logger.debug(f"Config directory not found: {cfg_dir}, using empty configuration")
        return StoreConfig()

    labels = _read_yaml_list(labels_path(cfg_dir))
    for i, label in enumerate(labels):
        if not isinstance(label, dict):
            raise ConfigError(labels_path(cfg_dir), f"label #{i} must be a mapping")

    return StoreConfig(
        store=_read_yaml_map(store_path(cfg_dir)),
        settings=_read_yaml_map(settings_path(cfg_dir)),
        translations=_read_yaml_map(translations_path(cfg_dir)),
        product_labels=labels,
    )


__all__ = ["StoreConfig", "load_store_config"]
