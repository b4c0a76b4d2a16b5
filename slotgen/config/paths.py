from __future__ import annotations

from pathlib import Path

# Single source of truth for the store configuration directory layout.
CFG_DIR = "slot-cfg"
STORE_FILE = "store.yaml"
SETTINGS_FILE = "settings.yaml"
TRANSLATIONS_FILE = "translations.yaml"
LABELS_FILE = "labels.yaml"


def cfg_root(root: Path) -> Path:
    """Absolute path to the slot-cfg/ directory under a project root."""
    return (root / CFG_DIR).resolve()


def store_path(cfg_dir: Path) -> Path:
    return cfg_dir / STORE_FILE


def settings_path(cfg_dir: Path) -> Path:
    return cfg_dir / SETTINGS_FILE


def translations_path(cfg_dir: Path) -> Path:
    """Global translation table (``stock``, ``common`` groups)."""
    return cfg_dir / TRANSLATIONS_FILE


def labels_path(cfg_dir: Path) -> Path:
    """Product label catalog (a YAML list)."""
    return cfg_dir / LABELS_FILE


__all__ = [
    "CFG_DIR",
    "cfg_root",
    "store_path",
    "settings_path",
    "translations_path",
    "labels_path",
]
