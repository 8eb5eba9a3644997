"""Configuration file management for badgify.

Reads and writes ~/.badgify/config.json for user settings (view tracking and
where its database lives).
"""
from __future__ import annotations

import json
from pathlib import Path

DEFAULT_CONFIG_PATH: Path = Path.home() / ".badgify" / "config.json"


def load_config(config_path: Path | None = None) -> dict:
    """Load config from JSON file. Returns {} if file missing or invalid."""
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict, config_path: Path | None = None) -> None:
    """Write config dict to JSON file. Creates parent dirs if needed."""
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def get_analytics_db_path(config_path: Path | None = None) -> Path | None:
    """Return the configured analytics database path, or None if not set."""
    raw = load_config(config_path).get("analytics_db")
    if raw:
        return Path(raw)
    return None


def set_analytics_db_path(path: Path, config_path: Path | None = None) -> None:
    config = load_config(config_path)
    config["analytics_db"] = str(path)
    save_config(config, config_path)


def is_tracking_enabled(config_path: Path | None = None) -> bool:
    """View tracking is opt-in; off unless explicitly enabled."""
    return bool(load_config(config_path).get("track_views", False))


def set_tracking_enabled(enabled: bool, config_path: Path | None = None) -> None:
    config = load_config(config_path)
    config["track_views"] = bool(enabled)
    save_config(config, config_path)
