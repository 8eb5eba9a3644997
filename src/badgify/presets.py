"""Status presets: named value-segment colors with standard meanings."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    color: str
    icon: str | None = None


FALLBACK_PRESET = "neutral"

PRESETS: MappingProxyType[str, Preset] = MappingProxyType({
    "success": Preset("success", "Indicates a successful state", "#4CAF50", "✓"),
    "warning": Preset("warning", "Indicates a warning state", "#FFC107", "⚠"),
    "danger": Preset("danger", "Indicates a dangerous or error state", "#f44336", "✕"),
    "info": Preset("info", "Indicates an informational state", "#2196F3", "ℹ"),
    "neutral": Preset("neutral", "Neutral state", "#9E9E9E", "◌"),
})


def get_preset(name: str) -> Preset:
    """Return the named preset, or the neutral preset if it does not exist."""
    return PRESETS.get(name, PRESETS[FALLBACK_PRESET])


def list_presets() -> list[Preset]:
    return list(PRESETS.values())


def preset_names() -> list[str]:
    return list(PRESETS.keys())


def preset_exists(name: str) -> bool:
    return name in PRESETS


def get_preset_color(name: str) -> str:
    return get_preset(name).color


def get_preset_icon(name: str) -> str | None:
    return get_preset(name).icon
