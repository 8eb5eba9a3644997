"""Theme registry. Read-only lookup tables, no side effects.

Callers currently forward only ``label_color`` into a badge; the remaining
fields are kept for completeness.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType


@dataclass(frozen=True)
class Theme:
    name: str
    description: str
    background: str
    text_color: str
    label_color: str
    border_color: str
    font_size: int
    padding: int
    border_radius: int


DEFAULT_THEME = "default"

_THEME_LIST: list[Theme] = [
    Theme(
        name="default",
        description="Classic badge style with subtle gradient",
        background="#f5f5f5",
        text_color="#ffffff",
        label_color="#555555",
        border_color="#dddddd",
        font_size=12,
        padding=6,
        border_radius=0,
    ),
    Theme(
        name="neon",
        description="Bright, vibrant colors with glowing effect",
        background="#1a1a2e",
        text_color="#ffffff",
        label_color="#00ff00",
        border_color="#00ff00",
        font_size=12,
        padding=8,
        border_radius=4,
    ),
    Theme(
        name="minimal",
        description="Clean, minimal design with flat colors",
        background="#ffffff",
        text_color="#333333",
        label_color="#f0f0f0",
        border_color="#e0e0e0",
        font_size=11,
        padding=5,
        border_radius=2,
    ),
    Theme(
        name="soft",
        description="Soft, rounded corners with pastel colors",
        background="#fafafa",
        text_color="#ffffff",
        label_color="#9e9e9e",
        border_color="#e0e0e0",
        font_size=12,
        padding=8,
        border_radius=6,
    ),
    Theme(
        name="night",
        description="Dark theme with muted colors",
        background="#1e1e1e",
        text_color="#ffffff",
        label_color="#444444",
        border_color="#333333",
        font_size=12,
        padding=6,
        border_radius=3,
    ),
]

THEMES: MappingProxyType[str, Theme] = MappingProxyType({t.name: t for t in _THEME_LIST})


def get_theme(name: str) -> Theme:
    """Return the named theme, or the default theme if it does not exist."""
    return THEMES.get(name, THEMES[DEFAULT_THEME])


def list_themes() -> list[Theme]:
    return list(THEMES.values())


def theme_names() -> list[str]:
    return list(THEMES.keys())


def theme_exists(name: str) -> bool:
    return name in THEMES


def create_custom_theme(**overrides: str | int) -> Theme:
    """Return the default theme with the given fields replaced.

    Raises TypeError for unknown field names.
    """
    return replace(THEMES[DEFAULT_THEME], **overrides)
