"""Request boundary: turns raw query-style parameters into validated BadgeOptions.

Theme and preset overrides are merged here so the renderer only ever sees
resolved colors.
"""

from __future__ import annotations

import re
from typing import Any, Mapping
from urllib.parse import urlencode

from badgify.badge import (
    DEFAULT_BORDER_RADIUS,
    DEFAULT_COLOR,
    DEFAULT_FONT_SIZE,
    DEFAULT_LABEL_COLOR,
    DEFAULT_PADDING,
    BadgeOptions,
    BadgeStyle,
)
from badgify.presets import get_preset, preset_exists
from badgify.themes import get_theme

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

FONT_SIZE_RANGE = (8, 24)
PADDING_RANGE = (0, 20)
BORDER_RADIUS_RANGE = (0, 10)

VALID_STYLES: tuple[str, ...] = tuple(s.value for s in BadgeStyle)

SVG_CONTENT_TYPE = "image/svg+xml;charset=utf-8"
SVG_CACHE_CONTROL = "public, max-age=3600, immutable"

CUSTOM_BADGE_PATH = "/api/badge/custom"


class BadgeRequestError(ValueError):
    """Raised when badge parameters fail validation."""


def _get(params: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = params.get(key)
        if value is not None and value != "":
            return value
    return None


def _parse_int(raw: Any, name: str, default: int) -> int:
    if raw is None:
        return default
    if isinstance(raw, bool):
        raise BadgeRequestError(f"{name} must be an integer")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip(), 10)
    except ValueError:
        raise BadgeRequestError(f"{name} must be an integer") from None


def _check_range(value: int, name: str, bounds: tuple[int, int]) -> None:
    low, high = bounds
    if value < low or value > high:
        raise BadgeRequestError(f"{name} must be between {low} and {high}")


def resolve_colors(
    color: str,
    label_color: str,
    theme: str | None = None,
    preset: str | None = None,
) -> tuple[str, str]:
    """Apply theme and preset overrides. Returns (color, label_color).

    Any theme other than "none" replaces the label color (unknown names use the
    default theme). Only a preset that exists replaces the value color.
    """
    if theme and theme != "none":
        label_color = get_theme(theme).label_color
    if preset and preset_exists(preset):
        color = get_preset(preset).color
    return color, label_color


def build_options(params: Mapping[str, Any], strict: bool = True) -> BadgeOptions:
    """Validate raw parameters and return resolved BadgeOptions.

    Keys follow the query-string names (labelColor, fontSize, borderRadius);
    snake_case spellings are accepted too. Non-strict mode only requires label
    and value. Raises BadgeRequestError on invalid input.
    """
    label = _get(params, "label")
    value = _get(params, "value")
    if not label or not value:
        raise BadgeRequestError("label and value are required")

    style = _get(params, "style") or BadgeStyle.FLAT.value
    font_size = _parse_int(_get(params, "fontSize", "font_size"), "fontSize", DEFAULT_FONT_SIZE)
    padding = _parse_int(_get(params, "padding"), "padding", DEFAULT_PADDING)
    border_radius = _parse_int(
        _get(params, "borderRadius", "border_radius"), "borderRadius", DEFAULT_BORDER_RADIUS,
    )

    color, label_color = resolve_colors(
        _get(params, "color") or DEFAULT_COLOR,
        _get(params, "labelColor", "label_color") or DEFAULT_LABEL_COLOR,
        theme=_get(params, "theme"),
        preset=_get(params, "preset"),
    )

    if strict:
        if style not in VALID_STYLES:
            raise BadgeRequestError(f"Invalid style. Must be one of: {', '.join(VALID_STYLES)}")
        _check_range(font_size, "fontSize", FONT_SIZE_RANGE)
        _check_range(padding, "padding", PADDING_RANGE)
        _check_range(border_radius, "borderRadius", BORDER_RADIUS_RANGE)
        if not HEX_COLOR_RE.match(color):
            raise BadgeRequestError("Invalid color format. Use hex colors like #FF0000")
        if not HEX_COLOR_RE.match(label_color):
            raise BadgeRequestError("Invalid labelColor format. Use hex colors like #FF0000")

    return BadgeOptions(
        label=str(label),
        value=str(value),
        color=color,
        label_color=label_color,
        style=style,
        font_size=font_size,
        padding=padding,
        border_radius=border_radius,
    )


def build_badge_url(
    label: str,
    value: str,
    color: str = DEFAULT_COLOR,
    label_color: str = DEFAULT_LABEL_COLOR,
    style: str = BadgeStyle.FLAT.value,
    theme: str | None = None,
    preset: str | None = None,
    base: str = CUSTOM_BADGE_PATH,
) -> str:
    """Return the custom-badge URL, listing only parameters that differ from defaults."""
    query: list[tuple[str, str]] = [("label", label), ("value", value)]
    if color != DEFAULT_COLOR:
        query.append(("color", color))
    if label_color != DEFAULT_LABEL_COLOR:
        query.append(("labelColor", label_color))
    if style != BadgeStyle.FLAT.value:
        query.append(("style", style))
    if theme:
        query.append(("theme", theme))
    if preset:
        query.append(("preset", preset))
    return f"{base}?{urlencode(query)}"
