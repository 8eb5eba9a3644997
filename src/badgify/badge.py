"""SVG badge rendering for badgify.

Generates a two-segment [label | value] badge in one of four styles.
Pure functions, no side effects, no external dependencies.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

LOGGER = logging.getLogger(__name__)

DEFAULT_COLOR = "#4CAF50"
DEFAULT_LABEL_COLOR = "#555555"
DEFAULT_FONT_SIZE = 12
DEFAULT_PADDING = 6
DEFAULT_BORDER_RADIUS = 0

FOR_THE_BADGE_FONT_SIZE = 18
FOR_THE_BADGE_PADDING = 12

# Average glyph width as a fraction of font size. Centering math depends on it.
CHAR_WIDTH_RATIO = 0.55

_FONT_FAMILY = "Verdana, Geneva, DejaVu Sans, sans-serif"


class BadgeStyle(str, Enum):
    FLAT = "flat"
    FLAT_SQUARE = "flat-square"
    PLASTIC = "plastic"
    FOR_THE_BADGE = "for-the-badge"

    @classmethod
    def parse(cls, value: object) -> "BadgeStyle":
        """Resolve a style name, falling back to FLAT for anything unrecognized."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for style in cls:
                if style.value == value:
                    return style
            if value in _STYLE_ALIASES:
                return _STYLE_ALIASES[value]
        LOGGER.debug("Unknown badge style %r, using flat", value)
        return cls.FLAT


_STYLE_ALIASES: dict[str, BadgeStyle] = {
    "plain": BadgeStyle.FLAT,
    "square": BadgeStyle.FLAT_SQUARE,
    "rounded": BadgeStyle.PLASTIC,
    "large-bold": BadgeStyle.FOR_THE_BADGE,
}


@dataclass(frozen=True)
class BadgeDimensions:
    label_width: float
    value_width: float
    height: float
    padding: int

    @property
    def total_width(self) -> float:
        return self.label_width + self.value_width


@dataclass(frozen=True)
class BadgeOptions:
    label: str
    value: str
    color: str = DEFAULT_COLOR
    label_color: str = DEFAULT_LABEL_COLOR
    style: str = BadgeStyle.FLAT.value
    font_size: int = DEFAULT_FONT_SIZE
    padding: int = DEFAULT_PADDING
    border_radius: int = DEFAULT_BORDER_RADIUS

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BadgeOptions":
        """Build options from a mapping with snake_case or camelCase keys.

        Missing keys and None values take the defaults.
        """
        def pick(*keys: str, default: Any) -> Any:
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return default

        return cls(
            label=data["label"],
            value=data["value"],
            color=pick("color", default=DEFAULT_COLOR),
            label_color=pick("label_color", "labelColor", default=DEFAULT_LABEL_COLOR),
            style=pick("style", default=BadgeStyle.FLAT.value),
            font_size=pick("font_size", "fontSize", default=DEFAULT_FONT_SIZE),
            padding=pick("padding", default=DEFAULT_PADDING),
            border_radius=pick("border_radius", "borderRadius", default=DEFAULT_BORDER_RADIUS),
        )


def _num(n: float) -> str:
    """Format a number for SVG attributes: 33.0 -> '33', 16.5 -> '16.5'."""
    if isinstance(n, float):
        return str(int(n)) if n.is_integer() else repr(n)
    return str(n)


def estimate_text_width(text: str, font_size: int) -> float:
    """Approximate rendered width of text: len(text) * font_size * 0.55."""
    return len(text) * (font_size * CHAR_WIDTH_RATIO)


def calculate_dimensions(
    label: str,
    value: str,
    font_size: int = DEFAULT_FONT_SIZE,
    padding: int = DEFAULT_PADDING,
) -> BadgeDimensions:
    """Compute segment widths and height. Each segment reserves 2 * padding."""
    label_width = estimate_text_width(label, font_size) + padding * 2
    value_width = estimate_text_width(value, font_size) + padding * 2
    height = font_size + padding * 2
    return BadgeDimensions(
        label_width=label_width,
        value_width=value_width,
        height=height,
        padding=padding,
    )


def _js_round(x: float) -> int:
    # Half-way values round towards +infinity, unlike Python's round().
    return math.floor(x + 0.5)


_LEADING_HEX_RE = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9A-Fa-f]*)")


def _parse_hex_prefix(text: str) -> int:
    """Parse the leading hex digits of text as a signed 32-bit integer.

    Trailing garbage is ignored and a string with no leading digits parses as 0,
    so malformed colors never raise.
    """
    match = _LEADING_HEX_RE.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    num = int(digits, 16)
    if sign == "-":
        num = -num
    num &= 0xFFFFFFFF
    return num - 0x100000000 if num & 0x80000000 else num


def shade_color(color: str, percent: float) -> str:
    """Lighten (percent > 0) or darken (percent < 0) a hex color.

    Each RGB channel is shifted by round(2.55 * percent) and clamped to 0-255.
    Colors are not validated: only the leading hex digits after the first '#'
    are read, and anything unparseable shades from black.
    """
    num = _parse_hex_prefix(color.replace("#", "", 1))
    amount = _js_round(2.55 * percent)
    r = max(0, min(255, (num >> 16) + amount))
    g = max(0, min(255, ((num >> 8) & 0xFF) + amount))
    b = max(0, min(255, (num & 0xFF) + amount))
    return f"#{r:02x}{g:02x}{b:02x}"


def escape_xml(text: str) -> str:
    """Escape the five XML special characters. '&' must go first."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def _gradient(grad_id: str, color: str, percent: int) -> str:
    return f'''    <linearGradient id="{grad_id}" x1="0%" y1="0%" x2="0%" y2="100%">
      <stop offset="0%" style="stop-color:{color};stop-opacity:1" />
      <stop offset="100%" style="stop-color:{shade_color(color, percent)};stop-opacity:1" />
    </linearGradient>'''


def _texts(
    label: str,
    value: str,
    dims: BadgeDimensions,
    font_size: int,
    font_weight: str,
    opacity: str | None,
) -> str:
    text_y = dims.height / 2 + font_size / 3
    label_x = dims.label_width / 2
    value_x = dims.label_width + dims.value_width / 2
    opacity_attr = f' opacity="{opacity}"' if opacity else ""
    common = (
        f'y="{_num(text_y)}" font-family="{_FONT_FAMILY}" font-size="{font_size}" '
        f'font-weight="{font_weight}" text-anchor="middle" fill="white"{opacity_attr}'
    )
    return (
        f'  <text x="{_num(label_x)}" {common}>{escape_xml(label)}</text>\n'
        f'  <text x="{_num(value_x)}" {common}>{escape_xml(value)}</text>'
    )


def _svg_open(dims: BadgeDimensions) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{_num(dims.total_width)}" height="{_num(dims.height)}">'
    )


def generate_flat_badge(
    label: str,
    value: str,
    label_color: str,
    value_color: str,
    font_size: int,
    padding: int,
) -> str:
    """Flat style: per-segment vertical gradient to a 10% darker stop."""
    dims = calculate_dimensions(label, value, font_size, padding)
    lw, vw, h = _num(dims.label_width), _num(dims.value_width), _num(dims.height)
    return f'''{_svg_open(dims)}
  <defs>
{_gradient("grad1", label_color, -10)}
{_gradient("grad2", value_color, -10)}
  </defs>
  <rect width="{lw}" height="{h}" fill="url(#grad1)"/>
  <rect x="{lw}" width="{vw}" height="{h}" fill="url(#grad2)"/>
{_texts(label, value, dims, font_size, "bold", "0.9")}
</svg>'''


def generate_flat_square_badge(
    label: str,
    value: str,
    label_color: str,
    value_color: str,
    font_size: int,
    padding: int,
) -> str:
    """Flat-square style: solid fills, no gradient, no rounding."""
    dims = calculate_dimensions(label, value, font_size, padding)
    lw, vw, h = _num(dims.label_width), _num(dims.value_width), _num(dims.height)
    return f'''{_svg_open(dims)}
  <rect width="{lw}" height="{h}" fill="{label_color}"/>
  <rect x="{lw}" width="{vw}" height="{h}" fill="{value_color}"/>
{_texts(label, value, dims, font_size, "bold", "0.95")}
</svg>'''


def generate_plastic_badge(
    label: str,
    value: str,
    label_color: str,
    value_color: str,
    font_size: int,
    padding: int,
    border_radius: int = 3,
) -> str:
    """Plastic style: rounded segments with a 15% darker gradient stop."""
    dims = calculate_dimensions(label, value, font_size, padding)
    lw, vw, h = _num(dims.label_width), _num(dims.value_width), _num(dims.height)
    return f'''{_svg_open(dims)}
  <defs>
{_gradient("grad1p", label_color, -15)}
{_gradient("grad2p", value_color, -15)}
  </defs>
  <rect width="{lw}" height="{h}" rx="{border_radius}" fill="url(#grad1p)"/>
  <rect x="{lw}" width="{vw}" height="{h}" rx="{border_radius}" fill="url(#grad2p)"/>
{_texts(label, value, dims, font_size, "bold", "0.95")}
</svg>'''


def generate_for_the_badge(
    label: str,
    value: str,
    label_color: str,
    value_color: str,
) -> str:
    """Large bold style. Font size and padding are fixed at 18 and 12."""
    font_size = FOR_THE_BADGE_FONT_SIZE
    padding = FOR_THE_BADGE_PADDING
    dims = calculate_dimensions(label, value, font_size, padding)
    lw, vw, h = _num(dims.label_width), _num(dims.value_width), _num(dims.height)
    return f'''{_svg_open(dims)}
  <defs>
{_gradient("grad1ftb", label_color, -20)}
{_gradient("grad2ftb", value_color, -20)}
    <filter id="shadow" x="-50%" y="-50%" width="200%" height="200%">
      <feDropShadow dx="0" dy="1" stdDeviation="1" flood-opacity="0.3"/>
    </filter>
  </defs>
  <rect width="{lw}" height="{h}" rx="3" fill="url(#grad1ftb)" filter="url(#shadow)"/>
  <rect x="{lw}" width="{vw}" height="{h}" rx="3" fill="url(#grad2ftb)" filter="url(#shadow)"/>
{_texts(label, value, dims, font_size, "900", None)}
</svg>'''


_RENDERERS: dict[BadgeStyle, Callable[[BadgeOptions], str]] = {
    BadgeStyle.FLAT: lambda o: generate_flat_badge(
        o.label, o.value, o.label_color, o.color, o.font_size, o.padding,
    ),
    BadgeStyle.FLAT_SQUARE: lambda o: generate_flat_square_badge(
        o.label, o.value, o.label_color, o.color, o.font_size, o.padding,
    ),
    BadgeStyle.PLASTIC: lambda o: generate_plastic_badge(
        o.label, o.value, o.label_color, o.color, o.font_size, o.padding, o.border_radius,
    ),
    BadgeStyle.FOR_THE_BADGE: lambda o: generate_for_the_badge(
        o.label, o.value, o.label_color, o.color,
    ),
}


def generate_badge(options: BadgeOptions | Mapping[str, Any]) -> str:
    """Render a badge SVG string.

    Accepts BadgeOptions or a plain mapping (missing fields take defaults).
    Unknown styles render as flat.
    """
    if not isinstance(options, BadgeOptions):
        options = BadgeOptions.from_dict(options)
    style = BadgeStyle.parse(options.style)
    return _RENDERERS[style](options)


def resolve_dimensions(options: BadgeOptions) -> BadgeDimensions:
    """Geometry generate_badge() uses for these options."""
    if BadgeStyle.parse(options.style) is BadgeStyle.FOR_THE_BADGE:
        return calculate_dimensions(
            options.label, options.value, FOR_THE_BADGE_FONT_SIZE, FOR_THE_BADGE_PADDING,
        )
    return calculate_dimensions(options.label, options.value, options.font_size, options.padding)
