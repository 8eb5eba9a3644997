"""MCP server for badgify.

Exposes badge rendering and the theme/preset registries as MCP tools.
Run via: python3 -m badgify.mcp_server
"""
from __future__ import annotations

from dataclasses import asdict
from typing import Any

from mcp.server.fastmcp import FastMCP

from badgify.badge import (
    DEFAULT_COLOR,
    DEFAULT_LABEL_COLOR,
    generate_badge,
    resolve_dimensions,
)
from badgify.request import (
    CUSTOM_BADGE_PATH,
    SVG_CACHE_CONTROL,
    SVG_CONTENT_TYPE,
    BadgeRequestError,
    build_badge_url,
    build_options,
)

mcp = FastMCP(name="badgify")


def _get_store():
    from badgify.analytics import ViewStore
    from badgify.config import get_analytics_db_path
    return ViewStore(get_analytics_db_path())


@mcp.tool()
def render_badge(
    label: str,
    value: str,
    color: str = DEFAULT_COLOR,
    label_color: str = DEFAULT_LABEL_COLOR,
    style: str = "flat",
    theme: str = "",
    preset: str = "",
    font_size: int = 12,
    padding: int = 6,
    border_radius: int = 0,
    track: bool = False,
) -> dict[str, Any]:
    """Render an SVG badge. Styles: flat, flat-square, plastic, for-the-badge."""
    try:
        options = build_options({
            "label": label, "value": value, "color": color, "labelColor": label_color,
            "style": style, "theme": theme, "preset": preset, "fontSize": font_size,
            "padding": padding, "borderRadius": border_radius,
        })
    except BadgeRequestError as exc:
        return {"error": str(exc)}

    svg = generate_badge(options)
    dims = resolve_dimensions(options)

    tracked = False
    if track:
        from badgify.analytics import track_badge_view
        from badgify.config import get_analytics_db_path
        tracked = track_badge_view(
            options.label, options.value, CUSTOM_BADGE_PATH, db_path=get_analytics_db_path(),
        )

    return {
        "svg": svg, "content_type": SVG_CONTENT_TYPE, "cache_control": SVG_CACHE_CONTROL,
        "width": dims.total_width, "height": dims.height, "tracked": tracked,
    }


@mcp.tool()
def get_badge_url(
    label: str,
    value: str,
    color: str = DEFAULT_COLOR,
    label_color: str = DEFAULT_LABEL_COLOR,
    style: str = "flat",
    theme: str = "",
    preset: str = "",
) -> dict[str, Any]:
    """Build the URL that serves a badge with these options."""
    if not label or not value:
        return {"error": "label and value are required"}
    url = build_badge_url(
        label, value, color=color, label_color=label_color,
        style=style, theme=theme or None, preset=preset or None,
    )
    return {"url": url, "markdown": f"![{label}: {value}]({url})"}


@mcp.tool()
def list_themes() -> dict[str, Any]:
    """List available themes and their colors."""
    from badgify.themes import list_themes as _list_themes
    themes = [asdict(t) for t in _list_themes()]
    return {"themes": themes, "count": len(themes)}


@mcp.tool()
def list_presets() -> dict[str, Any]:
    """List available status presets (success, warning, danger, info, neutral)."""
    from badgify.presets import list_presets as _list_presets
    presets = [asdict(p) for p in _list_presets()]
    return {"presets": presets, "count": len(presets)}


@mcp.tool()
def get_analytics() -> dict[str, Any]:
    """Get badge view statistics: totals, top badges, views per day."""
    from badgify.analytics import get_analytics_stats
    store = _get_store()
    try:
        return get_analytics_stats(store)
    finally:
        store.close()


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
