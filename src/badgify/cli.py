"""CLI commands for badgify."""

from __future__ import annotations

import argparse
from pathlib import Path

from badgify.analytics import ViewStore, get_analytics_stats, track_badge_view
from badgify.badge import DEFAULT_COLOR, DEFAULT_LABEL_COLOR, BadgeOptions, generate_badge
from badgify.config import get_analytics_db_path, is_tracking_enabled, set_tracking_enabled
from badgify.display import (
    print_analytics,
    print_analytics_message,
    print_badge_created,
    print_badge_url,
    print_error,
    print_presets,
    print_preview,
    print_themes,
)
from badgify.presets import list_presets
from badgify.request import VALID_STYLES, BadgeRequestError, build_badge_url, build_options
from badgify.themes import list_themes

CLI_VIEW_PATH = "cli"


def _add_badge_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("label", help="Left-hand text")
    parser.add_argument("value", help="Right-hand text")
    parser.add_argument("--color", default=DEFAULT_COLOR, help="Value color, e.g. #FF0000")
    parser.add_argument("--label-color", default=DEFAULT_LABEL_COLOR, help="Label color")
    parser.add_argument("--style", default="flat", help=f"One of: {', '.join(VALID_STYLES)}")
    parser.add_argument("--theme", default=None, help="Apply a theme's label color")
    parser.add_argument("--preset", default=None, help="Apply a preset's value color")


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="badgify",
        description="Generate SVG status badges",
    )
    subparsers = parser.add_subparsers(dest="command")

    create_p = subparsers.add_parser("create", help="Create a badge SVG file")
    _add_badge_arguments(create_p)
    create_p.add_argument("--font-size", type=int, default=12)
    create_p.add_argument("--padding", type=int, default=6)
    create_p.add_argument("--border-radius", type=int, default=0)
    create_p.add_argument("--output", "-o", default=None, help="Output file path")
    create_p.add_argument("--track", action="store_true", help="Record a view for this badge")

    url_p = subparsers.add_parser("url", help="Generate a badge URL")
    _add_badge_arguments(url_p)

    preview_p = subparsers.add_parser("preview", help="Display a badge in the terminal")
    _add_badge_arguments(preview_p)

    theme_p = subparsers.add_parser("theme", help="Theme commands")
    theme_p.add_argument("theme_command", choices=["list"])
    preset_p = subparsers.add_parser("preset", help="Preset commands")
    preset_p.add_argument("preset_command", choices=["list"])

    an_p = subparsers.add_parser("analytics", help="Badge view tracking (opt-in)")
    an_p.add_argument("analytics_command", nargs="?", default="show",
                      choices=["show", "clear", "enable", "disable"])
    return parser


def main() -> None:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args()
    command = args.command

    if command == "create":
        result = do_create(
            args.label, args.value,
            color=args.color, label_color=args.label_color, style=args.style,
            theme=args.theme, preset=args.preset, font_size=args.font_size,
            padding=args.padding, border_radius=args.border_radius,
            output=args.output, track=args.track,
        )
    elif command == "url":
        result = do_url(
            args.label, args.value, color=args.color, label_color=args.label_color,
            style=args.style, theme=args.theme, preset=args.preset,
        )
    elif command == "preview":
        result = do_preview(
            args.label, args.value, color=args.color, label_color=args.label_color,
            style=args.style, theme=args.theme, preset=args.preset,
        )
    elif command == "theme":
        result = do_theme_list()
    elif command == "preset":
        result = do_preset_list()
    elif command == "analytics":
        result = do_analytics(args.analytics_command)
    else:
        parser.print_help()
        return

    if not result.get("ok"):
        raise SystemExit(1)


def _options_from_args(
    label: str,
    value: str,
    color: str,
    label_color: str,
    style: str,
    theme: str | None,
    preset: str | None,
    font_size: int = 12,
    padding: int = 6,
    border_radius: int = 0,
) -> BadgeOptions:
    """Resolve CLI options. Only label and value are checked; the renderer
    tolerates any style, size or color string.
    """
    return build_options({
        "label": label, "value": value, "color": color, "labelColor": label_color,
        "style": style, "theme": theme, "preset": preset, "fontSize": font_size,
        "padding": padding, "borderRadius": border_radius,
    }, strict=False)


def default_output_name(label: str, value: str) -> str:
    """badge-<label>-<value>.svg with path separators replaced."""
    safe = f"badge-{label}-{value}".replace("/", "_").replace("\\", "_")
    return f"{safe}.svg"


def do_create(
    label: str,
    value: str,
    color: str = DEFAULT_COLOR,
    label_color: str = DEFAULT_LABEL_COLOR,
    style: str = "flat",
    theme: str | None = None,
    preset: str | None = None,
    font_size: int = 12,
    padding: int = 6,
    border_radius: int = 0,
    output: str | None = None,
    track: bool = False,
    config_path: Path | None = None,
) -> dict:
    """Validate options, render the badge and write it to disk."""
    try:
        options = _options_from_args(
            label, value, color, label_color, style, theme, preset,
            font_size, padding, border_radius,
        )
    except BadgeRequestError as exc:
        print_error(str(exc))
        return {"ok": False, "reason": "invalid", "error": str(exc)}

    svg = generate_badge(options)
    output_path = Path(output or default_output_name(label, value))
    output_path.write_text(svg, encoding="utf-8")

    tracked = False
    if track or is_tracking_enabled(config_path):
        tracked = track_badge_view(
            options.label, options.value, CLI_VIEW_PATH,
            db_path=get_analytics_db_path(config_path),
        )

    result = {
        "ok": True, "output": str(output_path.resolve()), "label": options.label,
        "value": options.value, "style": options.style, "tracked": tracked,
    }
    print_badge_created(result)
    return result


def do_url(
    label: str,
    value: str,
    color: str = DEFAULT_COLOR,
    label_color: str = DEFAULT_LABEL_COLOR,
    style: str = "flat",
    theme: str | None = None,
    preset: str | None = None,
) -> dict:
    """Print the URL that serves this badge."""
    url = build_badge_url(
        label, value, color=color, label_color=label_color,
        style=style, theme=theme, preset=preset,
    )
    print_badge_url(url)
    return {"ok": True, "url": url}


def do_preview(
    label: str,
    value: str,
    color: str = DEFAULT_COLOR,
    label_color: str = DEFAULT_LABEL_COLOR,
    style: str = "flat",
    theme: str | None = None,
    preset: str | None = None,
) -> dict:
    """Show the badge's colors and text in the terminal."""
    try:
        options = _options_from_args(label, value, color, label_color, style, theme, preset)
    except BadgeRequestError as exc:
        print_error(str(exc))
        return {"ok": False, "reason": "invalid", "error": str(exc)}
    print_preview(options.label, options.value, options.label_color, options.color)
    return {"ok": True, "label_color": options.label_color, "color": options.color}


def do_theme_list() -> dict:
    themes = list_themes()
    print_themes(themes)
    return {"ok": True, "count": len(themes)}


def do_preset_list() -> dict:
    presets = list_presets()
    print_presets(presets)
    return {"ok": True, "count": len(presets)}


def do_analytics(action: str = "show", config_path: Path | None = None) -> dict:
    """Show, clear, enable or disable badge view tracking."""
    if action == "enable":
        set_tracking_enabled(True, config_path)
        print_analytics_message("View tracking [green]enabled[/].")
        return {"ok": True, "track_views": True}
    if action == "disable":
        set_tracking_enabled(False, config_path)
        print_analytics_message("View tracking [red]disabled[/].")
        return {"ok": True, "track_views": False}

    store = ViewStore(get_analytics_db_path(config_path))
    try:
        if action == "clear":
            store.clear()
            print_analytics_message("All recorded views cleared.")
            return {"ok": True, "cleared": True}
        stats = get_analytics_stats(store)
    finally:
        store.close()
    print_analytics(stats)
    return {"ok": True, **stats}
