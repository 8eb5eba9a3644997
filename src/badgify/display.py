"""Rich terminal display for badgify."""

from __future__ import annotations

import re

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from badgify.presets import Preset
from badgify.themes import Theme

console = Console()

_RICH_HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def format_number(n: int) -> str:
    """Format large numbers: 421543 -> '421.5K', 1200 -> '1,200', 1234567 -> '1.2M'."""
    if n >= 1_000_000:
        value = n / 1_000_000
        if value >= 100:
            return f"{value:.0f}M"
        return f"{value:.1f}M"
    if n >= 10_000:
        value = n / 1_000
        if value >= 1000:
            return f"{value:.0f}K"
        return f"{value:.1f}K"
    return f"{n:,}"


def _swatch(color: str) -> str:
    """A colored block, or the raw string if Rich cannot parse the color."""
    if _RICH_HEX_RE.match(color):
        return f"[on {color}]    [/] {color}"
    return escape(color)


def print_error(message: str) -> None:
    console.print(f"[red]{escape(message)}[/]")


def print_badge_created(result: dict) -> None:
    """Print badge generation result."""
    lines: list[str] = []
    lines.append("")
    lines.append(f"  Badge saved to: [bold]{escape(result.get('output', ''))}[/]")
    lines.append(
        f"  Label: {escape(result.get('label', ''))} | Value: {escape(result.get('value', ''))}"
        f" | Style: {result.get('style', 'flat')}"
    )
    if result.get("tracked"):
        lines.append("  View recorded.")
    lines.append("")

    content = "\n".join(lines)
    panel = Panel(
        content,
        title="[bold]Badge Created[/]",
        box=box.ROUNDED,
        border_style="green",
        width=60,
    )
    console.print(panel)


def print_badge_url(url: str) -> None:
    console.print("[bold]Badge URL:[/]")
    console.print(f"[green]{escape(url)}[/]", soft_wrap=True)


def print_themes(themes: list[Theme]) -> None:
    """Print all themes as a table."""
    table = Table(
        title="Available Themes",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Theme", style="bold blue")
    table.add_column("Description")
    table.add_column("Label Color")

    for theme in themes:
        table.add_row(theme.name.upper(), theme.description, _swatch(theme.label_color))

    console.print(table)


def print_presets(presets: list[Preset]) -> None:
    """Print all presets as a table."""
    table = Table(
        title="Available Presets",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("", width=2)
    table.add_column("Preset", style="bold blue")
    table.add_column("Description")
    table.add_column("Color")

    for preset in presets:
        table.add_row(preset.icon or "", preset.name.upper(), preset.description, _swatch(preset.color))

    console.print(table)


def print_preview(label: str, value: str, label_color: str, color: str) -> None:
    """Print a terminal approximation of the badge: two colored segments."""
    label_bg = label_color if _RICH_HEX_RE.match(label_color) else "grey37"
    value_bg = color if _RICH_HEX_RE.match(color) else "green"
    segments = (
        f"[bold white on {label_bg}] {escape(label)} [/]"
        f"[bold white on {value_bg}] {escape(value)} [/]"
    )
    panel = Panel(
        f"\n  {segments}\n",
        title="[bold]Badge Preview[/]",
        box=box.ROUNDED,
        border_style="blue",
        expand=False,
    )
    console.print(panel)


def print_analytics(stats: dict) -> None:
    """Print view-tracking statistics."""
    table = Table(
        title=f"Badge Views (total: {format_number(stats.get('total_views', 0))})",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Badge", style="bold")
    table.add_column("Views", justify="right")

    top_badges = stats.get("top_badges", [])
    if not top_badges:
        table.add_row("[grey50]No views recorded yet[/]", "")
    for entry in top_badges:
        table.add_row(escape(entry["badge"]), format_number(entry["views"]))

    views_by_day = stats.get("views_by_day", [])
    if views_by_day:
        table.add_section()
        table.add_row("[bold]Recent Days[/]", "")
        for day in views_by_day[-7:]:
            table.add_row(f"  {day['date']}", format_number(day["count"]))

    console.print(table)


def print_analytics_message(message: str) -> None:
    panel = Panel(
        f"\n  {message}\n",
        title="[bold]BADGIFY ANALYTICS[/]",
        box=box.ROUNDED,
        border_style="grey50",
        width=50,
    )
    console.print(panel)
