"""
libcli usage rendering.

- generate_usage(specs, include_required, include_unrequired) -> str
  Plain text, one line per spec: abbreviation, name, required marker and
  description, each column padded to its widest entry. Required specs come
  first (when include_required), then the others (when include_unrequired),
  each group in the caller's order.

- render_usage(...) / print_usage(...)
  The same rows as a rich Table, styled with the palette below. Hosts override
  palette entries through a __styles__ mapping in __main__.

Palette keys
- abbreviation, name, unnamed, required, description, border
"""
from collections import defaultdict

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .specs import NO_ABBREVIATION, OptionSpec

REQUIRED_MARKER = "(required)"


def _select(specs, include_required, include_unrequired, /):
    specs = tuple(specs)
    for spec in specs:
        if not isinstance(spec, OptionSpec):
            raise TypeError("usage specs must be an iterable of OptionSpec")
    selected = []
    if include_required:
        selected.extend(spec for spec in specs if spec.required)
    if include_unrequired:
        selected.extend(spec for spec in specs if not spec.required)
    return selected


def _columns(spec, /):
    return (
        "" if spec.abbreviation is NO_ABBREVIATION else "-" + spec.abbreviation,
        spec.name if spec.unnamed else "--" + spec.name,
        REQUIRED_MARKER if spec.required else "",
        spec.description or "",
    )


def generate_usage(specs, include_required, include_unrequired, /):
    """
    Render the usage text of specs.

    Example
          -o  --output   (required)  Specifies output file
          -v  --verbose              Shows verbose output
    """
    rows = [_columns(spec) for spec in _select(specs, include_required, include_unrequired)]
    if not rows:
        return ""

    widths = [max(len(row[index]) for row in rows) for index in range(3)]
    lines = []
    for row in rows:
        cells = [cell.ljust(width) for cell, width in zip(row, widths) if width]
        lines.append(("  " + "  ".join(cells + [row[3]])).rstrip() + "\n")
    return "".join(lines)


def render_usage(specs, include_required=True, include_unrequired=True, /, *, title=None, colorful=True):
    """
    Build a rich Table with the same rows as generate_usage().
    """
    styles = defaultdict(str, {
        "abbreviation": "bold #22C55E",  # GREEN for abbreviations
        "name": "bold #00E6FF",  # CYAN for long names
        "unnamed": "bold italic #FFD600",  # AMBER for the positional collector
        "required": "bold #FF4D94",  # MAGENTA → required stands out
        "description": "#9CA3AF",  # Muted gray
        "border": "#4B5563",  # Slate border
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    table = Table(
        show_header=False,
        title=title,
        box=SIMPLE,
        border_style=styler("border"),
        pad_edge=False,
    )
    for _ in range(4):
        table.add_column()

    for spec in _select(specs, include_required, include_unrequired):
        abbreviation, name, marker, description = _columns(spec)
        table.add_row(
            Text(abbreviation, styler("abbreviation")),
            Text(name, styler("unnamed" if spec.unnamed else "name")),
            Text(marker, styler("required")),
            Text(description, styler("description")),
        )
    return table


def print_usage(specs, include_required=True, include_unrequired=True, /, *, title=None, colorful=True, console=None):
    """
    Print render_usage() on console (a stdout console when omitted).
    """
    console = console or Console()
    console.print(render_usage(specs, include_required, include_unrequired, title=title, colorful=colorful))


__all__ = (
    "REQUIRED_MARKER",
    "generate_usage",
    "render_usage",
    "print_usage",
)
