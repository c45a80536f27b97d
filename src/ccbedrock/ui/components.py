"""Reusable Rich components for the CCBEDROCK CLI."""

from typing import Iterable, Optional

from rich import box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .theme import style


console = Console()
err_console = Console(stderr=True)


def _compute_width(padding: int = 4) -> int:
    """Return a width that keeps layouts readable in narrow terminals."""
    return max(40, min(console.size.width - padding, 78))


def render_banner(title: str, subtitle: Optional[str] = None) -> Panel:
    """Render a welcome banner with an optional subtitle line."""
    title_text = Text(title, style=f"bold {style('accent')}")
    pieces: list[Text] = [title_text]

    if subtitle:
        pieces.append(Text(subtitle, style=style("text_primary")))

    panel = Panel(
        Align.left(Group(*pieces)),
        box=box.ROUNDED,
        border_style=style("accent"),
        padding=(1, 2),
        width=_compute_width(),
    )
    console.print(panel)
    console.print()
    return panel


def render_card(title: Optional[str], body: str) -> Panel:
    """Render a generic informational card."""
    text_parts: list[Text] = []

    if body:
        text_parts.extend(
            Text(line, style=style("text_primary")) for line in body.splitlines()
        )

    group = Group(*text_parts) if text_parts else Text("", style=style("text_primary"))

    panel = Panel(
        Align.left(group),
        title=Text(title, style=f"bold {style('accent')}") if title else None,
        title_align="left",
        border_style=style("border"),
        box=box.ROUNDED,
        padding=(1, 2),
        width=_compute_width(),
    )
    console.print(panel)

    console.print()
    return panel


def render_status(message: str, level: str = "info", gap: bool = False) -> Text:
    """Render a status line with semantic coloring.

    Warnings and errors carry a WARNING:/ERROR: label and go to stderr.
    """
    icons = {
        "success": "✔",
        "warning": "!",
        "error": "✖",
        "info": "•",
    }
    labels = {
        "warning": "WARNING: ",
        "error": "ERROR: ",
    }
    styles = {
        "success": style("success"),
        "warning": style("warning"),
        "error": style("error"),
        "info": style("accent_alt"),
    }

    icon = icons.get(level, icons["info"])
    text_style = styles.get(level, styles["info"])
    status_text = Text(f"{icon} {labels.get(level, '')}{message}", style=text_style)
    target = err_console if level in labels else console
    target.print(status_text, soft_wrap=True)

    if gap:
        target.print()
    return status_text


def render_lines(lines: Iterable[str], indent: int = 4, muted: bool = False) -> None:
    """Print plain lines with a fixed indent, without markup interpretation."""
    text_style = style("text_muted") if muted else style("text_primary")
    for line in lines:
        console.print(Text(" " * indent + line, style=text_style), soft_wrap=True)


def render_content(content: str) -> None:
    """Print file content byte-for-byte, as a dry run would have written it."""
    console.print(content, end="", markup=False, highlight=False, soft_wrap=True, emoji=False)
