"""UI helper exports for the CCBEDROCK CLI."""

from .components import (
    console,
    err_console,
    render_banner,
    render_card,
    render_content,
    render_lines,
    render_status,
)
from .theme import THEME, style

__all__ = [
    "console",
    "err_console",
    "render_banner",
    "render_card",
    "render_content",
    "render_lines",
    "render_status",
    "THEME",
    "style",
]
