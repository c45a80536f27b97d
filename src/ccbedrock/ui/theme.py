"""Color theme for the CCBEDROCK CLI."""

THEME = {
    "accent": "#d97757",
    "accent_alt": "cyan",
    "text_primary": "default",
    "text_muted": "grey62",
    "border": "grey42",
    "success": "green",
    "warning": "yellow",
    "error": "red",
}


def style(name: str) -> str:
    """Return the rich style string for a theme slot."""
    return THEME.get(name, THEME["text_primary"])
