"""Shared rich console for terminal status output."""

from rich.console import Console
from rich.style import Style
from rich.theme import Theme

WEBCONSOLE_THEME = Theme(
    {
        "status.info": Style(color="white"),
        "status.warn": Style(color="yellow", bold=True),
        "status.fail": Style(color="red", bold=True),
        "status.transient": Style(color="cyan", dim=True),
        "status.progress": Style(color="bright_green"),
    }
)

console = Console(theme=WEBCONSOLE_THEME)
