"""Command implementations exposed by the workon CLI."""

from .config import show_config
from .done import finish_projects
from .go import start_projects

__all__ = [
    "finish_projects",
    "show_config",
    "start_projects",
]
