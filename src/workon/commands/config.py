"""Implementation for the ``gw config`` command."""

from __future__ import annotations

from .. import config
from ..io import say
from .resolve import load_settings_or_die


def show_config(args: object) -> None:
    """Print the loaded settings as JSON."""
    del args
    say(config.render_settings(load_settings_or_die()))
