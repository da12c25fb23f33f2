"""Implementation for the ``gw go`` (alias ``gw start``) command."""

from __future__ import annotations

from ..errors import WorkonFailure
from ..io import die
from .resolve import build_working_directory


def start_projects(args: object) -> None:
    """Clone the requested projects (if needed) and optionally open the last one.

    Args:
        args: CLI argument object with ``projects``, ``sources``, ``editor``,
            ``open`` and ``directory`` fields.

    Returns:
        None.

    Example:
        $ gw go my-project --source git@github.com:me --open
    """
    working_dir = build_working_directory(args)
    try:
        working_dir.provision(
            list(getattr(args, "projects", None) or []),
            list(getattr(args, "sources", None) or []),
            getattr(args, "editor", None),
            open=bool(getattr(args, "open", False)),
        )
    except WorkonFailure as exc:
        die(str(exc))
