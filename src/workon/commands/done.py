"""Implementation for the ``gw done`` command."""

from __future__ import annotations

from ..errors import WorkonFailure
from ..io import die, say
from .resolve import build_working_directory


def finish_projects(args: object) -> None:
    """Remove finished projects from the working directory.

    Without project names every git repository directly under the working
    directory is considered. Projects with unpublished work are kept unless
    ``force`` is set.

    Example:
        $ gw done my-project
    """
    working_dir = build_working_directory(args)
    try:
        report = working_dir.retire(
            list(getattr(args, "projects", None) or []),
            force=bool(getattr(args, "force", False)),
        )
    except WorkonFailure as exc:
        die(str(exc))
    if not report.outcomes:
        say("No projects found.")
