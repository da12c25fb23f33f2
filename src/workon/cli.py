"""Typer command-line entry point for ``gw``.

Example:
    $ gw go my-project --open
    $ gw done
"""

from types import SimpleNamespace
from typing import Annotated, List, Optional

import typer

from . import __version__
from . import log as workon_log
from .commands import config as config_cmd
from .commands import done as done_cmd
from .commands import go as go_cmd

app = typer.Typer(
    name="gw",
    help=(
        "Tool for managing git projects.\n\n"
        "Easily clone projects from predefined sources. Safely remove projects "
        "from the working directory once nothing is left unpublished."
    ),
    no_args_is_help=True,
    add_completion=False,
)

GO_HELP = """Clone the project(s) (if needed) into the working directory.

Sources are resolved in the following order: those given by -s/--source,
the source cached for the project, then the sources from the configuration.

Use -o/--open to open the last project in the configured editor and
-e/--editor to override the editor.
"""


def _validate_log_level(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in workon_log.LEVEL_NAMES:
        raise typer.BadParameter(
            f"expected one of: {', '.join(workon_log.LEVEL_NAMES)}"
        )
    return normalized


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="log verbosity (trace|debug|info|success|warning|error)",
            callback=_validate_log_level,
        ),
    ] = None,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="disable colorized output")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="show the version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    del version
    if log_level is not None:
        workon_log.set_level(log_level)
    if no_color:
        workon_log.set_no_color(True)


def go(
    projects: Annotated[List[str], typer.Argument(help="projects to start")],
    source: Annotated[
        Optional[List[str]],
        typer.Option(
            "--source",
            "-s",
            help="git source to clone from; tried before cached and configured sources",
        ),
    ] = None,
    editor: Annotated[
        Optional[str],
        typer.Option("--editor", "-e", help="editor to open the project with"),
    ] = None,
    open_project: Annotated[
        bool, typer.Option("--open", "-o", help="open the project in the editor")
    ] = False,
    directory: Annotated[
        Optional[str], typer.Option("--directory", "-d", help="working directory")
    ] = None,
) -> None:
    go_cmd.start_projects(
        SimpleNamespace(
            projects=projects,
            sources=source or [],
            editor=editor,
            open=open_project,
            directory=directory,
        )
    )


app.command("go", help=GO_HELP)(go)
app.command("start", help=GO_HELP)(go)


@app.command("done")
def done(
    projects: Annotated[
        Optional[List[str]],
        typer.Argument(help="projects to finish (default: every git repository)"),
    ] = None,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="remove even with unpublished work")
    ] = False,
    directory: Annotated[
        Optional[str], typer.Option("--directory", "-d", help="working directory")
    ] = None,
) -> None:
    """Remove the project(s) from the working directory."""
    done_cmd.finish_projects(
        SimpleNamespace(projects=projects or [], force=force, directory=directory)
    )


@app.command("config")
def config() -> None:
    """Show the current config."""
    config_cmd.show_config(SimpleNamespace())


def run() -> None:
    app()


if __name__ == "__main__":
    run()
