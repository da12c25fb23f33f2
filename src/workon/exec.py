"""Subprocess helpers for running external commands."""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Protocol, Sequence

from . import log


@dataclass(frozen=True)
class CommandRequest:
    """Typed command invocation request.

    ``capture_output=False`` runs the command interactively: stdin, stdout and
    stderr are inherited from the calling process.
    """

    argv: tuple[str, ...]
    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    capture_output: bool = True
    text: bool = True


@dataclass(frozen=True)
class CommandResult:
    """Typed command execution result."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


class CommandRunner(Protocol):
    """Runtime command-execution interface."""

    def run(self, request: CommandRequest) -> CommandResult | None: ...


class SubprocessCommandRunner:
    """Default command-runner adapter backed by subprocess."""

    def run(self, request: CommandRequest) -> CommandResult | None:
        run_kwargs: dict[str, object] = {
            "cwd": request.cwd,
            "env": request.env,
            "check": False,
        }
        if request.capture_output:
            run_kwargs["capture_output"] = True
            run_kwargs["text"] = request.text
        try:
            completed = subprocess.run(list(request.argv), **run_kwargs)
        except FileNotFoundError:
            return None
        except PermissionError:
            return None

        stdout = completed.stdout if isinstance(completed.stdout, str) else ""
        stderr = completed.stderr if isinstance(completed.stderr, str) else ""
        return CommandResult(
            argv=request.argv,
            returncode=completed.returncode,
            stdout=stdout,
            stderr=stderr,
        )


_DEFAULT_COMMAND_RUNNER: CommandRunner = SubprocessCommandRunner()


@dataclass(frozen=True)
class CommandExecutionError(RuntimeError):
    """Raised when a command is missing or exits with a non-zero status."""

    request: CommandRequest
    detail: str
    result: CommandResult | None = None

    def __str__(self) -> str:
        return self.detail


def run_with_runner(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult | None:
    """Execute a typed command request with the given runner."""
    active_runner = runner or _DEFAULT_COMMAND_RUNNER
    return active_runner.run(request)


def _missing_command_detail(request: CommandRequest) -> str:
    argv = request.argv
    if not argv:
        return "missing required command"
    return f"missing required command: {argv[0]}"


def _command_failure_detail(request: CommandRequest, result: CommandResult) -> str:
    output = (result.stderr or "").strip()
    command_text = " ".join(request.argv)
    if output:
        return f"command failed ({result.returncode}): {command_text}\n{output}"
    return f"command failed ({result.returncode}): {command_text}"


def run_checked(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult:
    """Execute a request and raise ``CommandExecutionError`` on failure.

    The captured stderr is embedded in the error detail so callers can
    surface it for diagnostics.
    """
    result = run_with_runner(request, runner=runner)
    if result is None:
        raise CommandExecutionError(
            request=request,
            detail=_missing_command_detail(request),
        )
    if result.returncode != 0:
        raise CommandExecutionError(
            request=request,
            result=result,
            detail=_command_failure_detail(request, result),
        )
    return result


def run(
    name: str, args: Sequence[str], *, runner: CommandRunner | None = None
) -> CommandResult:
    """Run ``name`` with ``args`` and capture its output.

    Args:
        name: Executable name or path.
        args: Arguments passed after the executable.
        runner: Optional runner override.

    Returns:
        ``CommandResult`` with captured stdout and stderr.
    """
    argv = (name, *args)
    log.trace(f"executing {name!r} with args {list(args)}")
    return run_checked(CommandRequest(argv=argv), runner=runner)


def run_in_directory(
    directory: Path,
    name: str,
    args: Sequence[str],
    *,
    runner: CommandRunner | None = None,
) -> CommandResult:
    """Run ``name`` with ``args`` inside ``directory`` and capture its output."""
    argv = (name, *args)
    log.trace(f"executing {name!r} with args {list(args)} in {str(directory)!r}")
    return run_checked(CommandRequest(argv=argv, cwd=directory), runner=runner)


def run_interactive(
    name: str, args: Sequence[str], *, runner: CommandRunner | None = None
) -> None:
    """Run ``name`` with the caller's terminal attached.

    Nothing is captured; the call blocks until the program exits.
    """
    argv = (name, *args)
    log.trace(f"executing {name!r} interactively with args {list(args)}")
    run_checked(
        CommandRequest(argv=argv, capture_output=False, text=False),
        runner=runner,
    )
