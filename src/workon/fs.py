"""Filesystem adapter: existence checks, removal, editors, repository discovery."""

from __future__ import annotations

import shlex
import shutil
from pathlib import Path
from typing import Protocol

from . import exec as exec_util
from . import log, paths
from .errors import ExternalCommandFailedError, IoFailedError


class FileSystem(Protocol):
    """Filesystem operations the working-directory orchestrator relies on."""

    def exists(self, path: Path) -> bool: ...

    def open(self, path: Path, editor: str) -> None: ...

    def remove(self, path: Path) -> None: ...

    def list_git_repositories(self, directory: Path) -> list[str]: ...


def split_editor(editor: str) -> list[str]:
    """Split an editor setting into argv tokens.

    Example:
        >>> split_editor("code -w")
        ['code', '-w']
        >>> split_editor("vim")
        ['vim']
    """
    try:
        parts = shlex.split(editor)
    except ValueError:
        return [editor]
    return [part for part in parts if part]


def is_git_repository(path: Path) -> bool:
    """Return whether ``path`` holds a ``.git`` directory."""
    return (path / paths.GIT_DIRNAME).is_dir()


class LocalFileSystem:
    """``FileSystem`` backed by the local disk and interactive subprocesses."""

    def __init__(self, runner: exec_util.CommandRunner | None = None) -> None:
        self.runner = runner

    def exists(self, path: Path) -> bool:
        log.debug(f"checking whether {str(path)!r} exists")
        try:
            path.stat()
        except FileNotFoundError:
            return False
        except NotADirectoryError:
            return False
        except OSError as exc:
            raise IoFailedError(
                f"failed to check whether {str(path)!r} exists: {exc}"
            ) from exc
        return True

    def open(self, path: Path, editor: str) -> None:
        """Open ``path`` in ``editor`` with the caller's terminal attached.

        Raises:
            ExternalCommandFailedError: When the editor cannot start or exits
                non-zero.
        """
        log.debug(f"opening {str(path)!r} with {editor!r} editor")
        argv = split_editor(editor)
        if not argv:
            raise ExternalCommandFailedError(
                f"failed to open {str(path)!r}: empty editor command"
            )
        try:
            exec_util.run_interactive(
                argv[0], [*argv[1:], str(path)], runner=self.runner
            )
        except exec_util.CommandExecutionError as exc:
            raise ExternalCommandFailedError(
                f"failed to open {str(path)!r} with {editor!r} editor: {exc}"
            ) from exc

    def remove(self, path: Path) -> None:
        """Recursively delete ``path``; an absent path is not an error."""
        log.debug(f"removing {str(path)!r}")
        try:
            if path.is_symlink() or path.is_file():
                path.unlink(missing_ok=True)
                return
            shutil.rmtree(path)
        except FileNotFoundError:
            return
        except OSError as exc:
            raise IoFailedError(f"failed to remove {str(path)!r}: {exc}") from exc

    def list_git_repositories(self, directory: Path) -> list[str]:
        """Return names of immediate subdirectories that are git repositories.

        Repositories nested inside a matching directory are not reported.
        """
        log.debug(f"gathering git directories from {str(directory)!r}")
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            raise IoFailedError(
                f"failed to get directories from {str(directory)!r}: {exc}"
            ) from exc
        return [entry.name for entry in entries if is_git_repository(entry)]
