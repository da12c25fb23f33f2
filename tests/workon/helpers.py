"""Test doubles for the working-directory orchestrator."""

from __future__ import annotations

import threading
from pathlib import Path

from workon import exec as exec_util
from workon.cache import ProjectCache
from workon.errors import ExternalCommandFailedError, IoFailedError
from workon.models import RepositoryState


class FakeRunner:
    """Command runner that records requests and replays queued results."""

    def __init__(self, results: list[exec_util.CommandResult | None] | None = None) -> None:
        self.requests: list[exec_util.CommandRequest] = []
        self.results = list(results or [])

    def run(self, request: exec_util.CommandRequest) -> exec_util.CommandResult | None:
        self.requests.append(request)
        if self.results:
            return self.results.pop(0)
        return exec_util.CommandResult(
            argv=request.argv, returncode=0, stdout="", stderr=""
        )


def ok(stdout: str = "", stderr: str = "") -> exec_util.CommandResult:
    return exec_util.CommandResult(argv=(), returncode=0, stdout=stdout, stderr=stderr)


def failed(stderr: str = "boom", returncode: int = 1) -> exec_util.CommandResult:
    return exec_util.CommandResult(
        argv=(), returncode=returncode, stdout="", stderr=stderr
    )


class FakeFileSystem:
    """In-memory filesystem keyed by checkout path."""

    def __init__(
        self,
        repos: set[Path] | None = None,
        editors: set[str] | None = None,
    ) -> None:
        self.repos = set(repos or ())
        self.editors = {"vi"} if editors is None else set(editors)
        self.opened: list[tuple[Path, str]] = []
        self.open_attempts: list[str] = []
        self.removed: list[Path] = []
        self.remove_errors: set[Path] = set()
        self.exists_errors: set[Path] = set()
        self.list_error: Exception | None = None
        self._lock = threading.Lock()

    def exists(self, path: Path) -> bool:
        if path in self.exists_errors:
            raise IoFailedError(f"failed to check whether {str(path)!r} exists")
        return path in self.repos

    def open(self, path: Path, editor: str) -> None:
        self.open_attempts.append(editor)
        if editor not in self.editors:
            raise ExternalCommandFailedError(f"unknown editor: {editor}")
        self.opened.append((path, editor))

    def remove(self, path: Path) -> None:
        with self._lock:
            if path in self.remove_errors:
                raise IoFailedError(f"failed to remove {str(path)!r}")
            self.repos.discard(path)
            self.removed.append(path)

    def list_git_repositories(self, directory: Path) -> list[str]:
        if self.list_error is not None:
            raise self.list_error
        return sorted(repo.name for repo in self.repos if repo.parent == directory)


class FakeGit:
    """Git double: clones succeed only for known URLs."""

    def __init__(
        self,
        fs: FakeFileSystem,
        urls: set[str] | None = None,
        states: dict[Path, RepositoryState] | None = None,
    ) -> None:
        self.fs = fs
        self.urls = set(urls or ())
        self.states = dict(states or {})
        self.state_errors: set[Path] = set()
        self.clones: list[tuple[str, Path]] = []
        self.state_queries: list[Path] = []
        self._lock = threading.Lock()

    def clone(self, source: str, destination: Path) -> None:
        self.clones.append((source, destination))
        if source not in self.urls:
            raise ExternalCommandFailedError(f"source {source!r} not found")
        self.fs.repos.add(destination)

    def get_state(self, path: Path) -> RepositoryState:
        with self._lock:
            self.state_queries.append(path)
        if path in self.state_errors:
            raise ExternalCommandFailedError(f"failed to get stashes for {str(path)!r}")
        return self.states.get(path, RepositoryState())


class CountingCache(ProjectCache):
    """Project cache that counts flushes instead of writing to disk."""

    def __init__(self, data: dict | None = None) -> None:
        super().__init__(Path("/nonexistent/projects.json"), data)
        self.flushes = 0
        self.snapshots: list[dict] = []

    def flush(self) -> None:
        self.flushes += 1
        self.snapshots.append(
            {name: info.source for name, info in self.data.items()}
        )
