"""Working-directory orchestration: provisioning and retiring projects.

``WorkingDirectory`` clones projects into a base directory from an ordered
chain of sources and removes local checkouts once they hold no unpublished
work. It talks to git and the disk only through the injected ``GitClient``
and ``FileSystem`` adapters.
"""

from __future__ import annotations

import concurrent.futures
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Mapping, Protocol, Sequence

from . import log, paths
from .cache import ProjectCache
from .errors import (
    ExternalCommandFailedError,
    UnexpectedStateError,
    ValidationFailedError,
    WorkonFailure,
)
from .fs import FileSystem
from .models import ProjectInfo, RepositoryState, Settings

FALLBACK_EDITORS = ("vim", "vi")

ProvisionAction = Literal["existing", "cloned", "failed"]
RetireAction = Literal["removed", "retained", "failed"]


class Git(Protocol):
    """Git operations the orchestrator relies on."""

    def clone(self, source: str, destination: Path) -> None: ...

    def get_state(self, path: Path) -> RepositoryState: ...


def editor_chain(
    editor_override: str | None,
    configured_editor: str | None,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Build the ordered list of editors to try when opening a project.

    Order: explicit override, configured editor, ``$EDITOR``, ``vim``, ``vi``.
    Unset entries are skipped; duplicates are kept.

    Example:
        >>> editor_chain("code", "vi", {"EDITOR": "nano"})
        ['code', 'vi', 'nano', 'vim', 'vi']
        >>> editor_chain(None, "", {})
        ['vim', 'vi']
    """
    env = os.environ if environ is None else environ
    chain: list[str] = []
    if editor_override:
        chain.append(editor_override)
    if configured_editor:
        chain.append(configured_editor)
    if "EDITOR" in env:
        chain.append(env["EDITOR"])
    chain.extend(FALLBACK_EDITORS)
    return chain


def source_chain(
    explicit_sources: Sequence[str],
    cached_source: str | None,
    configured_sources: Sequence[str],
) -> list[str]:
    """Build the ordered list of sources to clone a project from.

    Order: explicit sources, the cached source (when known), configured
    sources.

    Example:
        >>> source_chain(["a"], "b", ["c", "d"])
        ['a', 'b', 'c', 'd']
        >>> source_chain([], "", [])
        []
    """
    chain = list(explicit_sources)
    if cached_source:
        chain.append(cached_source)
    chain.extend(configured_sources)
    return chain


@dataclass(frozen=True)
class ProvisionOutcome:
    name: str
    path: Path
    action: ProvisionAction
    source: str | None = None


@dataclass
class ProvisionReport:
    """Per-project results of a provision call."""

    outcomes: list[ProvisionOutcome] = field(default_factory=list)
    last_path: Path | None = None
    opened_with: str | None = None


@dataclass(frozen=True)
class RetireOutcome:
    name: str
    path: Path
    action: RetireAction
    detail: str = ""


@dataclass(frozen=True)
class RetireReport:
    """Per-repository results of a retire call, in resolved-set order."""

    outcomes: tuple[RetireOutcome, ...] = ()

    def by_action(self, action: RetireAction) -> list[str]:
        return [outcome.name for outcome in self.outcomes if outcome.action == action]


class WorkingDirectory:
    """Orchestrates project checkouts under a single base directory."""

    def __init__(
        self,
        directory: Path,
        settings: Settings,
        cache: ProjectCache,
        git: Git,
        fs: FileSystem,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.directory = directory
        self.settings = settings
        self.cache = cache
        self.git = git
        self.fs = fs
        self.environ = environ

    def project_path(self, name: str) -> Path:
        return paths.project_path(self.directory, name)

    def provision(
        self,
        project_names: Sequence[str],
        explicit_sources: Sequence[str],
        editor_override: str | None = None,
        *,
        open: bool = False,
    ) -> ProvisionReport:
        """Clone each project unless it exists, then optionally open the last one.

        Partial success is success: projects that fail are logged and skipped.

        Raises:
            ValidationFailedError: No projects were given, or a project has no
                sources to clone from.
            UnexpectedStateError: No project was cloned or found.
            ExternalCommandFailedError: ``open`` was requested and every editor
                failed.
        """
        if not project_names:
            raise ValidationFailedError("no projects specified")
        editors = editor_chain(
            editor_override, self.settings.default_editor, self.environ
        )
        report = ProvisionReport()

        for name in project_names:
            sources = source_chain(
                explicit_sources,
                self.cache.get(name).source,
                self.settings.default_sources,
            )
            if not sources:
                raise ValidationFailedError(
                    "no sources specified",
                    recovery_hint="pass --source or add sources to the config",
                )
            outcome = self._provision_one(name, sources)
            report.outcomes.append(outcome)
            if outcome.action != "failed":
                report.last_path = outcome.path

        if report.last_path is None:
            raise UnexpectedStateError("failed to start any project")

        if open:
            report.opened_with = self._open(report.last_path, editors)
        return report

    def _provision_one(self, name: str, sources: list[str]) -> ProvisionOutcome:
        path = self.project_path(name)
        try:
            exists = self.fs.exists(path)
        except WorkonFailure as exc:
            log.warning(f"failed to check whether {name!r} exists: {exc}")
            return ProvisionOutcome(name=name, path=path, action="failed")
        if exists:
            log.info(f"{name!r} already exists. No need to clone")
            return ProvisionOutcome(name=name, path=path, action="existing")

        for source in sources:
            try:
                self.git.clone(paths.source_url(source, name), path)
            except WorkonFailure as exc:
                log.warning(f"{exc}\nTrying other sources...")
                continue
            self.cache.set(name, ProjectInfo(source=source))
            self.cache.flush()
            log.success(f"cloned {name!r} from {source!r}")
            return ProvisionOutcome(name=name, path=path, action="cloned", source=source)

        log.error(f"failed to clone {name!r}, tried all configured sources")
        return ProvisionOutcome(name=name, path=path, action="failed")

    def _open(self, path: Path, editors: list[str]) -> str:
        for editor in editors:
            try:
                self.fs.open(path, editor)
            except WorkonFailure as exc:
                log.warning(f"{exc}. Will try other editors")
                continue
            return editor
        raise ExternalCommandFailedError(
            f"failed to open {str(path)!r}, tried all configured editors"
        )

    def resolve_repositories(self, project_names: Sequence[str]) -> list[str]:
        """Return the explicit names, or discover repositories in the base directory.

        Raises:
            IoFailedError: The filesystem adapter could not list the directory.
        """
        if project_names:
            return list(project_names)
        return list(self.fs.list_git_repositories(self.directory))

    def retire(self, project_names: Sequence[str], *, force: bool = False) -> RetireReport:
        """Remove local checkouts that hold no unpublished work.

        One task runs per repository; the call returns after all of them have
        finished. Per-repository failures are logged and reported in the
        returned ``RetireReport``, never raised.

        Raises:
            IoFailedError: Repository discovery failed.
        """
        names = self.resolve_repositories(project_names)
        if not names:
            return RetireReport()

        with concurrent.futures.ThreadPoolExecutor(max_workers=len(names)) as executor:
            futures = [executor.submit(self._retire_one, name, force) for name in names]
            concurrent.futures.wait(futures)

        outcomes: list[RetireOutcome] = []
        for name, future in zip(names, futures):
            exc = future.exception()
            if exc is None:
                outcomes.append(future.result())
                continue
            path = self.project_path(name)
            log.error(f"failed to process {str(path)!r}: {exc}")
            outcomes.append(
                RetireOutcome(name=name, path=path, action="failed", detail=str(exc))
            )
        return RetireReport(outcomes=tuple(outcomes))

    def _retire_one(self, name: str, force: bool) -> RetireOutcome:
        path = self.project_path(name)

        if force:
            log.info(f"forcefully removing {str(path)!r}")
            return self._remove(name, path)

        try:
            state = self.git.get_state(path)
        except WorkonFailure as exc:
            log.warning(f"failed to get state of {str(path)!r}: {exc}")
            return RetireOutcome(name=name, path=path, action="failed", detail=str(exc))

        if state.clean:
            return self._remove(name, path)

        detail = state.describe()
        log.warning(
            f"{str(path)!r} will not be removed: the project is not clean:\n{detail}"
        )
        return RetireOutcome(name=name, path=path, action="retained", detail=detail)

    def _remove(self, name: str, path: Path) -> RetireOutcome:
        try:
            self.fs.remove(path)
        except WorkonFailure as exc:
            log.warning(f"failed to remove {str(path)!r}: {exc}")
            return RetireOutcome(name=name, path=path, action="failed", detail=str(exc))
        log.success(f"removed {str(path)!r}")
        return RetireOutcome(name=name, path=path, action="removed")
