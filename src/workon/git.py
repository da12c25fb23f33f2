"""Git client used to clone projects and inspect local repositories."""

from __future__ import annotations

from pathlib import Path

from . import exec as exec_util
from . import log
from .errors import ExternalCommandFailedError
from .models import RepositoryState

STASH_LIST_ARGS = ("stash", "list")
TAG_PUSH_ARGS = ("push", "--tags", "--dry-run", "--porcelain")
UNPUSHED_COMMITS_ARGS = ("log", "--branches", "--not", "--remotes", "--decorate", "--oneline")
STATUS_ARGS = ("status", "--short")

_NEW_REF_FLAG = "*"
_TAG_REF_PREFIX = "refs/tags/"


def git_command(args: list[str], *, git_path: str | None = None) -> list[str]:
    """Build a git command using an optional executable path.

    Example:
        >>> git_command(["status"])
        ['git', 'status']
        >>> git_command(["status"], git_path="/usr/bin/git")
        ['/usr/bin/git', 'status']
    """
    resolved = git_path.strip() if isinstance(git_path, str) else ""
    if not resolved:
        resolved = "git"
    return [resolved, *args]


def new_tag_lines(output: str) -> str:
    """Return the porcelain push lines that report a tag not yet on the remote.

    ``git push --porcelain`` prints one tab-separated line per ref:
    ``<flag>\\t<from>:<to>\\t<summary>``. A ``*`` flag marks a ref the remote
    does not have yet.

    Example:
        >>> new_tag_lines("To origin\\n*\\trefs/tags/v1:refs/tags/v1\\t[new tag]\\nDone\\n")
        '*\\trefs/tags/v1:refs/tags/v1\\t[new tag]\\n'
        >>> new_tag_lines("To origin\\n=\\trefs/tags/v1:refs/tags/v1\\t[up to date]\\nDone\\n")
        ''
    """
    kept: list[str] = []
    for line in output.splitlines():
        fields = line.split("\t")
        if len(fields) < 2 or fields[0].strip() != _NEW_REF_FLAG:
            continue
        destination = fields[1].rsplit(":", 1)[-1]
        if destination.startswith(_TAG_REF_PREFIX):
            kept.append(line)
    if not kept:
        return ""
    return "\n".join(kept) + "\n"


class GitClient:
    """Semantic layer over the ``git`` executable."""

    def __init__(
        self,
        runner: exec_util.CommandRunner | None = None,
        *,
        git_path: str | None = None,
    ) -> None:
        self.runner = runner
        self.git_path = git_path

    def _git(self) -> str:
        return git_command([], git_path=self.git_path)[0]

    def clone(self, source: str, destination: Path) -> None:
        """Clone ``source`` into ``destination``.

        Raises:
            ExternalCommandFailedError: When git is missing or exits non-zero;
                the message embeds git's stderr.
        """
        log.debug(f"cloning {source!r} to {str(destination)!r}")
        try:
            exec_util.run(
                self._git(),
                ["clone", source, str(destination)],
                runner=self.runner,
            )
        except exec_util.CommandExecutionError as exc:
            raise ExternalCommandFailedError(
                f"failed to clone {source!r} to {str(destination)!r}: {exc}"
            ) from exc

    def _query(self, path: Path, label: str, args: tuple[str, ...]) -> exec_util.CommandResult:
        try:
            return exec_util.run_in_directory(
                path, self._git(), list(args), runner=self.runner
            )
        except exec_util.CommandExecutionError as exc:
            raise ExternalCommandFailedError(
                f"failed to get {label} for {str(path)!r}: {exc}"
            ) from exc

    def get_state(self, path: Path) -> RepositoryState:
        """Collect unpublished-work findings for the repository at ``path``.

        Runs, in order: stash list, dry-run tag push, commits not on any
        remote-tracking branch, and short status.

        Raises:
            ExternalCommandFailedError: When any query fails; the message names
                the query.
        """
        log.debug(f"getting git state for {str(path)!r}")
        stashes = self._query(path, "stashes", STASH_LIST_ARGS).stdout
        tags = new_tag_lines(self._query(path, "tags", TAG_PUSH_ARGS).stdout)
        commits = self._query(path, "commits", UNPUSHED_COMMITS_ARGS).stdout
        status = self._query(path, "status", STATUS_ARGS).stdout
        return RepositoryState(
            stashes=stashes,
            unpushed_tags=tags,
            unpushed_commits=commits,
            status_lines=status,
        )
