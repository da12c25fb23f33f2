"""Shared startup helpers for commands that touch the working directory."""

from __future__ import annotations

from pathlib import Path

from .. import cache, config, fs, git, paths
from ..errors import WorkonFailure
from ..io import die
from ..models import Settings
from ..workdir import WorkingDirectory


def load_settings_or_die() -> Settings:
    """Load settings; exit the process when they cannot be read or created."""
    try:
        return config.load_settings()
    except WorkonFailure as exc:
        die(str(exc))


def resolve_directory(directory: str | None, settings: Settings) -> Path:
    """Return the working directory, creating it when missing.

    ``directory`` overrides the configured base directory.
    """
    raw = (directory or "").strip() or settings.base_directory
    if not raw:
        die("no working directory configured")
    target = paths.expand_home(raw)
    try:
        paths.ensure_dir(target)
    except OSError as exc:
        die(f"failed to create the directory {str(target)!r}: {exc}")
    return target


def build_working_directory(args: object) -> WorkingDirectory:
    """Wire settings, cache, and adapters into a ``WorkingDirectory``."""
    settings = load_settings_or_die()
    try:
        project_cache = cache.load_cache()
    except WorkonFailure as exc:
        die(str(exc))
    directory = resolve_directory(getattr(args, "directory", None), settings)
    return WorkingDirectory(
        directory,
        settings,
        project_cache,
        git.GitClient(),
        fs.LocalFileSystem(),
    )
