"""Persisted mapping from project name to the source it was cloned from."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from . import log, paths
from .config import load_json, write_json
from .errors import IoFailedError
from .models import ProjectInfo


class ProjectCache:
    """In-memory project cache backed by a JSON file.

    ``flush`` overwrites the file with the whole map. It is not safe to call
    concurrently with itself or with other writers of the same file.
    """

    def __init__(self, path: Path, data: dict[str, ProjectInfo] | None = None) -> None:
        self.path = path
        self.data: dict[str, ProjectInfo] = dict(data or {})

    def get(self, project: str) -> ProjectInfo:
        """Return the cached entry, or an empty one when the project is unknown."""
        return self.data.get(project) or ProjectInfo()

    def set(self, project: str, info: ProjectInfo) -> None:
        self.data[project] = info

    def flush(self) -> None:
        """Write the full cache to disk.

        Failures are logged; the in-memory state is kept either way.
        """
        payload = {name: info.model_dump() for name, info in self.data.items()}
        try:
            paths.ensure_dir(self.path.parent)
            write_json(self.path, payload)
        except OSError as exc:
            log.warning(f"failed to write the cache file at {self.path}: {exc}")


def parse_cache(payload: object, path: Path) -> dict[str, ProjectInfo]:
    if not isinstance(payload, dict):
        raise IoFailedError(f"cache file at {path} must contain a JSON object")
    data: dict[str, ProjectInfo] = {}
    for name, entry in payload.items():
        try:
            data[str(name)] = ProjectInfo.model_validate(entry or {})
        except ValidationError as exc:
            raise IoFailedError(
                f"invalid cache entry {name!r} in {path}: {exc}"
            ) from exc
    return data


def create_cache_file(path: Path) -> ProjectCache:
    """Create an empty cache file and return the matching cache."""
    try:
        paths.ensure_dir(path.parent)
        write_json(path, {})
    except OSError as exc:
        raise IoFailedError(f"failed to create cache file {path}: {exc}") from exc
    log.debug(f"created empty cache at {path}")
    return ProjectCache(path)


def load_cache(path: Path | None = None) -> ProjectCache:
    """Load the project cache, creating an empty file when it is absent.

    Raises:
        IoFailedError: When the file cannot be read, parsed, or created.
    """
    target = path or paths.cache_path()
    if not target.exists():
        return create_cache_file(target)
    try:
        payload = load_json(target)
    except json.JSONDecodeError as exc:
        raise IoFailedError(
            f"failed to unmarshal the cache file at {target}: {exc}"
        ) from exc
    except OSError as exc:
        raise IoFailedError(
            f"failed to read the cache file at {target}: {exc}"
        ) from exc
    return ProjectCache(target, parse_cache(payload, target))
