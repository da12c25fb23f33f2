"""Configuration helpers for workon.

This module reads and writes the ``config.json`` settings file, validates it
with Pydantic models, and creates it with documented defaults on first run.

Example:
    >>> from workon.config import default_settings
    >>> default_settings().to_payload()
    {'dir': '~/.workon', 'editor': 'vi', 'sources': []}
"""

import json
from pathlib import Path

from pydantic import BaseModel, ValidationError

from . import log, paths
from .errors import IoFailedError
from .models import Settings


def load_json(path: Path) -> dict | None:
    """Load a JSON file if it exists.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed payload, or ``None`` if the file does not exist.

    Example:
        >>> from pathlib import Path
        >>> load_json(Path("missing.json")) is None
        True
    """
    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def write_json(path: Path, payload: dict | BaseModel) -> None:
    """Write a JSON payload to disk, replacing any prior contents.

    Args:
        path: Path to the JSON file to write.
        payload: Dict or Pydantic model to serialize.

    Returns:
        None.
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2)
        fh.write("\n")


def default_settings() -> Settings:
    """Return the documented default settings."""
    return Settings()


def parse_settings(payload: object, path: Path | None = None) -> Settings:
    """Validate a raw settings payload.

    Raises:
        IoFailedError: When the payload does not match the settings schema.
    """
    if not isinstance(payload, dict):
        location = f" ({path})" if path else ""
        raise IoFailedError(f"settings must be a JSON object{location}")
    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        location = f" ({path})" if path else ""
        raise IoFailedError(f"invalid settings{location}: {exc}") from exc


def expand_settings(settings: Settings) -> Settings:
    """Expand a leading ``~`` in the configured base directory."""
    if not settings.base_directory.startswith("~"):
        return settings
    expanded = str(paths.expand_home(settings.base_directory))
    return settings.model_copy(update={"base_directory": expanded})


def write_default_settings(path: Path) -> Settings:
    """Create the settings file with defaults and return them."""
    settings = default_settings()
    try:
        paths.ensure_dir(path.parent)
        write_json(path, settings.to_payload())
    except OSError as exc:
        raise IoFailedError(
            f"failed to create the configuration file at {path}: {exc}"
        ) from exc
    log.warning(f"created default configuration at {path}")
    return settings


def load_settings(path: Path | None = None) -> Settings:
    """Load settings, creating the file with defaults on first run.

    Args:
        path: Optional override for the settings file location.

    Returns:
        Validated settings with the base directory expanded.

    Raises:
        IoFailedError: When the file cannot be read, parsed, or created.
    """
    target = path or paths.config_path()
    if not target.exists():
        return expand_settings(write_default_settings(target))
    try:
        payload = load_json(target)
    except json.JSONDecodeError as exc:
        raise IoFailedError(
            f"failed to decode configuration from {target}: {exc}"
        ) from exc
    except OSError as exc:
        raise IoFailedError(
            f"failed to read the configuration file at {target}: {exc}"
        ) from exc
    return expand_settings(parse_settings(payload, target))


def render_settings(settings: Settings) -> str:
    """Render settings as indented JSON using the on-disk keys."""
    return json.dumps(settings.to_payload(), indent=2)
