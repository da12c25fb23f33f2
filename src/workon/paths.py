"""Path helpers for locating workon config, cache, and project directories."""

from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir

WORKON_APP_NAME = "git_workon"
CONFIG_FILENAME = "config.json"
CACHE_FILENAME = "projects.json"
GIT_DIRNAME = ".git"


def config_dir() -> Path:
    """Return the workon configuration directory.

    Example:
        >>> isinstance(config_dir(), Path)
        True
    """
    return Path(user_config_dir(WORKON_APP_NAME))


def config_path() -> Path:
    """Return the path to the settings file.

    Example:
        >>> config_path().name == CONFIG_FILENAME
        True
    """
    return config_dir() / CONFIG_FILENAME


def cache_dir() -> Path:
    """Return the workon cache directory."""
    return Path(user_cache_dir(WORKON_APP_NAME))


def cache_path() -> Path:
    """Return the path to the project cache file.

    Example:
        >>> cache_path().name == CACHE_FILENAME
        True
    """
    return cache_dir() / CACHE_FILENAME


def expand_home(value: str) -> Path:
    """Expand a leading ``~`` to the user's home directory.

    Example:
        >>> expand_home("/work/projects")
        PosixPath('/work/projects')
    """
    return Path(value).expanduser()


def project_path(base_directory: Path, name: str) -> Path:
    """Return the local checkout path for a project.

    Example:
        >>> project_path(Path("/work"), "proj")
        PosixPath('/work/proj')
    """
    return base_directory / name


def source_url(source: str, project: str) -> str:
    """Join a source prefix and a project name into a clone URL.

    Example:
        >>> source_url("git@github.com:org", "proj")
        'git@github.com:org/proj'
        >>> source_url("https://example.com/org/", "proj")
        'https://example.com/org/proj'
    """
    return f"{source.rstrip('/')}/{project}"


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)
