"""Data models for workon settings, cache entries, and repository state."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_DIRECTORY = "~/.workon"
DEFAULT_EDITOR = "vi"


class Settings(BaseModel):
    """User settings loaded from ``config.json``.

    The on-disk keys are ``dir``, ``editor`` and ``sources``; the attribute
    names describe what each value is used for.

    Attributes:
        base_directory: Directory that holds every checked-out project.
        default_editor: Editor tried after an explicit ``--editor``.
        default_sources: Ordered clone sources tried after explicit and
            cached ones.

    Example:
        >>> Settings.model_validate({"dir": "/work", "sources": ["a"]}).default_sources
        ['a']
        >>> Settings().default_editor
        'vi'
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    base_directory: str = Field(default=DEFAULT_BASE_DIRECTORY, alias="dir")
    default_editor: str = Field(default=DEFAULT_EDITOR, alias="editor")
    default_sources: list[str] = Field(default_factory=list, alias="sources")

    @field_validator("base_directory", "default_editor", mode="before")
    @classmethod
    def normalize_text(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("default_sources", mode="before")
    @classmethod
    def normalize_sources(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple)):
            return [
                str(item).strip()
                for item in value
                if item is not None and str(item).strip()
            ]
        return value

    def to_payload(self) -> dict:
        """Return the JSON payload using the on-disk keys."""
        return self.model_dump(by_alias=True)


class ProjectInfo(BaseModel):
    """Cached metadata for a single project.

    Attributes:
        source: Source the project was last cloned from; empty when unknown.

    Example:
        >>> ProjectInfo().source
        ''
    """

    model_config = ConfigDict(extra="allow")

    source: str = ""

    @field_validator("source", mode="before")
    @classmethod
    def normalize_source(cls, value: object) -> object:
        if value is None:
            return ""
        return value


@dataclass(frozen=True)
class RepositoryState:
    """Unpublished-work findings for a local repository.

    Each field holds the raw text a git query produced; an empty string means
    nothing was found.

    Example:
        >>> RepositoryState().clean
        True
        >>> RepositoryState(status_lines=" M file.txt\\n").clean
        False
    """

    stashes: str = ""
    unpushed_tags: str = ""
    unpushed_commits: str = ""
    status_lines: str = ""

    @property
    def clean(self) -> bool:
        return not any(
            (self.stashes, self.unpushed_tags, self.unpushed_commits, self.status_lines)
        )

    def describe(self) -> str:
        """Render the non-empty findings under labelled headings."""
        sections = (
            ("Stashes", self.stashes),
            ("Tags", self.unpushed_tags),
            ("Commits", self.unpushed_commits),
            ("Status", self.status_lines),
        )
        return "\n".join(
            f"{label}:\n{value.rstrip()}" for label, value in sections if value
        )
