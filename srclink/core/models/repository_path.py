"""Components extracted from a provider-specific repository URL path."""

from __future__ import annotations

from pydantic import Field

from .base import ImmutableModel


class ParsedRepositoryPath(ImmutableModel):
    """Result of a successful grammar parse.

    ``repository_path`` is the provider specific prefix that precedes the
    repository marker (``account/project``, ``tfs/collection/project`` ...).
    """

    repository_name: str = Field(min_length=1)
    repository_path: str = ""
    account: str | None = None
    collection: str | None = None
    project: str | None = None
    team: str | None = None
