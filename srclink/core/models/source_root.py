"""
Source root model.

A source root is one repository or submodule working directory together with
the source control metadata that the providers turn into a content URL.
"""

from __future__ import annotations

from pydantic import Field

from .base import ImmutableModel

NOT_APPLICABLE = "N/A"


class RepositoryRoot(ImmutableModel):
    """Source control metadata for one local directory.

    Roots are immutable: attaching a content URL or a translated repository
    URL produces a copy (``with_source_link_url``, ``with_repository_url``).
    """

    local_path: str = Field(min_length=1)
    source_control: str = "git"
    repository_url: str = ""
    revision_id: str = ""
    mapped_path: str | None = None
    source_link_url: str | None = None
    containing_root: str | None = None
    nested_root: str | None = None

    # TFVC roots
    collection_url: str | None = None
    project_id: str | None = None
    server_path: str | None = None

    @property
    def is_git(self) -> bool:
        return self.source_control.lower() == "git"

    @property
    def has_source_link_url(self) -> bool:
        return bool(self.source_link_url)

    def with_source_link_url(self, url: str) -> RepositoryRoot:
        return self.model_copy(update={"source_link_url": url})

    def with_repository_url(self, url: str) -> RepositoryRoot:
        return self.model_copy(update={"repository_url": url})
