"""Gitea source link provider."""

from __future__ import annotations

from ...utils.uri import combine
from .base import BaseSourceLinkProvider


class GiteaProvider(BaseSourceLinkProvider):
    """Self-hosted Gitea. No host is mapped by default."""

    @property
    def name(self) -> str:
        return "gitea"

    @property
    def display_name(self) -> str:
        return "Gitea"

    def build_content_url(self, content_uri, git_uri, relative_url, revision_id, host) -> str:
        return combine(combine(str(content_uri), relative_url), f"raw/commit/{revision_id}/*")
