"""
GitHub source link provider.

Raw file content of github.com repositories is served from
raw.githubusercontent.com; GitHub Enterprise serves it under ``/raw``.
"""

from __future__ import annotations

from ...core.models.config import HostDeclaration
from ...utils.uri import ParsedUri, combine
from .base import BaseSourceLinkProvider

GITHUB_DOMAIN = "github.com"
RAW_CONTENT_URL = "https://raw.githubusercontent.com"


class GitHubProvider(BaseSourceLinkProvider):
    """GitHub and GitHub Enterprise."""

    @property
    def name(self) -> str:
        return "github"

    @property
    def display_name(self) -> str:
        return "GitHub"

    @property
    def default_hosts(self) -> list[HostDeclaration]:
        return [HostDeclaration(authority=GITHUB_DOMAIN, content_url=RAW_CONTENT_URL)]

    def default_content_uri_from_host(self, authority: ParsedUri, git_uri: ParsedUri) -> str:
        if authority.host == GITHUB_DOMAIN:
            return RAW_CONTENT_URL
        return f"https://{authority.authority}/raw"

    def build_content_url(self, content_uri, git_uri, relative_url, revision_id, host) -> str:
        return combine(combine(str(content_uri), relative_url), f"{revision_id}/*")
