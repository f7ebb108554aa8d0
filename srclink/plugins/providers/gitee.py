"""Gitee source link provider."""

from __future__ import annotations

from ...core.models.config import HostDeclaration
from ...utils.uri import combine
from .base import BaseSourceLinkProvider


class GiteeProvider(BaseSourceLinkProvider):
    @property
    def name(self) -> str:
        return "gitee"

    @property
    def display_name(self) -> str:
        return "Gitee"

    @property
    def default_hosts(self) -> list[HostDeclaration]:
        return [HostDeclaration(authority="gitee.com")]

    def build_content_url(self, content_uri, git_uri, relative_url, revision_id, host) -> str:
        return combine(combine(str(content_uri), relative_url), f"raw/{revision_id}/*")
