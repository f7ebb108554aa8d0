"""
GitLab source link provider.

GitLab 12.0 moved raw file content under ``/-/raw``. Self-hosted instances
running an older release declare their ``version`` on the host.
"""

from __future__ import annotations

from ...core.models.config import HostDeclaration
from ...utils.uri import combine
from .base import BaseSourceLinkProvider, host_version

VERSION_WITH_NEW_URL_FORMAT = (12, 0)


class GitLabProvider(BaseSourceLinkProvider):
    """GitLab.com and self-hosted GitLab."""

    @property
    def name(self) -> str:
        return "gitlab"

    @property
    def display_name(self) -> str:
        return "GitLab"

    @property
    def default_hosts(self) -> list[HostDeclaration]:
        return [HostDeclaration(authority="gitlab.com")]

    def build_content_url(self, content_uri, git_uri, relative_url, revision_id, host) -> str:
        if host_version(self, host, VERSION_WITH_NEW_URL_FORMAT) >= VERSION_WITH_NEW_URL_FORMAT:
            path = f"-/raw/{revision_id}/*"
        else:
            path = f"raw/{revision_id}/*"
        return combine(combine(str(content_uri), relative_url), path)
