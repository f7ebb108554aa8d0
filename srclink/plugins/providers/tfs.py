"""
Team Foundation Server source link provider.

Legacy on-premises servers: every path segment before ``_git`` (virtual
directory, collection, project) is kept as the project path.
"""

from __future__ import annotations

from ...core.exceptions import InvalidRepositoryUrlError
from ...grammars.azure_devops import parse_on_prem_ssh, parse_team_foundation_http
from ...utils.uri import ParsedUri
from .azure_repos import build_git_url, build_items_api_url
from .base import BaseSourceLinkProvider


class TfsProvider(BaseSourceLinkProvider):
    @property
    def name(self) -> str:
        return "tfs"

    @property
    def display_name(self) -> str:
        return "Tfs.Git"

    def parse_relative_path(self, git_uri, relative_url, host):
        return parse_team_foundation_http(relative_url)

    def build_content_url(self, content_uri, git_uri, relative_url, revision_id, host) -> str:
        parsed = self.parse_relative_path(git_uri, relative_url, host)
        if parsed is None:
            raise InvalidRepositoryUrlError(
                f"repository URL is not a valid {self.display_name} URL", url=str(git_uri)
            )
        return build_items_api_url(content_uri, parsed.repository_path, parsed.repository_name, revision_id)

    def translate_ssh_url(self, uri: ParsedUri) -> str | None:
        parsed = parse_on_prem_ssh(uri)
        if parsed is None:
            return None
        return build_git_url(uri.host, parsed.repository_path, parsed.repository_name)
