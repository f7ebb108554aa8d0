"""
Azure DevOps Server source link provider.

The virtual directory of an on-premises server cannot be inferred from a
repository URL, so hosts must be declared explicitly with their
``virtual_directory`` (empty when the server is installed at the root).
"""

from __future__ import annotations

from ...core.exceptions import InvalidRepositoryUrlError, ProviderAttributeError
from ...grammars.azure_devops import parse_on_prem_http, parse_on_prem_ssh
from ...utils.uri import ParsedUri
from .azure_repos import build_git_url, build_items_api_url
from .base import BaseSourceLinkProvider


class AzureDevOpsServerProvider(BaseSourceLinkProvider):
    @property
    def name(self) -> str:
        return "azure_devops_server"

    @property
    def display_name(self) -> str:
        return "AzureDevOpsServer.Git"

    @property
    def supports_implicit_host(self) -> bool:
        return False

    def parse_relative_path(self, git_uri, relative_url, host):
        if host is None or host.virtual_directory is None:
            raise ProviderAttributeError(
                f"host of {self.display_name} must specify a virtual directory",
                attribute="virtual_directory",
            )
        return parse_on_prem_http(relative_url, host.virtual_directory)

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
