"""
Azure Repos (Azure DevOps Services) source link provider.

Content is served by the Azure DevOps items REST API. Repository URLs come in
two flavours: ``dev.azure.com/{account}/...`` and the older
``{account}.visualstudio.com/...`` where the account is part of the domain.
"""

from __future__ import annotations

from ...core.exceptions import InvalidRepositoryUrlError
from ...core.models.config import HostDeclaration
from ...grammars.azure_devops import (
    is_visual_studio_hosted_server,
    parse_hosted_http,
    parse_hosted_ssh,
)
from ...utils.uri import ParsedUri, combine
from .base import BaseSourceLinkProvider


def build_items_api_url(content_uri: ParsedUri, project_path: str, repository_name: str, revision_id: str) -> str:
    """Content URL served by the Azure DevOps git items API."""
    url = combine(
        combine(str(content_uri), project_path),
        f"_apis/git/repositories/{repository_name}/items",
    )
    return url + f"?api-version=1.0&versionType=commit&version={revision_id}&path=/*"


def build_git_url(host: str, repository_path: str, repository_name: str) -> str:
    """HTTPS clone URL of a repository reached through ``_ssh``."""
    return combine(combine(f"https://{host}", repository_path), f"_git/{repository_name}")


class AzureReposProvider(BaseSourceLinkProvider):
    """Azure Repos git repositories hosted by Azure DevOps Services."""

    @property
    def name(self) -> str:
        return "azure_repos"

    @property
    def display_name(self) -> str:
        return "AzureRepos.Git"

    @property
    def default_hosts(self) -> list[HostDeclaration]:
        return [
            HostDeclaration(authority="dev.azure.com"),
            HostDeclaration(authority="visualstudio.com"),
            HostDeclaration(authority="vsts.me"),
        ]

    def default_content_uri_from_host(self, authority: ParsedUri, git_uri: ParsedUri) -> str:
        # {account}.visualstudio.com keeps the account label of the git host
        git_host = git_uri.host
        if is_visual_studio_hosted_server(git_host):
            account = git_host.split(".", 1)[0]
            return f"{git_uri.scheme}://{account}.{authority.authority}"
        return f"{git_uri.scheme}://{authority.authority}"

    def default_content_uri_from_repository(self, repository_uri: ParsedUri) -> str:
        # the repository URL already carries the account
        return f"{repository_uri.scheme}://{repository_uri.authority}"

    def parse_relative_path(self, git_uri, relative_url, host):
        return parse_hosted_http(git_uri.host, relative_url)

    def build_content_url(self, content_uri, git_uri, relative_url, revision_id, host) -> str:
        parsed = self.parse_relative_path(git_uri, relative_url, host)
        if parsed is None:
            raise InvalidRepositoryUrlError(
                f"repository URL is not a valid {self.display_name} URL", url=str(git_uri)
            )
        return build_items_api_url(content_uri, parsed.repository_path, parsed.repository_name, revision_id)

    def translate_ssh_url(self, uri: ParsedUri) -> str | None:
        """
        Translate a hosted SSH remote to its HTTPS clone URL.

        ssh://vs-ssh.{domain} -> https://{account}.{domain}
        ssh://ssh.{domain}    -> https://{domain}/{account}
        """
        host = uri.host
        is_visual_studio_host = is_visual_studio_hosted_server(host)
        prefix = "vs-ssh." if is_visual_studio_host else "ssh."
        if not host.startswith(prefix):
            return None

        parsed = parse_hosted_ssh(uri)
        if parsed is None:
            return None

        result = host[len(prefix) :]
        if is_visual_studio_host:
            result = f"{parsed.account}.{result}"
        else:
            result = f"{result}/{parsed.account}"

        return build_git_url(result, parsed.repository_path, parsed.repository_name)
