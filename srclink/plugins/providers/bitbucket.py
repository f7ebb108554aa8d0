"""
Bitbucket source link provider.

Bitbucket Cloud serves raw content through its REST API on ``api.{host}``.
Bitbucket Server (enterprise edition) serves it under
``projects/{project}/repos/{repo}``; the URL shape changed in 4.7.

A host is treated as Bitbucket Cloud only when it is declared with
``enterprise_edition = false`` (the bitbucket.org default host is).
"""

from __future__ import annotations

import dataclasses

from ...core.exceptions import InvalidRepositoryUrlError
from ...core.models.config import HostDeclaration
from ...grammars.bitbucket import parse_enterprise_path
from ...utils.uri import ParsedUri, combine
from .base import BaseSourceLinkProvider, host_version

VERSION_WITH_NEW_URL_FORMAT = (4, 7)


class BitbucketProvider(BaseSourceLinkProvider):
    """Bitbucket Cloud and Bitbucket Server."""

    @property
    def name(self) -> str:
        return "bitbucket"

    @property
    def display_name(self) -> str:
        return "Bitbucket.Git"

    @property
    def default_hosts(self) -> list[HostDeclaration]:
        return [HostDeclaration(authority="bitbucket.org", enterprise_edition=False)]

    def build_content_url(self, content_uri, git_uri, relative_url, revision_id, host) -> str:
        is_cloud = host is not None and host.enterprise_edition is False
        if is_cloud:
            return self._build_cloud_url(content_uri, relative_url, revision_id)

        parsed = parse_enterprise_path(relative_url)
        if parsed is None:
            raise InvalidRepositoryUrlError(
                f"repository URL is not a valid {self.display_name} enterprise URL",
                url=str(git_uri),
            )

        version = host_version(self, host, VERSION_WITH_NEW_URL_FORMAT)
        return build_enterprise_url(
            content_uri,
            parsed.repository_path,
            parsed.project or "",
            parsed.repository_name,
            revision_id,
            version,
        )

    @staticmethod
    def _build_cloud_url(content_uri: ParsedUri, relative_url: str, revision_id: str) -> str:
        # bitbucket.org -> api.bitbucket.org
        api_uri = dataclasses.replace(content_uri, host=f"api.{content_uri.host}")
        relative_api_url = combine(combine("2.0/repositories", relative_url), f"src/{revision_id}/*")
        return combine(str(api_uri), relative_api_url)


def build_enterprise_url(
    content_uri: ParsedUri,
    base_path: str,
    project: str,
    repository: str,
    revision_id: str,
    version: tuple[int, ...],
) -> str:
    """Content URL of a Bitbucket Server repository."""
    if version >= VERSION_WITH_NEW_URL_FORMAT:
        relative_url = f"projects/{project}/repos/{repository}/raw/*?at={revision_id}"
    else:
        relative_url = f"projects/{project}/repos/{repository}/browse/*?at={revision_id}&raw"
    return combine(str(content_uri), combine(base_path, relative_url))
