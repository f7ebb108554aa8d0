"""
Azure Repos TFVC source link provider.

TFVC roots carry everything needed to build the content URL (collection URL,
project id, changeset, server path), so no host matching takes place.
"""

from __future__ import annotations

import re
import uuid
from urllib.parse import quote

from ...core.exceptions import InvalidRepositoryUrlError, InvalidRevisionError, ProviderAttributeError
from ...core.models.source_root import RepositoryRoot
from ...utils.uri import combine, parse_uri
from .base import BaseSourceLinkProvider

MAX_CHANGESET = 2**32 - 1

# "D" format: effb7e66-f922-4dc9-a4dc-9bd5d3b01582
_GUID_RE = re.compile(r"^[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}$")
_CHANGESET_RE = re.compile(r"^\s*\+?([0-9]+)\s*$")


class AzureReposTfvcProvider(BaseSourceLinkProvider):
    @property
    def name(self) -> str:
        return "azure_repos_tfvc"

    @property
    def display_name(self) -> str:
        return "AzureRepos.Tfvc"

    @property
    def source_control(self) -> str:
        return "tfvc"

    @property
    def supports_implicit_host(self) -> bool:
        return False

    def build_content_url(self, content_uri, git_uri, relative_url, revision_id, host) -> str:
        raise NotImplementedError(f"{self.display_name} builds content URLs from source roots")

    def build_root_url(self, root: RepositoryRoot) -> str:
        """
        Build the version control content URL of a TFVC root.

        Raises:
            InvalidRepositoryUrlError: collection URL is not absolute
            ProviderAttributeError: project id is not a GUID or server path
                does not start with '$'
            InvalidRevisionError: revision is not a changeset number
        """
        collection_uri = parse_uri(root.collection_url)
        if collection_uri is None:
            raise InvalidRepositoryUrlError(
                f"collection URL of '{root.local_path}' is invalid", url=root.collection_url
            )

        project_id = _parse_guid(root.project_id)
        if project_id is None:
            raise ProviderAttributeError(
                f"project id of '{root.local_path}' is invalid",
                attribute="project_id",
                value=root.project_id,
            )

        changeset = _parse_changeset(root.revision_id)
        if changeset is None:
            raise InvalidRevisionError(
                f"revision of '{root.local_path}' is not a valid changeset number",
                revision=root.revision_id,
            )

        server_path = root.server_path
        if server_path is None or not server_path.startswith("$"):
            raise ProviderAttributeError(
                f"server path of '{root.local_path}' is not a valid server path",
                attribute="server_path",
                value=server_path,
            )

        escaped_server_path = "/".join(quote(segment, safe="") for segment in server_path.split("/"))
        return (
            combine(str(collection_uri), project_id)
            + f"/_versionControl?version={changeset}&path={escaped_server_path}/*"
        )


def _parse_guid(value: str | None) -> str | None:
    if not value or _GUID_RE.match(value) is None:
        return None
    return str(uuid.UUID(value))


def _parse_changeset(value: str) -> int | None:
    match = _CHANGESET_RE.match(value)
    if match is None:
        return None
    changeset = int(match.group(1))
    return changeset if changeset <= MAX_CHANGESET else None
