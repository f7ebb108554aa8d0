"""
URL grammars for Azure DevOps Services, Azure DevOps Server and TFS.

Hosted (cloud) URLs:
    https://dev.azure.com/{account}/{project}/_git/{repo}
    https://{account}.visualstudio.com/[DefaultCollection/]{project}[/{team}]/_git/{repo}
    ssh://{account}@vs-ssh.visualstudio.com/[DefaultCollection/]{project}[/{team}]/_ssh/{repo}
    ssh://git@ssh.dev.azure.com/v3/{account}/{project}[/{team}]/{repo}

On-premises URLs:
    https://{server}/{virtual-directory}/{collection}/{project}[/{team}]/_git/{repo}
    ssh://{server}/{path}/_ssh/{repo}
"""

from __future__ import annotations

from ..core.models.repository_path import ParsedRepositoryPath
from ..utils.uri import ParsedUri, split_relative_url
from .engine import GIT_SHAPE, SSH_SHAPE, UNMARKED_SHAPE, PathShape, find_repository_name, match_path

DEFAULT_COLLECTION = "defaultcollection"

_VISUAL_STUDIO_SUFFIXES = (".visualstudio.com", ".vsts.me")


def is_visual_studio_hosted_server(host: str) -> bool:
    return host.lower().endswith(_VISUAL_STUDIO_SUFFIXES)


def parse_hosted_http(host: str, relative_url: str) -> ParsedRepositoryPath | None:
    """Parse the path of a hosted HTTP(S) repository URL.

    ``repository_path`` is the project path the content URL is built from:
    ``{project}`` (or the repository name when there is no project) for
    visualstudio.com hosts, where the account is part of the domain, and
    ``{account}/{project}`` otherwise.
    """
    parts = split_relative_url(relative_url)
    if not parts:
        return None

    index = 0
    account: str | None = None
    is_visual_studio_host = is_visual_studio_hosted_server(host)

    if is_visual_studio_host:
        if parts[index].lower() == DEFAULT_COLLECTION:
            index += 1
    else:
        # enterprise discovery page
        if parts[0].lower() == "e":
            return None
        account = parts[index]
        index += 1

    if index == len(parts):
        return None

    match = match_path(parts, index, GIT_SHAPE)
    if match is None:
        return None

    project_path = match.project or match.repository_name
    if not is_visual_studio_host:
        if match.team is not None:
            return None
        project_path = f"{account}/{project_path}"

    return ParsedRepositoryPath(
        repository_name=match.repository_name,
        repository_path=project_path,
        account=account,
        project=match.project,
        team=match.team,
    )


def parse_on_prem_http(relative_url: str, virtual_directory: str) -> ParsedRepositoryPath | None:
    """Parse the path of an Azure DevOps Server HTTP(S) repository URL.

    The virtual directory prefix is compared case-insensitively, but the
    returned ``repository_path`` keeps the casing found in the URL.
    """
    parts = split_relative_url(relative_url)
    virtual_directory_parts = split_relative_url(virtual_directory)
    if not parts or virtual_directory_parts is None:
        return None

    prefix = parts[: len(virtual_directory_parts)]
    if [p.lower() for p in prefix] != [p.lower() for p in virtual_directory_parts]:
        return None

    i = len(virtual_directory_parts)
    if i >= len(parts):
        return None
    collection = parts[i]

    match = match_path(parts, i + 1, GIT_SHAPE)
    if match is None:
        return None

    project_path = "/".join([*prefix, collection, match.project or match.repository_name])
    return ParsedRepositoryPath(
        repository_name=match.repository_name,
        repository_path=project_path,
        collection=collection,
        project=match.project,
        team=match.team,
    )


def parse_hosted_ssh(uri: ParsedUri) -> ParsedRepositoryPath | None:
    """Parse a hosted SSH URL.

    The account comes from the ``v3/{account}`` path segment or, for the
    older formats, from the user name. ``repository_path`` is
    ``{project}[/{team}]``.
    """
    parts = split_relative_url(uri.path)
    if not parts:
        return None

    match = None
    account: str | None = None

    if parts[0] == "v3" and len(parts) >= 3:
        match = match_path(parts, 2, UNMARKED_SHAPE)
        if match is not None and match.repository_path != "":
            account = parts[1]
        else:
            match = None

    if match is None:
        account = uri.userinfo or ""
        index = 1 if parts[0].lower() == DEFAULT_COLLECTION else 0
        match = match_path(parts, index, SSH_SHAPE)
        if match is None:
            return None

    if not account:
        return None

    return ParsedRepositoryPath(
        repository_name=match.repository_name,
        repository_path=match.repository_path,
        account=account,
        project=match.project,
        team=match.team,
    )


def parse_on_prem_ssh(uri: ParsedUri) -> ParsedRepositoryPath | None:
    """Parse an on-premises SSH URL; every segment before ``_ssh`` is the path."""
    return _parse_marked_path(uri.path, SSH_SHAPE)


def parse_team_foundation_http(relative_url: str) -> ParsedRepositoryPath | None:
    """Parse a TFS HTTP(S) URL; every segment before ``_git`` is the path."""
    return _parse_marked_path(relative_url, GIT_SHAPE)


def _parse_marked_path(relative_url: str, shape: PathShape) -> ParsedRepositoryPath | None:
    parts = split_relative_url(relative_url)
    if parts is None:
        return None

    found = find_repository_name(parts, shape)
    if found is None:
        return None

    repository_name, last_leading = found
    return ParsedRepositoryPath(
        repository_name=repository_name,
        repository_path="/".join(parts[: last_leading + 1]),
    )
