"""
URL grammar for Bitbucket Server (enterprise edition).

    HTTP: {base}/scm/{project}/{repository}
    SSH:  {base}/{project}/{repository}

Parsed right to left, so the base path can have any depth.
"""

from __future__ import annotations

from ..core.models.repository_path import ParsedRepositoryPath
from ..utils.uri import split_relative_url

SCM_MARKER = "scm"


def parse_enterprise_path(relative_url: str) -> ParsedRepositoryPath | None:
    """Split an enterprise repository path into base path, project and repository.

    ``repository_path`` holds the base path (possibly empty).
    """
    parts = split_relative_url(relative_url)
    if parts is None or len(parts) < 2:
        return None

    i = len(parts) - 1
    repository_name = parts[i]
    project = parts[i - 1]
    i -= 2

    if i >= 0 and parts[i] == SCM_MARKER:
        i -= 1

    return ParsedRepositoryPath(
        repository_name=repository_name,
        repository_path="/".join(parts[: i + 1]),
        project=project,
    )
