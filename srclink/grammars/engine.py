"""
Path grammar engine.

Azure DevOps style hosts share one path skeleton and differ only in small
parameters:

    [{leading}...]/{marker}/[{"_full"|"_optimized"}/]{repositoryName}

A ``PathShape`` holds those parameters; the functions below interpret it over
already split path segments. Every function returns None when the segments do
not fit the shape instead of returning partial data.
"""

from __future__ import annotations

from dataclasses import dataclass

KNOWN_MARKERS = ("_git", "_ssh")
OPTIONAL_KINDS = ("_full", "_optimized")


@dataclass(frozen=True)
class PathShape:
    """Declarative description of a repository path.

    Attributes:
        marker: Literal segment required before the repository name, or None
            to accept any segment that is not itself a known marker
        max_leading: Maximum number of leading (project, team) segments;
            None allows any number
    """

    marker: str | None = "_git"
    max_leading: int | None = 2


GIT_SHAPE = PathShape("_git")
SSH_SHAPE = PathShape("_ssh")
UNMARKED_SHAPE = PathShape(None)


@dataclass(frozen=True)
class PathMatch:
    """Segments recognized by ``match_path``.

    ``leading`` holds the segments between the start index and the marker.
    """

    repository_name: str
    leading: tuple[str, ...]

    @property
    def project(self) -> str | None:
        return self.leading[0] if self.leading else None

    @property
    def team(self) -> str | None:
        return self.leading[1] if len(self.leading) > 1 else None

    @property
    def repository_path(self) -> str:
        return "/".join(self.leading)


def find_repository_name(parts: list[str], shape: PathShape) -> tuple[str, int] | None:
    """Locate the repository name at the end of ``parts``.

    Returns:
        (repository name, index of the last leading segment), or None. The
        index is -1 when no segment precedes the marker.
    """
    i = len(parts) - 1
    if i < 0:
        return None

    repository_name = parts[i]
    i -= 1
    if i < 0:
        return None

    if parts[i] in OPTIONAL_KINDS:
        i -= 1
        if i < 0:
            return None

    if shape.marker is not None:
        if parts[i].lower() != shape.marker.lower():
            return None
        i -= 1
    elif parts[i].lower() in KNOWN_MARKERS:
        return None

    return repository_name, i


def match_path(parts: list[str], start: int, shape: PathShape) -> PathMatch | None:
    """Match ``parts[start:]`` against the shape."""
    found = find_repository_name(parts, shape)
    if found is None:
        return None

    repository_name, last_leading = found
    count = last_leading - start + 1
    if count < 0 or (shape.max_leading is not None and count > shape.max_leading):
        return None

    return PathMatch(repository_name, tuple(parts[start : last_leading + 1]))
