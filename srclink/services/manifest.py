"""
Source link manifest.

Writes the ``{"documents": {...}}`` file that maps local path prefixes to
content URLs, and reads it back the way a debugger does to find the URL of a
local file.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from ..core.exceptions import (
    ManifestFormatError,
    ManifestPathError,
    ManifestUrlError,
    ManifestWriteError,
    SourceLinkErrors,
    SrclinkException,
)
from ..core.models.source_root import RepositoryRoot
from .logging import get_logger

DIRECTORY_SEPARATORS = ("/", "\\")
WILDCARD = "*"


# =============================================================================
# Generation
# =============================================================================


def _json_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def generate_source_link_content(roots: Iterable[RepositoryRoot]) -> str | None:
    """
    Build the manifest for a set of source roots.

    Roots without a content URL are skipped. The key of an entry is the
    root's mapped path (or local path) followed by ``*``.

    Returns:
        Manifest JSON text, or None when no root has a content URL

    Raises:
        SourceLinkErrors: Every root whose path or URL cannot be written
    """
    errors: list[SrclinkException] = []
    entries: list[str] = []

    for root in roots:
        is_mapped = bool(root.mapped_path)
        local_path = root.mapped_path if is_mapped else root.local_path
        kind = "mapped path" if is_mapped else "source root"

        if not local_path.endswith(DIRECTORY_SEPARATORS):
            errors.append(
                ManifestPathError(f"{kind} must end with a directory separator", path=local_path)
            )
            continue

        if WILDCARD in local_path:
            errors.append(ManifestPathError(f"{kind} must not contain a wildcard", path=local_path))
            continue

        url = root.source_link_url
        if not url:
            continue

        if url.count(WILDCARD) != 1:
            errors.append(
                ManifestUrlError("source link URL must contain a single wildcard", url=url)
            )
            continue

        entries.append(f'"{_json_escape(local_path)}{WILDCARD}":"{_json_escape(url)}"')

    if errors:
        raise SourceLinkErrors(errors)
    if not entries:
        return None
    return '{"documents":{' + ",".join(entries) + "}}"


def write_source_link_file(
    content: str | None,
    path: str | Path,
    warn_on_missing_source_control: bool = True,
) -> Path | None:
    """
    Write the manifest, keeping an up-to-date file untouched.

    An existing file is deleted when there is no content, and no file is
    created for empty content.

    Returns:
        Path of the manifest, or None when there is no manifest

    Raises:
        ManifestWriteError: If the file cannot be read, written or deleted
    """
    logger = get_logger()
    output = Path(path)

    if content is None and warn_on_missing_source_control:
        logger.warning(
            "Source control information is not available - the generated source link is empty"
        )

    try:
        if output.exists():
            if content is None:
                logger.info(f"Source link is empty, deleting existing file '{output}'")
                output.unlink()
                return None

            if output.read_text(encoding="utf-8") == content:
                logger.info(f"Source link file '{output}' is up to date")
                return output
        elif content is None:
            logger.info(f"Source link is empty, file '{output}' not written")
            return None

        logger.info(f"Source link file '{output}' updated")
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        return output
    except OSError as e:
        raise ManifestWriteError(
            f"error writing source link file: {e}", path=str(output), cause=e
        ) from e


# =============================================================================
# Lookup
# =============================================================================


class _JsonObject(list):
    """Key/value pairs of a JSON object, duplicates kept in file order."""


@dataclass(frozen=True)
class FilePathPattern:
    path: str
    is_prefix: bool


@dataclass(frozen=True)
class UriPattern:
    prefix: str
    suffix: str


@dataclass(frozen=True)
class SourceLinkEntry:
    file_path: FilePathPattern
    uri: UriPattern


class SourceLinkMap:
    """
    Parsed source link manifest.

    Entries are ordered by file path length, longest first, so the most
    specific prefix wins; entries of equal length keep their file order.

    Example:
        >>> m = SourceLinkMap.parse('{"documents":{"/src/*":"https://host/*"}}')
        >>> m.try_get_url("/src/a/b.py")
        'https://host/a/b.py'
    """

    def __init__(self, entries: list[SourceLinkEntry]) -> None:
        self.entries = entries

    @classmethod
    def parse(cls, json_text: str) -> SourceLinkMap:
        """
        Parse manifest JSON.

        Raises:
            ManifestFormatError: If the text is not JSON, has unexpected value
                types, or has invalid wildcards
        """
        try:
            root = json.loads(json_text, object_pairs_hook=_JsonObject)
        except json.JSONDecodeError as e:
            raise ManifestFormatError(f"invalid source link JSON: {e}", cause=e) from e

        if not isinstance(root, _JsonObject):
            raise ManifestFormatError("source link document must be a JSON object")

        entries: list[SourceLinkEntry] = []
        for name, documents in root:
            if name != "documents":
                continue
            if not isinstance(documents, _JsonObject):
                raise ManifestFormatError("'documents' must be a JSON object")
            for key, value in documents:
                entries.append(_parse_entry(key, value))

        entries.sort(key=lambda entry: len(entry.file_path.path), reverse=True)
        return cls(entries)

    @classmethod
    def load(cls, path: str | Path) -> SourceLinkMap:
        """Read and parse a manifest file."""
        return cls.parse(Path(path).read_text(encoding="utf-8"))

    def try_get_url(self, path: str) -> str | None:
        """
        URL of a local file.

        The part of the path matched by a prefix entry is replaced by the
        entry's URL; remaining segments are escaped and joined with '/'.

        Returns:
            The URL, or None when no entry matches
        """
        if WILDCARD in path:
            return None

        for entry in self.entries:
            file_path = entry.file_path
            if file_path.is_prefix:
                if path.lower().startswith(file_path.path.lower()):
                    relative = path[len(file_path.path) :]
                    segments = relative.replace("\\", "/").split("/")
                    escaped = "/".join(quote(segment, safe="") for segment in segments)
                    return entry.uri.prefix + escaped + entry.uri.suffix
            elif path.lower() == file_path.path.lower():
                return entry.uri.prefix

        return None


def _parse_entry(key: str, value: object) -> SourceLinkEntry:
    if not isinstance(value, str):
        raise ManifestFormatError(f"URL of '{key}' must be a string")

    is_prefix = key.endswith(WILDCARD)
    file_path = key[:-1] if is_prefix else key

    if not file_path or WILDCARD in file_path:
        raise ManifestFormatError(f"invalid wildcard in file path '{key}'")

    wildcards = value.count(WILDCARD)
    if is_prefix:
        if wildcards > 1:
            raise ManifestFormatError(f"invalid wildcard in URL '{value}'")
        prefix, _, suffix = value.partition(WILDCARD)
    else:
        if wildcards:
            raise ManifestFormatError(f"invalid wildcard in URL '{value}'")
        prefix, suffix = value, ""

    return SourceLinkEntry(FilePathPattern(file_path, is_prefix), UriPattern(prefix, suffix))
