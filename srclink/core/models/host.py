"""Validated host mappings used by the host matcher."""

from __future__ import annotations

from dataclasses import dataclass

from ...utils.uri import ParsedUri
from .config import HostDeclaration


@dataclass(frozen=True)
class UrlMapping:
    """A validated host declaration ready for matching.

    ``port`` is -1 when the declaration does not pin a port.
    ``has_default_content_uri`` is True when ``content_uri`` was derived
    rather than declared, which allows it to inherit the repository port.
    """

    host: str
    port: int
    content_uri: ParsedUri
    has_default_content_uri: bool
    declaration: HostDeclaration | None = None
