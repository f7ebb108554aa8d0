"""
GitWeb source link provider.

GitWeb servers only accept SSH clone access, so SSH remotes are kept as they
are and other transports cannot be translated.
"""

from __future__ import annotations

from ...core.exceptions import UnsupportedTranslationError
from ...utils.uri import ParsedUri, combine
from .base import BaseSourceLinkProvider


class GitWebProvider(BaseSourceLinkProvider):
    @property
    def name(self) -> str:
        return "gitweb"

    @property
    def display_name(self) -> str:
        return "GitWeb"

    def default_content_uri_from_host(self, authority: ParsedUri, git_uri: ParsedUri) -> str:
        return f"https://{authority.authority}/gitweb"

    def build_content_url(self, content_uri, git_uri, relative_url, revision_id, host) -> str:
        project = relative_url.lstrip("/")
        return combine(
            str(content_uri).rstrip("/\\"),
            f"?p={project}.git;a=blob_plain;hb={revision_id};f=*",
        )

    def translate_ssh_url(self, uri: ParsedUri) -> str | None:
        return str(uri)

    def translate_git_url(self, uri: ParsedUri) -> str:
        raise UnsupportedTranslationError(
            f"RepositoryUrl is not supported by provider: GIT ({self.display_name})", scheme="git"
        )

    def translate_http_url(self, uri: ParsedUri) -> str:
        raise UnsupportedTranslationError(
            f"RepositoryUrl is not supported by provider: HTTP ({self.display_name})",
            scheme=uri.scheme,
        )
