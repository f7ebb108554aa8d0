"""
Base source link provider.

Supplies the behaviour most git hosting services share, so a concrete
provider only declares its name, default hosts and content URL shape.
"""

from __future__ import annotations

from abc import abstractmethod

from ...core.exceptions import ProviderAttributeError
from ...core.interfaces.provider import ISourceLinkProvider
from ...core.models.config import HostDeclaration
from ...core.models.repository_path import ParsedRepositoryPath
from ...utils.uri import ParsedUri, split_relative_url

_MAX_VERSION_PARTS = 4


class BaseSourceLinkProvider(ISourceLinkProvider):
    """
    Abstract base class for git source link providers.

    Default behaviour:
    - content URL of a declared host uses the repository scheme and the
      declared authority
    - the whole repository path identifies the repository
    - ssh:// and git:// remotes become https://{host}{path}
    - http(s):// remotes lose their user name
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        pass

    def default_content_uri_from_host(self, authority: ParsedUri, git_uri: ParsedUri) -> str:
        # Some servers do not serve https, so keep the repository scheme
        return f"{git_uri.scheme}://{authority.authority}"

    def default_content_uri_from_repository(self, repository_uri: ParsedUri) -> str:
        return self.default_content_uri_from_host(repository_uri, repository_uri)

    def parse_relative_path(
        self, git_uri: ParsedUri, relative_url: str, host: HostDeclaration | None
    ) -> ParsedRepositoryPath | None:
        parts = split_relative_url(relative_url)
        if not parts:
            return None
        return ParsedRepositoryPath(
            repository_name=parts[-1],
            repository_path="/".join(parts[:-1]),
        )

    @abstractmethod
    def build_content_url(
        self,
        content_uri: ParsedUri,
        git_uri: ParsedUri,
        relative_url: str,
        revision_id: str,
        host: HostDeclaration | None,
    ) -> str:
        pass

    def translate_ssh_url(self, uri: ParsedUri) -> str | None:
        return f"https://{uri.host}{uri.path_and_query}"

    def translate_git_url(self, uri: ParsedUri) -> str:
        return f"https://{uri.host}{uri.path_and_query}"

    def translate_http_url(self, uri: ParsedUri) -> str:
        return f"{uri.scheme}://{uri.authority}{uri.path_and_query}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def parse_version(text: str) -> tuple[int, ...] | None:
    """Parse ``major.minor[.build[.revision]]``.

    Returns:
        Tuple of two to four integers, or None if the text is not a version
    """
    parts = text.strip().split(".")
    if not 2 <= len(parts) <= _MAX_VERSION_PARTS:
        return None
    if not all(part.isascii() and part.isdigit() for part in parts):
        return None
    return tuple(int(part) for part in parts)


def host_version(
    provider: ISourceLinkProvider,
    host: HostDeclaration | None,
    default: tuple[int, ...],
) -> tuple[int, ...]:
    """Server version declared on a host, or ``default`` when none is declared.

    Raises:
        ProviderAttributeError: If the declared version cannot be parsed
    """
    if host is None or not host.version:
        return default

    version = parse_version(host.version)
    if version is None:
        raise ProviderAttributeError(
            f"host {host.authority} of {provider.name} must specify a valid version",
            attribute="version",
            value=host.version,
        )
    return version
