"""
Source link provider interface definitions.

Each hosting service (GitHub, GitLab, Azure Repos, ...) is one provider. The
host matcher and resolver drive the flow; a provider only supplies the parts
that differ between services: how default content URLs are derived, how the
repository path is parsed, how the final content URL is shaped, and how
non-HTTP remotes are translated to HTTPS.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models.config import HostDeclaration
from ..models.repository_path import ParsedRepositoryPath
from ..models.source_root import RepositoryRoot
from ...utils.uri import ParsedUri


class ISourceLinkProvider(ABC):
    """
    Interface for a source link hosting provider.

    Implementations are discovered from ``srclink.plugins.providers`` and
    registered by ``name``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Provider identifier used in configuration.

        Examples: 'github', 'azure_repos', 'gitweb'
        """
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human readable name used in messages."""
        pass

    @property
    def source_control(self) -> str:
        """Kind of source root the provider handles."""
        return "git"

    @property
    def supports_implicit_host(self) -> bool:
        """Whether a host mapping may be derived from the repository URL itself."""
        return True

    @property
    def default_hosts(self) -> list[HostDeclaration]:
        """Hosts that are mapped without any configuration."""
        return []

    @abstractmethod
    def default_content_uri_from_host(self, authority: ParsedUri, git_uri: ParsedUri) -> str:
        """
        Content URL for a declared host that has no explicit content URL.

        Args:
            authority: The declared host, parsed as a bare authority
            git_uri: The repository URL being resolved

        Returns:
            Absolute content URL
        """
        pass

    @abstractmethod
    def default_content_uri_from_repository(self, repository_uri: ParsedUri) -> str:
        """Content URL for the host implied by the repository URL."""
        pass

    @abstractmethod
    def parse_relative_path(
        self, git_uri: ParsedUri, relative_url: str, host: HostDeclaration | None
    ) -> ParsedRepositoryPath | None:
        """
        Decompose a repository path into provider specific components.

        Returns:
            Parsed components, or None if the path does not fit the grammar
        """
        pass

    @abstractmethod
    def build_content_url(
        self,
        content_uri: ParsedUri,
        git_uri: ParsedUri,
        relative_url: str,
        revision_id: str,
        host: HostDeclaration | None,
    ) -> str:
        """
        Build the content URL template for a resolved root.

        Args:
            content_uri: Content URL of the matched host
            git_uri: Repository URL
            relative_url: Repository path without trailing '/' and '.git'
            revision_id: Validated commit id
            host: Matched host declaration (None for the implicit host)

        Returns:
            URL containing exactly one '*' wildcard
        """
        pass

    @abstractmethod
    def translate_ssh_url(self, uri: ParsedUri) -> str | None:
        """Translate an ``ssh://`` remote, or None to keep it unchanged."""
        pass

    @abstractmethod
    def translate_git_url(self, uri: ParsedUri) -> str:
        """Translate a ``git://`` remote."""
        pass

    @abstractmethod
    def translate_http_url(self, uri: ParsedUri) -> str:
        """Normalize an ``http(s)://`` remote."""
        pass

    def build_root_url(self, root: RepositoryRoot) -> str:
        """
        Build the content URL for a root without host matching.

        Only providers whose ``source_control`` is not git implement this.
        """
        raise NotImplementedError(f"{self.display_name} resolves roots through host mappings")
