"""
Base VCS provider.

Defines the interface for version control system providers.
"""

from abc import abstractmethod

from ...core.interfaces.vcs import IVCSProvider
from ...core.models.source_root import RepositoryRoot


class BaseVCSProvider(IVCSProvider):
    """
    Abstract base class for VCS providers.

    Implements the Strategy pattern for version control operations.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the VCS name (e.g., 'git')."""
        pass

    @abstractmethod
    def get_repo_root(self, path: str | None = None) -> str | None:
        pass

    @abstractmethod
    def get_revision_id(self, repo_root: str) -> str | None:
        pass

    @abstractmethod
    def get_remote_url(self, repo_root: str, remote: str = "origin") -> str | None:
        pass

    @abstractmethod
    def get_source_roots(self, repo_root: str, remote: str = "origin") -> list[RepositoryRoot]:
        pass

    def is_available(self) -> bool:
        """
        Check if this VCS is available on the system.

        Returns:
            True if the VCS tool is installed
        """
        return True
