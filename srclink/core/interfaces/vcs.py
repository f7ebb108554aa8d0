"""
Version control system provider interface definitions.

The VCS provider is the collaborator that discovers repositories and their
remotes. The source link engine itself never talks to a VCS.
"""

from abc import ABC, abstractmethod

from ..models.source_root import RepositoryRoot


class IVCSProvider(ABC):
    """
    Interface for version control system operations.

    Implementations handle VCS-specific operations while
    conforming to this common interface.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        VCS identifier.

        Examples: 'git', 'hg', 'svn'
        """
        pass

    @abstractmethod
    def get_repo_root(self, path: str | None = None) -> str | None:
        """
        Find the repository root from path.

        Args:
            path: Directory to start searching from (default: cwd)

        Returns:
            Path to repo root, or None if not in a repository
        """
        pass

    @abstractmethod
    def get_revision_id(self, repo_root: str) -> str | None:
        """
        Get the commit checked out in the working directory.

        Returns:
            Commit id, or None for a repository without commits
        """
        pass

    @abstractmethod
    def get_remote_url(self, repo_root: str, remote: str = "origin") -> str | None:
        """
        Get the normalized URL of a remote.

        Returns:
            Absolute URL, or None if the remote is missing or invalid
        """
        pass

    @abstractmethod
    def get_source_roots(self, repo_root: str, remote: str = "origin") -> list[RepositoryRoot]:
        """
        Enumerate the repository and its initialized submodules.

        Args:
            repo_root: Path to repository root
            remote: Name of the remote whose URL is recorded

        Returns:
            One RepositoryRoot per working directory
        """
        pass
