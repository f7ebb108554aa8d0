"""
Srclink plugin architecture.

This package contains the implementations discovered by the registry:
- providers: Source link hosting providers (GitHub, GitLab, Azure Repos, ...)
- vcs: Version control providers (Git)

New providers can be added without modifying existing code by placing a
module in the package or registering it through the ``srclink.plugins``
entry point group.
"""

from . import providers, vcs

__all__ = ["providers", "vcs"]
