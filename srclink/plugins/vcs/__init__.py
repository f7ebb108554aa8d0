"""
Version control system provider plugins.

Provides implementations for various VCS backends.
"""

from .base import BaseVCSProvider
from .git import GitVCSProvider

__all__ = [
    "BaseVCSProvider",
    "GitVCSProvider",
]
