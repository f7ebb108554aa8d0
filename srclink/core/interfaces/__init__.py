"""
Interface definitions for srclink services and plugins.
"""

from .logger import ILogger
from .provider import ISourceLinkProvider
from .vcs import IVCSProvider

__all__ = [
    "ILogger",
    "ISourceLinkProvider",
    "IVCSProvider",
]
