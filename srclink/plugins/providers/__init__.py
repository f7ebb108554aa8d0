"""
Source link providers.

Each module defines one ``ISourceLinkProvider`` implementation. Providers are
discovered and registered automatically by ``srclink.core.registry``.
"""

from .base import BaseSourceLinkProvider

__all__ = ["BaseSourceLinkProvider"]
