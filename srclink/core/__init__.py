"""
Core infrastructure for srclink's dependency injection and plugin architecture.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Plugin registry with auto-discovery
- Application bootstrap for initialization
- Interface definitions for providers and collaborators
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container
from .exceptions import (
    ConfigFileError,
    ConfigValidationError,
    InvalidArgumentError,
    InvalidHostError,
    InvalidRepositoryUrlError,
    InvalidRevisionError,
    ManifestFormatError,
    ManifestPathError,
    ManifestUrlError,
    ManifestWriteError,
    MissingRepositoryHostError,
    ProviderAttributeError,
    ProviderNotFoundError,
    SourceLinkErrors,
    SrclinkConfigError,
    SrclinkException,
    SrclinkManifestError,
    SrclinkPluginError,
    SrclinkValidationError,
    UnsupportedTranslationError,
)
from .registry import discover_plugins, register_plugin

__all__ = [
    "ConfigFileError",
    "ConfigValidationError",
    "InvalidArgumentError",
    "InvalidHostError",
    "InvalidRepositoryUrlError",
    "InvalidRevisionError",
    "ManifestFormatError",
    "ManifestPathError",
    "ManifestUrlError",
    "ManifestWriteError",
    "MissingRepositoryHostError",
    "ProviderAttributeError",
    "ProviderNotFoundError",
    "ServiceContainer",
    "SourceLinkErrors",
    "SrclinkConfigError",
    "SrclinkException",
    "SrclinkManifestError",
    "SrclinkPluginError",
    "SrclinkValidationError",
    "UnsupportedTranslationError",
    "bootstrap",
    "discover_plugins",
    "get_container",
    "is_initialized",
    "register_plugin",
    "reset",
]
