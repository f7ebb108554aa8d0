"""
Pydantic models for srclink.

Exports the base classes, configuration sections and the domain values that
flow through the source link pipeline.
"""

from .base import ImmutableModel, SrclinkBaseModel
from .config import (
    ConfigBaseModel,
    HostDeclaration,
    LoggingConfig,
    SourceLinkConfig,
    SrclinkConfig,
)
from .host import UrlMapping
from .repository_path import ParsedRepositoryPath
from .source_root import NOT_APPLICABLE, RepositoryRoot

__all__ = [
    "NOT_APPLICABLE",
    "ConfigBaseModel",
    "HostDeclaration",
    "ImmutableModel",
    "LoggingConfig",
    "ParsedRepositoryPath",
    "RepositoryRoot",
    "SourceLinkConfig",
    "SrclinkBaseModel",
    "SrclinkConfig",
    "UrlMapping",
]
