"""
Configuration models.

Provides Pydantic models for srclink configuration with validation.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import SrclinkBaseModel

# Type aliases
LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_PROVIDERS = ["github", "gitlab", "bitbucket", "azure_repos", "gitee"]


class ConfigBaseModel(SrclinkBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class HostDeclaration(ConfigBaseModel):
    """A declared repository host.

    Associates a hosting domain (``host[:port]``) with the URL that serves raw
    file content, plus the attributes some providers need (virtual directory,
    enterprise edition flag, server version).
    """

    authority: str
    content_url: str | None = None
    virtual_directory: str | None = None
    enterprise_edition: bool | None = None
    version: str | None = None


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = True
    path: str | None = None


class SourceLinkConfig(ConfigBaseModel):
    """Source link generation configuration section."""

    providers: list[str] = Field(default_factory=lambda: list(DEFAULT_PROVIDERS))
    remote: str = "origin"
    output: str = "sourcelink.json"
    warn_on_missing_source_control: bool = True

    @field_validator("providers", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        """Parse comma-separated string to list."""
        if isinstance(v, str):
            return [x.strip() for x in v.split(",") if x.strip()]
        return v if v else []


class SrclinkConfig(ConfigBaseModel):
    """Complete srclink configuration.

    This model represents the full configuration with all sections.
    It can be loaded from TOML files or constructed programmatically.
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    sourcelink: SourceLinkConfig = Field(default_factory=SourceLinkConfig)
    hosts: dict[str, list[HostDeclaration]] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the nested dict format used by config files."""
        return self.model_dump(exclude_none=True)
