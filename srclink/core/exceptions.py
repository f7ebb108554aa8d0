"""
Custom exception hierarchy for srclink.

Every failure that the engine reports to a caller is one of these types.
A result that is simply not applicable (wrong provider, unmatched host) is
not an error and is signalled with the ``N/A`` sentinel instead.
"""

from __future__ import annotations


class SrclinkException(Exception):
    """
    Base exception for all srclink errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (hosts, URLs, paths, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class SrclinkConfigError(SrclinkException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(SrclinkConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors, file not found, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(SrclinkConfigError, ValueError):
    """
    Invalid or missing configuration value.

    Inherits from ValueError so callers that validate input with
    ``except ValueError`` keep working.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Validation Errors
# =============================================================================


class SrclinkValidationError(SrclinkException, ValueError):
    """Base class for invalid hosts, URLs, revisions and provider attributes."""

    pass


class InvalidHostError(SrclinkValidationError):
    """A declared host authority or content URL is malformed."""

    def __init__(
        self,
        message: str,
        *,
        host: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if host is not None:
            ctx["host"] = host
        super().__init__(message, context=ctx, cause=cause)


class InvalidRepositoryUrlError(SrclinkValidationError):
    """A repository URL is not absolute or does not fit the provider's grammar."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if url is not None:
            ctx["url"] = url
        super().__init__(message, context=ctx, cause=cause)


class InvalidRevisionError(SrclinkValidationError):
    """A revision id is not in the form the provider requires."""

    def __init__(
        self,
        message: str,
        *,
        revision: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if revision is not None:
            ctx["revision"] = revision
        super().__init__(message, context=ctx, cause=cause)


class ProviderAttributeError(SrclinkValidationError):
    """A host declaration or source root lacks an attribute the provider needs."""

    def __init__(
        self,
        message: str,
        *,
        attribute: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if attribute:
            ctx["attribute"] = attribute
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


class MissingRepositoryHostError(SrclinkValidationError):
    """No host mapping (explicit or implicit) is available for a provider."""

    pass


class InvalidArgumentError(SrclinkValidationError):
    """
    Invalid command line argument.

    Raised when a CLI option (e.g. ``--host``) cannot be parsed.
    """

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if argument:
            ctx["argument"] = argument
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Translation Errors
# =============================================================================


class UnsupportedTranslationError(SrclinkException):
    """
    A provider cannot express a URL of the given scheme.

    This is a hard error rather than a validation failure: the input is
    well formed but the provider has no HTTP equivalent for it.
    """

    recoverable = False

    def __init__(
        self,
        message: str,
        *,
        scheme: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if scheme:
            ctx["scheme"] = scheme
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Manifest Errors
# =============================================================================


class SrclinkManifestError(SrclinkException):
    """Base class for source link manifest errors."""

    pass


class ManifestPathError(SrclinkManifestError):
    """A source root's local path cannot be used as a manifest key."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path is not None:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)


class ManifestUrlError(SrclinkManifestError):
    """A source root's URL cannot be used as a manifest value."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if url is not None:
            ctx["url"] = url
        super().__init__(message, context=ctx, cause=cause)


class ManifestFormatError(SrclinkManifestError, ValueError):
    """A source link document does not have the expected structure."""

    pass


class ManifestWriteError(SrclinkManifestError):
    """The source link file could not be written or removed."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path is not None:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)


class SourceLinkErrors(SrclinkException):
    """
    Aggregate of every error collected while processing a batch.

    Batch operations keep going after a failing source root so that all
    problems can be reported at once.

    Attributes:
        errors: The individual errors in the order they were found
    """

    def __init__(self, errors: list[SrclinkException], *, message: str | None = None) -> None:
        self.errors = list(errors)
        if message is None:
            if len(self.errors) == 1:
                message = str(self.errors[0])
            else:
                message = f"{len(self.errors)} source link errors"
        super().__init__(message)

    def __iter__(self):
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


# =============================================================================
# Plugin Errors
# =============================================================================


class SrclinkPluginError(SrclinkException):
    """Base class for plugin-related errors."""

    pass


class ProviderNotFoundError(SrclinkPluginError):
    """
    Requested source link provider not found.

    Raised when a provider named in configuration or on the command line
    is not registered.
    """

    def __init__(
        self,
        message: str,
        *,
        plugin_name: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if plugin_name:
            ctx["plugin_name"] = plugin_name
        super().__init__(message, context=ctx, cause=cause)
