"""
Application bootstrap for srclink.

Initializes the DI container with all services and plugins.
This module should be called once at application startup.
"""

from pathlib import Path

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .registry import discover_plugins

_initialized = False


def bootstrap(start_dir: Path | None = None) -> ServiceContainer:
    """
    Bootstrap the srclink application.

    Initializes the DI container with:
    - Core services (logger)
    - Plugins (source link providers, VCS)

    Args:
        start_dir: Directory configuration is looked up from (default: cwd)

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    _register_core_services(container, start_dir)
    discover_plugins()

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, start_dir: Path | None) -> None:
    """Register core application services."""
    from .settings import load_settings
    from ..services.logging import SrclinkLogger

    def create_logger() -> ILogger:
        settings = load_settings(start_dir=str(start_dir) if start_dir else None)
        return SrclinkLogger.from_config(settings.logging)

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
