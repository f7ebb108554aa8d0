"""
Plugin registry with auto-discovery.

Automatically discovers and registers plugins from:
1. Built-in plugins in srclink.plugins.*
2. Entry point plugins from external packages
"""

import importlib
import pkgutil

from .container import ServiceContainer, get_container
from .interfaces.provider import ISourceLinkProvider
from .interfaces.vcs import IVCSProvider

PLUGIN_SUBPACKAGES = ["providers", "vcs"]
ENTRY_POINT_GROUP = "srclink.plugins"


def _get_logger():
    from ..services.logging import get_logger

    return get_logger()


def discover_plugins(package_name: str = "srclink.plugins") -> None:
    """
    Auto-discover and register plugins.

    Scans srclink.plugins.* for classes implementing provider interfaces.
    Also supports entry points for external plugins.

    Args:
        package_name: Base package to scan for plugins
    """
    container = get_container()
    _discover_builtin_plugins(container, package_name)
    _discover_entrypoint_plugins(container)


def _discover_builtin_plugins(container: ServiceContainer, package_name: str) -> None:
    """Discover plugins from the built-in plugins package."""
    for subpackage in PLUGIN_SUBPACKAGES:
        try:
            subpkg = importlib.import_module(f"{package_name}.{subpackage}")
        except ImportError as e:
            _get_logger().debug("Plugin package %s.%s not importable: %s", package_name, subpackage, e)
            continue
        _scan_package_for_plugins(container, subpkg)


def _scan_package_for_plugins(container: ServiceContainer, package) -> None:
    """Scan a package for plugin classes and register them."""
    package_path = getattr(package, "__path__", None)
    if not package_path:
        return

    for _importer, modname, _ispkg in pkgutil.iter_modules(package_path):
        # Skip private modules and base classes
        if modname.startswith("_") or modname == "base":
            continue

        module = importlib.import_module(f"{package.__name__}.{modname}")

        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if not isinstance(attr, type) or attr.__module__ != module.__name__:
                continue
            _register_plugin_class(container, attr)


def _register_plugin_class(container: ServiceContainer, cls: type) -> bool:
    """Register a class under the registry matching the interface it implements."""
    if _implements(cls, ISourceLinkProvider):
        container.register_source_link_provider(cls().name, cls)
        return True
    if _implements(cls, IVCSProvider):
        container.register_vcs_provider(cls().name, cls)
        return True
    return False


def _implements(cls: type, interface: type) -> bool:
    """
    Check if a class implements an interface.

    Returns True if cls is a concrete subclass of interface
    (not the interface itself and not abstract).
    """
    try:
        return (
            isinstance(cls, type)
            and issubclass(cls, interface)
            and cls is not interface
            and not getattr(cls, "__abstractmethods__", set())
        )
    except TypeError:
        return False


def _discover_entrypoint_plugins(container: ServiceContainer) -> None:
    """
    Discover plugins registered via entry points.

    External packages can register providers by adding to pyproject.toml:

        [project.entry-points."srclink.plugins"]
        my_host = "my_package.provider:MyHostProvider"
    """
    from importlib.metadata import entry_points

    for ep in entry_points(group=ENTRY_POINT_GROUP):
        try:
            plugin_cls = ep.load()
        except Exception as e:
            # Don't fail startup due to broken external plugins
            _get_logger().warning("Failed to load entry point plugin %s: %s", ep.name, e)
            continue
        if not _register_plugin_class(container, plugin_cls):
            _get_logger().warning("Entry point plugin %s implements no known interface", ep.name)


def register_plugin(cls: type) -> type:
    """
    Decorator to manually register a plugin class.

    Usage:
        @register_plugin
        class MyHostProvider(BaseSourceLinkProvider):
            ...
    """
    _register_plugin_class(get_container(), cls)
    return cls
