"""
Dependency injection container for srclink.

Core services (the logger) are dependency-injector providers keyed by
interface. Hosting providers and VCS collaborators live in name-keyed plugin
registries and are instantiated on every lookup; they hold no state.
"""

from collections.abc import Callable, Iterable
from typing import Optional, TypeVar

from dependency_injector import providers

from .exceptions import ProviderNotFoundError
from .interfaces.provider import ISourceLinkProvider
from .interfaces.vcs import IVCSProvider

T = TypeVar("T")


def normalize_provider_name(name: str) -> str:
    """Provider names are case-insensitive and treat '-' like '_'."""
    return name.strip().lower().replace("-", "_")


class ServiceContainer:
    """
    Dependency injection container for srclink.

    Combines dependency-injector's DI capabilities with plugin registries
    for the hosting providers and the VCS collaborator.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        self._providers: dict[type, providers.Provider] = {}
        self._source_link_providers: dict[str, type[ISourceLinkProvider]] = {}
        self._vcs_providers: dict[str, type[IVCSProvider]] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the global container instance (singleton)."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the global container (for testing)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Core services
    # -------------------------------------------------------------------------

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register a singleton service.

        Args:
            interface: The interface type
            implementation: Optional concrete instance
            factory: Optional factory function, called on first resolve
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If no registration found
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        """Try to resolve a service, returning None if not registered."""
        if interface not in self._providers:
            return None
        return self._providers[interface]()

    # -------------------------------------------------------------------------
    # Hosting providers
    # -------------------------------------------------------------------------

    def register_source_link_provider(
        self,
        name: str,
        provider_class: type[ISourceLinkProvider],
    ) -> None:
        """
        Register a hosting provider.

        A later registration under the same name replaces the earlier one.

        Args:
            name: Provider name (e.g., 'github', 'azure_repos')
            provider_class: Class implementing ISourceLinkProvider
        """
        self._source_link_providers[normalize_provider_name(name)] = provider_class

    def get_source_link_provider(self, name: str) -> ISourceLinkProvider:
        """
        Get a hosting provider instance by name.

        Raises:
            ProviderNotFoundError: If no provider is registered under the name
        """
        key = normalize_provider_name(name)
        if key not in self._source_link_providers:
            raise ProviderNotFoundError(
                f"No source link provider registered: {name}",
                plugin_name=name,
                context={"available": ", ".join(sorted(self._source_link_providers))},
            )
        return self._source_link_providers[key]()

    def get_source_link_providers(self, names: Iterable[str]) -> list[ISourceLinkProvider]:
        """
        Instantiate providers in the given order, skipping repeated names.

        Raises:
            ProviderNotFoundError: If a provider is not registered
        """
        seen: set[str] = set()
        result = []
        for name in names:
            key = normalize_provider_name(name)
            if key in seen:
                continue
            seen.add(key)
            result.append(self.get_source_link_provider(key))
        return result

    def list_source_link_providers(self) -> list[str]:
        """List registered hosting provider names."""
        return list(self._source_link_providers.keys())

    # -------------------------------------------------------------------------
    # VCS collaborators
    # -------------------------------------------------------------------------

    def register_vcs_provider(
        self,
        name: str,
        provider_class: type[IVCSProvider],
    ) -> None:
        self._vcs_providers[name] = provider_class

    def get_vcs_provider(self, name: str = "git") -> IVCSProvider:
        """
        Get a VCS provider instance.

        Raises:
            KeyError: If no provider registered
        """
        if name not in self._vcs_providers:
            raise KeyError(f"No VCS provider registered: {name}")
        return self._vcs_providers[name]()


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    return ServiceContainer.get_instance()
