"""
Click context extension for srclink CLI.

Provides SrclinkContext dataclass that holds srclink-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..core.exceptions import InvalidArgumentError
from ..core.interfaces.provider import ISourceLinkProvider
from ..core.models.config import HostDeclaration
from ..core.settings import SrclinkSettings, load_settings

HOST_ATTRIBUTES = ("content_url", "virtual_directory", "enterprise_edition", "version")


@dataclass
class SrclinkContext:
    """Extended context passed through Click command chain.

    Attributes:
        cwd: Current working directory
        settings: Settings loaded from the config file and environment
    """

    cwd: Path
    settings: SrclinkSettings

    @classmethod
    def create(cls, cwd: Path | None = None) -> SrclinkContext:
        """Create a SrclinkContext for the current environment.

        Bootstraps the container (logger, plugins) and loads settings.

        Args:
            cwd: Working directory override (defaults to Path.cwd())
        """
        from ..core.bootstrap import bootstrap

        if cwd is None:
            cwd = Path.cwd()

        bootstrap(cwd)
        return cls(cwd=cwd, settings=load_settings(start_dir=str(cwd)))

    def select_providers(
        self,
        provider_names: Sequence[str] = (),
        host_specs: Sequence[str] = (),
    ) -> tuple[list[ISourceLinkProvider], dict[str, list[HostDeclaration]]]:
        """Providers to run and the hosts declared for each.

        Args:
            provider_names: Providers named on the command line; the
                configured providers when empty
            host_specs: ``--host`` values, declared for the single provider
                named on the command line

        Returns:
            (providers, hosts by provider name)

        Raises:
            InvalidArgumentError: If hosts are given without exactly one provider
            ProviderNotFoundError: If a provider is not registered
        """
        from ..core.container import get_container

        names = list(provider_names) or list(self.settings.sourcelink.providers)
        providers = get_container().get_source_link_providers(names)
        if host_specs and (not provider_names or len(providers) != 1):
            raise InvalidArgumentError(
                "--host requires exactly one --provider", argument="--host"
            )

        hosts_by_provider = {p.name: self.settings.hosts_for(p.name) for p in providers}
        for spec in host_specs:
            hosts_by_provider[providers[0].name].append(parse_host_spec(spec))

        return providers, hosts_by_provider


def parse_host_spec(spec: str) -> HostDeclaration:
    """Parse ``authority[;key=value]...`` into a host declaration.

    Example:
        >>> parse_host_spec("tfs.local;virtual_directory=tfs").virtual_directory
        'tfs'
    """
    authority, *attributes = spec.split(";")
    if not authority.strip():
        raise InvalidArgumentError("host authority is empty", argument="--host", value=spec)

    values: dict[str, str] = {}
    for attribute in attributes:
        key, sep, value = attribute.partition("=")
        key = key.strip()
        if not sep or key not in HOST_ATTRIBUTES:
            raise InvalidArgumentError(
                f"invalid host attribute '{attribute}', expected one of: {', '.join(HOST_ATTRIBUTES)}",
                argument="--host",
                value=spec,
            )
        values[key] = value.strip()

    try:
        return HostDeclaration(authority=authority.strip(), **values)
    except ValueError as e:
        raise InvalidArgumentError(
            f"invalid host declaration: {spec}", argument="--host", value=spec, cause=e
        ) from e
