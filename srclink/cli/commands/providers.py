"""
Native Click implementation of the providers command.

Usage: srclink providers
"""

from __future__ import annotations

import click

from ...core.container import get_container
from ..context import SrclinkContext


@click.command("providers")
@click.pass_obj
def providers(ctx: SrclinkContext) -> None:
    """List source link providers and their hosts.

    Providers marked with * are enabled in the configuration.
    """
    container = get_container()
    enabled = set(ctx.settings.sourcelink.providers)

    for name in sorted(container.list_source_link_providers()):
        provider = container.get_source_link_provider(name)
        marker = "*" if name in enabled else " "
        click.echo(f"{marker} {name:<22} {provider.display_name}")

        hosts = [*provider.default_hosts, *ctx.settings.hosts_for(name)]
        for host in hosts:
            content = f" -> {host.content_url}" if host.content_url else ""
            click.echo(f"      {host.authority}{content}")
