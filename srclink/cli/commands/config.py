"""
Native Click implementation of the config command.

Usage: srclink config [list|get|set|hosts|add-host] [args]
"""

import click

from ...config import config_add_host, config_get, config_list, config_set
from ..context import parse_host_spec
from ..decorators import handle_errors


@click.group("config", invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context) -> None:
    """View or set configuration.

    Config is stored in .srclink/config.toml

    \b
    Examples:

        srclink config list                          # List all options

        srclink config get sourcelink.providers      # Get a value

        srclink config set sourcelink.providers github,gitlab

        srclink config add-host gitlab "git.contoso.com;version=11.0"
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@config.command("list")
@click.pass_obj
def config_list_cmd(ctx) -> None:
    """List all config options with their current values."""
    click.echo("Available config options:")
    click.echo("")

    for key, info in config_list().items():
        current = config_get(key, start_dir=str(ctx.cwd))
        click.echo(f"  {key}")
        click.echo(f"    {info['description']}")
        click.echo(f"    Default: {info['default']}")
        if current is not None and current != info["default"]:
            click.echo(f"    Current: {current}")
        click.echo("")


@config.command("get")
@click.argument("key")
@click.pass_obj
def config_get_cmd(ctx, key: str) -> None:
    """Get a config value.

    Arguments:

        KEY    The config key to get (e.g. sourcelink.remote)
    """
    value = config_get(key, start_dir=str(ctx.cwd))
    if value is None:
        click.echo(f"{key}: (not set)")
    else:
        click.echo(f"{key}: {value}")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
@handle_errors
def config_set_cmd(ctx, key: str, value: str) -> None:
    """Set a config value.

    Arguments:

        KEY    The config key to set

        VALUE  The value to set
    """
    config_path, typed_value = config_set(key, value, start_dir=str(ctx.cwd))
    click.echo(f"Set {key} = {typed_value}")
    click.echo(f"Saved to {config_path}")


@config.command("hosts")
@click.pass_obj
def config_hosts_cmd(ctx) -> None:
    """List the repository hosts declared in configuration."""
    if not ctx.settings.hosts:
        click.echo("No hosts declared.")
        return

    for provider_name, hosts in sorted(ctx.settings.hosts.items()):
        click.echo(f"{provider_name}:")
        for host in hosts:
            attributes = host.model_dump(exclude_none=True, exclude={"authority"})
            details = ", ".join(f"{k}={v}" for k, v in attributes.items())
            click.echo(f"  {host.authority}" + (f" ({details})" if details else ""))


@config.command("add-host")
@click.argument("provider")
@click.argument("spec")
@click.pass_obj
@handle_errors
def config_add_host_cmd(ctx, provider: str, spec: str) -> None:
    """Declare a repository host for a provider.

    Arguments:

        PROVIDER  Provider name (see `srclink providers`)

        SPEC      authority[;key=value]... as accepted by --host
    """
    from ...core.container import get_container

    provider_name = get_container().get_source_link_provider(provider).name
    config_path = config_add_host(provider_name, parse_host_spec(spec), start_dir=str(ctx.cwd))
    click.echo(f"Declared {spec.split(';', 1)[0].strip()} for {provider_name}")
    click.echo(f"Saved to {config_path}")
