"""
Click-based CLI for srclink.

This module provides the main Click command group and serves as the
entry point for the srclink CLI.

Usage:
    from srclink.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

import click

from .context import SrclinkContext

# Version is loaded from package metadata
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("srclink")
except PackageNotFoundError:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="srclink")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """srclink - source link URL mapping

    Maps the source control metadata of a repository to content URLs
    that let debuggers download the exact source of a build.

    \b
    Quick Start:
        srclink generate              Write sourcelink.json for the current repository
        srclink lookup FILE.json PATH Find the URL of a local file

    \b
    URLs:
        srclink resolve URL REVISION  Content URL template of a repository
        srclink translate URL         Canonical HTTPS URL of a remote
        srclink providers             List hosting providers

    \b
    Configuration:
        srclink config                View or set configuration
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        ctx.obj = SrclinkContext.create()


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


# Register commands at module load time
register_commands()


# Export public API
__all__ = [
    "SrclinkContext",
    "__version__",
    "cli",
    "register_commands",
]
