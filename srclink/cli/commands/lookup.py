"""
Native Click implementation of the lookup command.

Usage: srclink lookup MANIFEST FILE_PATH
"""

from __future__ import annotations

from pathlib import Path

import click

from ...services.manifest import SourceLinkMap
from ..decorators import handle_errors


@click.command("lookup")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("file_path")
@handle_errors
def lookup(manifest: Path, file_path: str) -> None:
    """Print the URL a debugger downloads a local file from.

    \b
    Example:

        srclink lookup sourcelink.json /home/me/repo/src/main.c
    """
    url = SourceLinkMap.load(manifest).try_get_url(file_path)
    if url is None:
        raise click.ClickException(f"No source link entry matches: {file_path}")
    click.echo(url)
