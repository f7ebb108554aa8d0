"""
Native Click implementation of the generate command.

Usage: srclink generate [PATH] [-o OUTPUT] [--provider NAME]... [--host SPEC]...
"""

from __future__ import annotations

from pathlib import Path

import click

from ...core.container import get_container
from ...services.manifest import generate_source_link_content, write_source_link_file
from ...services.source_link import resolve_source_roots
from ...services.translation import translate_source_roots
from ..context import SrclinkContext
from ..decorators import handle_errors, provider_options


@click.command("generate")
@click.argument("path", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Source link file to write (default: sourcelink.output setting)",
)
@click.option("--remote", help="Git remote to record (default: sourcelink.remote setting)")
@provider_options
@click.pass_obj
@handle_errors
def generate(
    ctx: SrclinkContext,
    path: Path | None,
    output: Path | None,
    remote: str | None,
    providers: tuple[str, ...],
    hosts: tuple[str, ...],
) -> None:
    """Generate the source link file of a git repository.

    Discovers the repository containing PATH (default: current directory)
    and its submodules, translates their remote URLs and writes a file
    mapping each working directory to its content URL.

    \b
    Examples:

        srclink generate                     # Write sourcelink.json

        srclink generate src -o obj/sourcelink.json
    """
    settings = ctx.settings.sourcelink
    selected, hosts_by_provider = ctx.select_providers(providers, hosts)

    vcs = get_container().get_vcs_provider("git")
    start = path if path is not None else ctx.cwd
    repo_root = vcs.get_repo_root(str(start))
    if repo_root is None:
        raise click.ClickException(f"Not a git repository: {start}")

    roots = vcs.get_source_roots(repo_root, remote or settings.remote)
    repository_url, roots = translate_source_roots(
        roots[0].repository_url, roots, selected, hosts_by_provider
    )
    roots = resolve_source_roots(roots, selected, hosts_by_provider, repository_url)

    content = generate_source_link_content(roots)
    output_path = output if output is not None else ctx.cwd / settings.output
    written = write_source_link_file(content, output_path, settings.warn_on_missing_source_control)

    if written is None:
        click.echo("No source link information available, no file written")
        return

    for root in roots:
        if root.source_link_url:
            click.echo(f"{root.local_path} -> {root.source_link_url}")
    click.echo(f"Source link file: {written}")
