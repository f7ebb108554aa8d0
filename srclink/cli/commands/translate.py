"""
Native Click implementation of the translate command.

Usage: srclink translate URL [--provider NAME]... [--host SPEC]...
"""

from __future__ import annotations

import click

from ...services.translation import translate_source_roots
from ...utils.git_url import normalize_repository_url
from ..context import SrclinkContext
from ..decorators import handle_errors, provider_options


@click.command("translate")
@click.argument("url")
@provider_options
@click.pass_obj
@handle_errors
def translate(
    ctx: SrclinkContext,
    url: str,
    providers: tuple[str, ...],
    hosts: tuple[str, ...],
) -> None:
    """Print the canonical URL of a git remote.

    SCP-style and ssh:// remotes of known hosts are translated to https://.

    \b
    Example:

        srclink translate git@ssh.dev.azure.com:v3/org/project/repo
    """
    selected, hosts_by_provider = ctx.select_providers(providers, hosts)

    repository_url = normalize_repository_url(url, ctx.cwd) or url
    translated, _ = translate_source_roots(repository_url, [], selected, hosts_by_provider)
    click.echo(translated)
