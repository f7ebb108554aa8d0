"""
Native Click implementation of the resolve command.

Usage: srclink resolve URL REVISION [--provider NAME]... [--host SPEC]...
"""

from __future__ import annotations

import os

import click

from ...core.models.source_root import NOT_APPLICABLE, RepositoryRoot
from ...services.source_link import resolve_source_roots
from ...services.translation import translate_source_roots
from ...utils.git_url import normalize_repository_url
from ..context import SrclinkContext
from ..decorators import handle_errors, provider_options


@click.command("resolve")
@click.argument("url")
@click.argument("revision")
@provider_options
@click.pass_obj
@handle_errors
def resolve(
    ctx: SrclinkContext,
    url: str,
    revision: str,
    providers: tuple[str, ...],
    hosts: tuple[str, ...],
) -> None:
    """Print the content URL template of a repository at a commit.

    The URL is first translated the way `srclink translate` does it.
    Prints N/A when no provider handles the repository host.

    \b
    Examples:

        srclink resolve https://github.com/org/repo.git 0123...cdef

        srclink resolve https://tfs.local/tfs/C/P/_git/R 0123...cdef \\
            -p azure_devops_server --host "tfs.local;virtual_directory=tfs"
    """
    selected, hosts_by_provider = ctx.select_providers(providers, hosts)

    repository_url = normalize_repository_url(url, ctx.cwd) or url
    repository_url, _ = translate_source_roots(repository_url, [], selected, hosts_by_provider)
    root = RepositoryRoot(
        local_path=str(ctx.cwd).rstrip(os.sep) + os.sep,
        repository_url=repository_url,
        revision_id=revision,
    )

    [resolved] = resolve_source_roots([root], selected, hosts_by_provider, repository_url)
    click.echo(resolved.source_link_url or NOT_APPLICABLE)
