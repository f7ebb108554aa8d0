"""
Click decorators for srclink CLI commands.

- provider_options: adds the --provider and --host options
- handle_errors: reports srclink errors as Click errors
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from ..core.exceptions import SourceLinkErrors, SrclinkException

F = TypeVar("F", bound=Callable[..., Any])


def provider_options(f: F) -> F:
    """Add ``--provider`` and ``--host`` options to a command."""
    f = click.option(
        "--host",
        "hosts",
        multiple=True,
        metavar="SPEC",
        help="Host declaration 'authority[;key=value]...' for the provider "
        "(keys: content_url, virtual_directory, enterprise_edition, version)",
    )(f)
    f = click.option(
        "--provider",
        "-p",
        "providers",
        multiple=True,
        metavar="NAME",
        help="Provider to use (repeatable; default: configured providers)",
    )(f)
    return f


def handle_errors(f: F) -> F:
    """Convert srclink exceptions into ``click.ClickException``.

    Every error of a batch is printed to stderr before the command fails.
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except SourceLinkErrors as e:
            if len(e) > 1:
                for error in e:
                    click.echo(f"error: {error}", err=True)
            raise click.ClickException(str(e)) from e
        except SrclinkException as e:
            raise click.ClickException(str(e)) from e

    return wrapper  # type: ignore[return-value]
