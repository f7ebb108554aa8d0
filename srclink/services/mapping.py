"""
Host-matching mapper.

Turns a provider's host declarations (plus the host implied by the
repository URL) into validated ``UrlMapping``s and picks the content URL for
a repository URL.

Match priority, earlier mappings first within each step:
    1. exact host, same port
    2. exact host, mapping without port
    3. subdomain of the host, same port
    4. subdomain of the host, mapping without port
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence

from ..core.exceptions import (
    ConfigValidationError,
    InvalidHostError,
    InvalidRepositoryUrlError,
    SrclinkException,
)
from ..core.interfaces.provider import ISourceLinkProvider
from ..core.models.config import HostDeclaration
from ..core.models.host import UrlMapping
from ..utils.uri import ParsedUri, parse_authority, parse_uri
from .logging import get_logger

NO_PORT = -1


def build_url_mappings(
    provider: ISourceLinkProvider,
    hosts: Sequence[HostDeclaration],
    repository_url: str | None,
    git_uri: ParsedUri,
    is_single_provider: bool,
) -> tuple[list[UrlMapping], list[SrclinkException]]:
    """
    Validate host declarations and build the mapping list.

    Every invalid declaration is reported; valid ones are still returned.

    Args:
        provider: Provider the hosts are declared for
        hosts: Declared hosts in priority order
        repository_url: URL of the main repository, source of the implicit host
        git_uri: Repository URL of the source root being resolved
        is_single_provider: Whether exactly one provider is enabled

    Returns:
        (mappings, errors)
    """
    mappings: list[UrlMapping] = []
    errors: list[SrclinkException] = []

    for host in hosts:
        authority = parse_authority(host.authority)
        if authority is None:
            errors.append(
                InvalidHostError(
                    f"host '{host.authority}' of {provider.display_name} is not a valid domain name",
                    host=host.authority,
                )
            )
            continue

        if host.content_url:
            content_url = host.content_url
            has_default_content_uri = False
        else:
            content_url = provider.default_content_uri_from_host(authority, git_uri)
            has_default_content_uri = True

        content_uri = parse_uri(content_url)
        if not _is_valid_host_uri(content_uri):
            errors.append(
                InvalidHostError(
                    f"content URL '{content_url}' of host '{host.authority}' is not a valid host URI",
                    host=host.authority,
                )
            )
            continue

        mappings.append(
            UrlMapping(
                host=authority.host,
                port=_mapping_port(authority),
                content_uri=content_uri,
                has_default_content_uri=has_default_content_uri,
                declaration=host,
            )
        )

    if provider.supports_implicit_host and is_single_provider:
        implicit, error = _implicit_mapping(provider, repository_url)
        if error is not None:
            errors.append(error)
        elif implicit is not None:
            mappings.append(implicit)

    return mappings, errors


def _implicit_mapping(
    provider: ISourceLinkProvider, repository_url: str | None
) -> tuple[UrlMapping | None, SrclinkException | None]:
    if not repository_url:
        return None, None

    repository_uri = parse_uri(repository_url)
    if repository_uri is None:
        return None, InvalidRepositoryUrlError(
            f"repository URL '{repository_url}' is not a valid URI", url=repository_url
        )
    if not repository_uri.host:
        return None, InvalidHostError(
            f"repository URL '{repository_url}' is not a valid host URI", host=repository_url
        )

    content_url = provider.default_content_uri_from_repository(repository_uri)
    content_uri = parse_uri(content_url)
    if not _is_valid_host_uri(content_uri):
        return None, InvalidHostError(
            f"content URL '{content_url}' derived from '{repository_url}' is not a valid host URI",
            host=repository_uri.host,
        )

    return (
        UrlMapping(
            host=repository_uri.host,
            port=_mapping_port(repository_uri),
            content_uri=content_uri,
            has_default_content_uri=True,
        ),
        None,
    )


def _is_valid_host_uri(uri: ParsedUri | None) -> bool:
    return uri is not None and bool(uri.host) and not uri.query and uri.userinfo is None


def _mapping_port(uri: ParsedUri) -> int:
    return uri.explicit_port if uri.explicit_port is not None else NO_PORT


def find_matching_content_uri(
    mappings: Sequence[UrlMapping], repo_uri: ParsedUri
) -> tuple[ParsedUri, HostDeclaration | None] | None:
    """
    Select the content URL for a repository URL.

    Returns:
        (content URL, matched host declaration), or None when no mapping
        matches. The declaration is None for the implicit host.
    """
    mapping = _find_match(mappings, repo_uri, exact=True) or _find_match(
        mappings, repo_uri, exact=False
    )
    if mapping is None:
        get_logger().debug(f"No host mapping matches {repo_uri.host}")
        return None

    content_uri = mapping.content_uri

    # A derived content URL follows the repository to its non-default port
    if (
        mapping.has_default_content_uri
        and mapping.port == NO_PORT
        and not repo_uri.is_default_port
        and content_uri.port != repo_uri.port
    ):
        content_uri = dataclasses.replace(content_uri, explicit_port=repo_uri.port)

    get_logger().debug(f"Host {repo_uri.authority} mapped to {content_uri}")
    return content_uri, mapping.declaration


def _find_match(mappings: Sequence[UrlMapping], repo_uri: ParsedUri, *, exact: bool) -> UrlMapping | None:
    candidate: UrlMapping | None = None
    for mapping in mappings:
        if exact:
            matches = repo_uri.host == mapping.host
        else:
            matches = repo_uri.host.endswith("." + mapping.host)

        if not matches:
            continue
        if repo_uri.port == mapping.port:
            return mapping
        if candidate is None and mapping.port == NO_PORT:
            candidate = mapping
    return candidate


def has_single_provider(provider_names: Iterable[str]) -> bool:
    """
    Whether exactly one source link provider is enabled.

    Raises:
        ConfigValidationError: If no provider is enabled
    """
    names = list(provider_names)
    if not names:
        raise ConfigValidationError("no source link providers enabled", key="sourcelink.providers")
    return len(names) == 1


def get_implicit_repository_host(provider_names: Iterable[str], repository_url: str | None) -> str | None:
    """Authority of the host implied by the repository URL, if one applies."""
    if not has_single_provider(provider_names):
        return None
    repository_uri = parse_uri(repository_url)
    if repository_uri is None or not repository_uri.host:
        return None
    return repository_uri.authority


def hosts_for_provider(
    provider: ISourceLinkProvider, declared: Iterable[HostDeclaration] = ()
) -> list[HostDeclaration]:
    """Built-in hosts of a provider followed by the declared ones."""
    return [*provider.default_hosts, *declared]
