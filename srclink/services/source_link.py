"""
Source root resolver.

Drives one provider over a source root: validates the root, builds the host
mappings, selects the content URL and hands the pieces to the provider's
content URL builder. Roots a provider does not handle resolve to ``N/A``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence

from ..core.exceptions import (
    InvalidRepositoryUrlError,
    InvalidRevisionError,
    MissingRepositoryHostError,
    SourceLinkErrors,
    SrclinkException,
)
from ..core.interfaces.provider import ISourceLinkProvider
from ..core.models.config import HostDeclaration
from ..core.models.source_root import NOT_APPLICABLE, RepositoryRoot
from ..utils.uri import parse_uri
from .logging import get_logger
from .mapping import (
    build_url_mappings,
    find_matching_content_uri,
    has_single_provider,
    hosts_for_provider,
)

_COMMIT_SHA_RE = re.compile(r"[0-9a-fA-F]{40}")
_GIT_SUFFIX = ".git"


def is_commit_sha(revision_id: str | None) -> bool:
    return revision_id is not None and _COMMIT_SHA_RE.fullmatch(revision_id) is not None


def repository_relative_url(path: str) -> str:
    """Repository path without trailing '/' and without a '.git' suffix.

    The suffix is case-sensitive and is kept when it is a whole segment.
    """
    relative_url = path.rstrip("/")
    if relative_url.endswith(_GIT_SUFFIX) and not relative_url.endswith("/" + _GIT_SUFFIX):
        relative_url = relative_url[: -len(_GIT_SUFFIX)]
    return relative_url


class SourceLinkUrlResolver:
    """
    Computes content URLs of source roots for one provider.

    Args:
        provider: The hosting provider
        hosts: Host declarations in priority order
        repository_url: URL of the main repository (source of the implicit host)
        is_single_provider: Whether this is the only enabled provider
    """

    def __init__(
        self,
        provider: ISourceLinkProvider,
        hosts: Sequence[HostDeclaration],
        repository_url: str | None = None,
        is_single_provider: bool = False,
    ) -> None:
        self.provider = provider
        self.hosts = list(hosts)
        self.repository_url = repository_url
        self.is_single_provider = is_single_provider

    def resolve(self, root: RepositoryRoot | None) -> str | None:
        """
        Compute the content URL of a source root.

        Returns:
            The content URL, ``N/A`` when the provider does not apply to the
            root, or None when there is no root

        Raises:
            SrclinkValidationError: If the root or the host declarations are invalid
            SourceLinkErrors: If several host declarations are invalid
        """
        if root is None:
            return None

        if root.has_source_link_url or root.source_control.lower() != self.provider.source_control:
            return NOT_APPLICABLE

        if self.provider.source_control != "git":
            return self.provider.build_root_url(root)

        if not root.repository_url:
            if not root.revision_id:
                get_logger().warning(
                    f"Unable to determine repository url for '{root.local_path}', "
                    "the source code won't be available via source link"
                )
            return NOT_APPLICABLE

        git_uri = parse_uri(root.repository_url)
        if git_uri is None:
            raise InvalidRepositoryUrlError(
                f"repository URL of '{root.local_path}' is invalid", url=root.repository_url
            )

        mappings, errors = build_url_mappings(
            self.provider, self.hosts, self.repository_url, git_uri, self.is_single_provider
        )
        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise SourceLinkErrors(errors)

        if not mappings:
            raise MissingRepositoryHostError(
                f"at least one repository host is required for {self.provider.display_name}",
                context={"provider": self.provider.name},
            )

        match = find_matching_content_uri(mappings, git_uri)
        if match is None:
            return NOT_APPLICABLE
        content_uri, host = match

        if not is_commit_sha(root.revision_id):
            raise InvalidRevisionError(
                f"revision of '{root.local_path}' is not a valid commit hash",
                revision=root.revision_id,
            )

        relative_url = repository_relative_url(git_uri.path)
        return self.provider.build_content_url(
            content_uri, git_uri, relative_url, root.revision_id, host
        )


def resolve_source_roots(
    roots: Iterable[RepositoryRoot],
    providers: Sequence[ISourceLinkProvider],
    hosts_by_provider: Mapping[str, Sequence[HostDeclaration]] | None = None,
    repository_url: str | None = None,
) -> list[RepositoryRoot]:
    """
    Attach content URLs to source roots.

    Providers are tried in order; the first one that applies sets the URL.
    Processing continues past failing roots so every error is reported.

    Returns:
        The roots, with ``source_link_url`` set where a provider applied

    Raises:
        SourceLinkErrors: If any root failed
        ConfigValidationError: If no provider is enabled
    """
    hosts_by_provider = hosts_by_provider or {}
    is_single_provider = has_single_provider(p.name for p in providers)
    resolvers = [
        SourceLinkUrlResolver(
            provider,
            hosts_for_provider(provider, hosts_by_provider.get(provider.name, ())),
            repository_url,
            is_single_provider,
        )
        for provider in providers
    ]

    errors: list[SrclinkException] = []
    resolved: list[RepositoryRoot] = []
    for root in roots:
        for resolver in resolvers:
            try:
                url = resolver.resolve(root)
            except SourceLinkErrors as e:
                errors.extend(e.errors)
                break
            except SrclinkException as e:
                errors.append(e)
                break

            if url and url != NOT_APPLICABLE:
                root = root.with_source_link_url(url)
                break
        resolved.append(root)

    if errors:
        raise SourceLinkErrors(errors)
    return resolved
