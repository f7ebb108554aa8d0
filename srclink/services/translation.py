"""
Repository URL translator.

Rewrites remotes recorded by git (ssh://, git://, http(s):// with user names)
into the canonical URL stored as repository metadata. Only URLs whose host is
one of the provider's hosts, or a subdomain of one, are rewritten.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from ..core.interfaces.provider import ISourceLinkProvider
from ..core.models.config import HostDeclaration
from ..core.models.source_root import RepositoryRoot
from ..utils.uri import ParsedUri, parse_authority, parse_uri
from .logging import get_logger
from .mapping import has_single_provider, hosts_for_provider


class RepositoryUrlTranslator:
    """
    Translates repository URLs for one provider.

    Args:
        provider: Provider whose translation rules apply
        hosts: Declared hosts; declarations that are not valid authorities
            are ignored
        is_single_provider: Whether the repository URL itself may act as a host
    """

    def __init__(
        self,
        provider: ISourceLinkProvider,
        hosts: Sequence[HostDeclaration],
        is_single_provider: bool = False,
    ) -> None:
        self._provider = provider
        self._is_single_provider = is_single_provider
        self._declared_hosts = [
            uri for uri in (parse_authority(host.authority) for host in hosts) if uri is not None
        ]

    def host_uris(self, repository_url: str | None = None) -> list[ParsedUri]:
        """Hosts to translate for; the implicit host comes last."""
        uris = list(self._declared_hosts)
        if self._is_single_provider:
            repository_uri = parse_uri(repository_url)
            if repository_uri is not None:
                uris.append(repository_uri)
        return uris

    def translate(self, url: str, repository_url: str | None = None) -> str:
        """
        Translate one URL.

        Args:
            url: URL to translate
            repository_url: Main repository URL, used as the implicit host
                (defaults to ``url`` itself)

        Returns:
            The translated URL, or ``url`` when no rule applies

        Raises:
            UnsupportedTranslationError: If the provider cannot express the URL
        """
        uri = parse_uri(url)
        if uri is None:
            return url

        host_uris = self.host_uris(url if repository_url is None else repository_url)
        if not any(_is_matching_host(host_uri, uri) for host_uri in host_uris):
            return url

        if uri.scheme == "ssh":
            translated = self._provider.translate_ssh_url(uri)
            result = translated if translated is not None else url
        elif uri.scheme == "git":
            result = self._provider.translate_git_url(uri)
        elif uri.scheme in ("http", "https"):
            result = self._provider.translate_http_url(uri)
        else:
            result = url

        if result != url:
            get_logger().debug(f"Translated {url} to {result} ({self._provider.name})")
        return result

    def translate_roots(
        self, repository_url: str, roots: Iterable[RepositoryRoot]
    ) -> tuple[str, list[RepositoryRoot]]:
        """
        Translate the repository URL and the URLs of git source roots.

        Returns:
            (translated repository URL, source roots); roots of other source
            control kinds are returned unchanged
        """
        translated_url = self.translate(repository_url, repository_url)

        translated_roots: list[RepositoryRoot] = []
        for root in roots:
            if root.is_git:
                root = root.with_repository_url(self.translate(root.repository_url, repository_url))
            translated_roots.append(root)

        return translated_url, translated_roots


def _is_matching_host(host_uri: ParsedUri, uri: ParsedUri) -> bool:
    return uri.host == host_uri.host or uri.host.endswith("." + host_uri.host)


def translate_source_roots(
    repository_url: str,
    roots: Iterable[RepositoryRoot],
    providers: Sequence[ISourceLinkProvider],
    hosts_by_provider: Mapping[str, Sequence[HostDeclaration]] | None = None,
) -> tuple[str, list[RepositoryRoot]]:
    """
    Run every provider's translator over the repository URL and source roots.

    Returns:
        (translated repository URL, translated roots)
    """
    hosts_by_provider = hosts_by_provider or {}
    is_single_provider = has_single_provider(p.name for p in providers)

    translated_roots = list(roots)
    for provider in providers:
        translator = RepositoryUrlTranslator(
            provider,
            hosts_for_provider(provider, hosts_by_provider.get(provider.name, ())),
            is_single_provider,
        )
        repository_url, translated_roots = translator.translate_roots(repository_url, translated_roots)
    return repository_url, translated_roots
