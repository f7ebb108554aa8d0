"""
Tests for host mapping and content URL selection.
"""

import pytest

from srclink.core.exceptions import ConfigValidationError, InvalidHostError, InvalidRepositoryUrlError
from srclink.core.models.config import HostDeclaration
from srclink.plugins.providers.github import GitHubProvider
from srclink.services.mapping import (
    NO_PORT,
    build_url_mappings,
    find_matching_content_uri,
    get_implicit_repository_host,
    has_single_provider,
    hosts_for_provider,
)
from srclink.utils.uri import parse_uri


def _hosts(*specs):
    return [HostDeclaration(authority=authority, content_url=content) for authority, content in specs]


def _match(provider, hosts, repo_url, repository_url=None, single=False):
    git_uri = parse_uri(repo_url)
    mappings, errors = build_url_mappings(provider, hosts, repository_url, git_uri, single)
    assert errors == []
    match = find_matching_content_uri(mappings, git_uri)
    return None if match is None else str(match[0])


class TestBuildUrlMappings:
    """Tests for build_url_mappings."""

    def test_declared_hosts(self, mock_provider):
        """Declared hosts become mappings in declaration order."""
        mappings, errors = build_url_mappings(
            mock_provider,
            _hosts(("contoso.com", "https://content.contoso.com"), ("fabrikam.com:8080", None)),
            None,
            parse_uri("https://contoso.com/a/b"),
            False,
        )

        assert errors == []
        assert [(m.host, m.port) for m in mappings] == [("contoso.com", NO_PORT), ("fabrikam.com", 8080)]
        assert mappings[0].has_default_content_uri is False
        assert str(mappings[1].content_uri) == "https://fabrikam.com:8080/host-default"
        assert mappings[1].has_default_content_uri is True

    def test_invalid_host_reported(self, mock_provider):
        """A malformed authority is an error; valid hosts are kept."""
        mappings, errors = build_url_mappings(
            mock_provider,
            _hosts(("contoso*.com", None), ("fabrikam.com", None)),
            None,
            parse_uri("https://contoso.com/a/b"),
            False,
        )

        assert [m.host for m in mappings] == ["fabrikam.com"]
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidHostError)
        assert "not a valid domain name" in str(errors[0])

    @pytest.mark.parametrize(
        "content_url",
        ["contoso.com", "https://contoso.com/?x=1", "https://user@contoso.com", "file:///a/b"],
    )
    def test_invalid_content_url(self, mock_provider, content_url):
        """Content URLs must be absolute, without query or user info."""
        mappings, errors = build_url_mappings(
            mock_provider,
            _hosts(("contoso.com", content_url)),
            None,
            parse_uri("https://contoso.com/a/b"),
            False,
        )

        assert mappings == []
        assert isinstance(errors[0], InvalidHostError)
        assert "not a valid host URI" in str(errors[0])

    def test_implicit_host_for_single_provider(self, mock_provider):
        """The repository URL host is mapped last when one provider is enabled."""
        mappings, errors = build_url_mappings(
            mock_provider,
            _hosts(("contoso.com", None)),
            "http://fabrikam.com:1234/a/b",
            parse_uri("http://fabrikam.com:1234/a/b"),
            True,
        )

        assert errors == []
        implicit = mappings[-1]
        assert (implicit.host, implicit.port) == ("fabrikam.com", 1234)
        assert str(implicit.content_uri) == "http://fabrikam.com:1234/a/b/repo-default"
        assert implicit.declaration is None

    def test_no_implicit_host_for_several_providers(self, mock_provider):
        """Without a single provider only declared hosts are mapped."""
        mappings, _ = build_url_mappings(
            mock_provider, [], "http://fabrikam.com/a/b", parse_uri("http://fabrikam.com/a/b"), False
        )

        assert mappings == []

    def test_no_implicit_host_when_unsupported(self, make_mock_provider):
        """Providers can opt out of the implicit host."""
        provider = make_mock_provider(implicit_host=False)
        mappings, _ = build_url_mappings(
            provider, [], "http://fabrikam.com/a/b", parse_uri("http://fabrikam.com/a/b"), True
        )

        assert mappings == []

    def test_invalid_repository_url(self, mock_provider):
        """A relative repository URL cannot provide the implicit host."""
        _, errors = build_url_mappings(
            mock_provider, [], "a/b", parse_uri("http://fabrikam.com/a/b"), True
        )

        assert isinstance(errors[0], InvalidRepositoryUrlError)

    def test_repository_url_without_host(self, mock_provider):
        """A file URL has no host to map."""
        _, errors = build_url_mappings(
            mock_provider, [], "file:///a/b", parse_uri("http://fabrikam.com/a/b"), True
        )

        assert isinstance(errors[0], InvalidHostError)


class TestFindMatchingContentUri:
    """Tests for find_matching_content_uri."""

    def test_exact_before_suffix(self, mock_provider):
        """An exact host match wins over an earlier subdomain match."""
        hosts = _hosts(("contoso.com", "https://a.com"), ("sub.contoso.com", "https://b.com"))

        assert _match(mock_provider, hosts, "https://sub.contoso.com/x") == "https://b.com/"

    def test_exact_without_port_before_suffix_with_port(self, mock_provider):
        """The exact pass completes before subdomains are considered."""
        hosts = _hosts(("contoso.com:443", "https://a.com"), ("sub.contoso.com", "https://b.com"))

        assert _match(mock_provider, hosts, "https://sub.contoso.com/x") == "https://b.com/"

    def test_same_port_before_no_port(self, mock_provider):
        """Within a pass, a mapping with the same port wins."""
        hosts = _hosts(("a.com", "https://x.com"), ("a.com:123", "https://y.com"))

        assert _match(mock_provider, hosts, "https://sub.a.com:123/r") == "https://y.com/"

    def test_first_portless_candidate(self, mock_provider):
        """Among mappings without port the first declared wins."""
        hosts = _hosts(("contoso.com", "https://a.com"), ("contoso.com", "https://b.com"))

        assert _match(mock_provider, hosts, "https://contoso.com/x") == "https://a.com/"

    def test_explicit_before_implicit(self, mock_provider):
        """Declared hosts come before the implicit host."""
        hosts = _hosts(("contoso.com", "https://explicit.com"))

        result = _match(
            mock_provider, hosts, "https://contoso.com/a/b", "https://contoso.com/a/b", single=True
        )

        assert result == "https://explicit.com/"

    @pytest.mark.parametrize(
        ("repo_url", "expected"),
        [
            ("http://contoso.com/a", "https://domain.com:1/"),
            ("https://contoso.com/a", "https://domain.com:2/"),
            ("https://contoso.com:1234/a", "https://domain.com:3/"),
        ],
    )
    def test_default_ports(self, mock_provider, repo_url, expected):
        """The scheme's default port is compared against declared ports."""
        hosts = _hosts(
            ("contoso.com:80", "https://domain.com:1"),
            ("contoso.com:443", "https://domain.com:2"),
            ("contoso.com:1234", "https://domain.com:3"),
        )

        assert _match(mock_provider, hosts, repo_url) == expected

    def test_port_mismatch(self, mock_provider):
        """A mapping pinned to another port does not match."""
        hosts = _hosts(("contoso.com:8080", "https://a.com"))

        assert _match(mock_provider, hosts, "https://contoso.com/x") is None

    def test_other_host(self, mock_provider):
        """Hosts that are neither equal nor a subdomain do not match."""
        hosts = _hosts(("contoso.com", "https://a.com"))

        assert _match(mock_provider, hosts, "https://notcontoso.com/x") is None

    def test_derived_content_inherits_port(self, mock_provider):
        """A derived content URL follows the repository's non-default port."""
        hosts = _hosts(("contoso.com", None))

        result = _match(mock_provider, hosts, "http://contoso.com:1234/a/b")

        assert result == "http://contoso.com:1234/host-default"

    def test_declared_content_keeps_port(self, mock_provider):
        """A declared content URL is used as is."""
        hosts = _hosts(("contoso.com", "https://othercontoso.com"))

        assert _match(mock_provider, hosts, "http://contoso.com:1234/a/b") == "https://othercontoso.com/"

    def test_pinned_port_keeps_content(self, mock_provider):
        """A mapping with a port does not rewrite its content URL."""
        hosts = _hosts(("contoso.com:1234", None))

        result = _match(mock_provider, hosts, "http://contoso.com:1234/a/b")

        assert result == "http://contoso.com:1234/host-default"

    def test_returns_declaration(self, mock_provider):
        """The matched host declaration is returned with the URL."""
        hosts = [HostDeclaration(authority="contoso.com", version="4.6")]
        git_uri = parse_uri("https://contoso.com/a")
        mappings, _ = build_url_mappings(mock_provider, hosts, None, git_uri, False)

        _, declaration = find_matching_content_uri(mappings, git_uri)

        assert declaration.version == "4.6"


class TestProviderHelpers:
    """Tests for provider count and host helpers."""

    def test_no_provider(self):
        """At least one provider must be enabled."""
        with pytest.raises(ConfigValidationError):
            has_single_provider([])

    def test_single_provider(self):
        """One provider is a single provider."""
        assert has_single_provider(["github"]) is True
        assert has_single_provider(["github", "gitlab"]) is False

    def test_implicit_repository_host(self):
        """The implicit host keeps a non-default port."""
        assert (
            get_implicit_repository_host(["github"], "https://contoso.com:123/x") == "contoso.com:123"
        )

    def test_no_implicit_repository_host(self):
        """Several providers or an invalid URL give no implicit host."""
        assert get_implicit_repository_host(["github", "gitlab"], "https://contoso.com/x") is None
        assert get_implicit_repository_host(["github"], "a/b") is None

    def test_hosts_for_provider(self):
        """Built-in hosts come before declared ones."""
        hosts = hosts_for_provider(GitHubProvider(), [HostDeclaration(authority="ghe.contoso.com")])

        assert [h.authority for h in hosts] == ["github.com", "ghe.contoso.com"]
