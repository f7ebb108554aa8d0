"""
Tests for repository URL translation.
"""

import pytest

from srclink.core.exceptions import UnsupportedTranslationError
from srclink.core.models.config import HostDeclaration
from srclink.core.models.source_root import RepositoryRoot
from srclink.plugins.providers.azure_repos import AzureReposProvider
from srclink.plugins.providers.github import GitHubProvider
from srclink.plugins.providers.gitlab import GitLabProvider
from srclink.plugins.providers.gitweb import GitWebProvider
from srclink.services.translation import RepositoryUrlTranslator, translate_source_roots


@pytest.fixture
def translator():
    """GitHub translator for contoso.com."""
    return RepositoryUrlTranslator(GitHubProvider(), [HostDeclaration(authority="contoso.com")])


class TestRepositoryUrlTranslator:
    """Tests for RepositoryUrlTranslator.translate."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("ssh://git@contoso.com/a/b?x=y", "https://contoso.com/a/b?x=y"),
            ("git://contoso.com/a/b?x=y", "https://contoso.com/a/b?x=y"),
            ("http://a@contoso.com:123/a/b?x=y", "http://contoso.com:123/a/b?x=y"),
            ("https://a@contoso.com:123/a/b?x=y", "https://contoso.com:123/a/b?x=y"),
            ("ssh://git@sub.contoso.com/a", "https://sub.contoso.com/a"),
        ],
    )
    def test_translates_matching_host(self, translator, url, expected):
        """Remotes of declared hosts and their subdomains are canonicalized."""
        assert translator.translate(url) == expected

    @pytest.mark.parametrize(
        "url",
        [
            "ssh://git@contoso2.com/a/b",
            "ssh://git@notcontoso.com/a/b",
            "ftp://contoso.com/a/b",
            "not a url",
        ],
    )
    def test_leaves_other_urls(self, translator, url):
        """Other hosts, other schemes and non-URLs are unchanged."""
        assert translator.translate(url) == url

    def test_invalid_declared_host_ignored(self):
        """Malformed host declarations are skipped."""
        translator = RepositoryUrlTranslator(
            GitHubProvider(),
            [HostDeclaration(authority="bad*host"), HostDeclaration(authority="contoso.com")],
        )

        assert [uri.host for uri in translator.host_uris()] == ["contoso.com"]

    def test_implicit_host(self):
        """With a single provider the repository URL is a host."""
        translator = RepositoryUrlTranslator(GitHubProvider(), [], is_single_provider=True)

        assert translator.translate("ssh://git@server/a/b") == "https://server/a/b"

    def test_implicit_host_from_repository_url(self):
        """Submodule URLs are translated when they share the main repository host."""
        translator = RepositoryUrlTranslator(GitHubProvider(), [], is_single_provider=True)

        result = translator.translate("ssh://git@sub.server/x", repository_url="ssh://git@server/a/b")

        assert result == "https://sub.server/x"

    def test_no_implicit_host_for_several_providers(self):
        """Without a single provider nothing matches an undeclared host."""
        translator = RepositoryUrlTranslator(GitHubProvider(), [])

        assert translator.translate("ssh://git@server/a/b") == "ssh://git@server/a/b"

    def test_azure_ssh(self):
        """Azure SSH remotes become HTTPS clone URLs."""
        translator = RepositoryUrlTranslator(AzureReposProvider(), AzureReposProvider().default_hosts)

        assert (
            translator.translate("ssh://git@ssh.dev.azure.com/v3/org/proj/repo")
            == "https://dev.azure.com/org/proj/_git/repo"
        )

    def test_gitweb_http_unsupported(self):
        """GitWeb has no HTTP form of a repository URL."""
        translator = RepositoryUrlTranslator(GitWebProvider(), [HostDeclaration(authority="contoso.com")])

        with pytest.raises(UnsupportedTranslationError, match="HTTP"):
            translator.translate("https://contoso.com/a/b")

    def test_gitweb_ssh_unchanged(self):
        """GitWeb keeps SSH URLs."""
        translator = RepositoryUrlTranslator(GitWebProvider(), [HostDeclaration(authority="contoso.com")])

        assert translator.translate("ssh://git@contoso.com/a/b.git") == "ssh://git@contoso.com/a/b.git"


class TestTranslateRoots:
    """Tests for translating source roots."""

    def test_git_roots_translated(self, translator):
        """Git roots are translated, other kinds unchanged."""
        roots = [
            RepositoryRoot(local_path="/src/", repository_url="ssh://git@contoso.com/a/b"),
            RepositoryRoot(
                local_path="/src/tfvc/",
                source_control="tfvc",
                repository_url="ssh://git@contoso.com/c/d",
            ),
        ]

        url, translated = translator.translate_roots("ssh://git@contoso.com/a/b", roots)

        assert url == "https://contoso.com/a/b"
        assert translated[0].repository_url == "https://contoso.com/a/b"
        assert translated[1].repository_url == "ssh://git@contoso.com/c/d"

    def test_translate_source_roots(self):
        """Every provider's translator runs over the URLs."""
        roots = [
            RepositoryRoot(local_path="/src/", repository_url="ssh://git@github.com/org/a.git"),
            RepositoryRoot(local_path="/src/sub/", repository_url="git://gitlab.com/org/b.git"),
        ]

        url, translated = translate_source_roots(
            "ssh://git@github.com/org/a.git", roots, [GitHubProvider(), GitLabProvider()]
        )

        assert url == "https://github.com/org/a.git"
        assert [r.repository_url for r in translated] == [
            "https://github.com/org/a.git",
            "https://gitlab.com/org/b.git",
        ]
