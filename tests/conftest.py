"""
Pytest configuration and fixtures for srclink tests.
"""

import os

import pytest

from srclink.core.bootstrap import bootstrap, reset
from srclink.core.container import get_container
from srclink.plugins.providers.base import BaseSourceLinkProvider
from srclink.utils.uri import combine


@pytest.fixture(autouse=True)
def clean_srclink_state(monkeypatch):
    """Give each test a fresh container and keep logs out of the home directory."""
    for var in list(os.environ):
        if var.startswith("SRCLINK_"):
            monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("SRCLINK_LOGGING__FILE", "false")

    reset()
    yield
    reset()


@pytest.fixture
def container(tmp_path):
    """Bootstrapped container with the built-in plugins registered."""
    bootstrap(tmp_path)
    return get_container()


@pytest.fixture
def commit_sha():
    """A valid 40 character commit hash."""
    return "0123456789abcdefABCDEF000000000000000000"


class MockProvider(BaseSourceLinkProvider):
    """Provider whose content URL echoes every input it was given."""

    def __init__(self, name="mock", implicit_host=True):
        self._name = name
        self._implicit_host = implicit_host

    @property
    def name(self):
        return self._name

    @property
    def display_name(self):
        return "Mock"

    @property
    def supports_implicit_host(self):
        return self._implicit_host

    def default_content_uri_from_host(self, authority, git_uri):
        return f"{git_uri.scheme}://{authority.authority}/host-default"

    def default_content_uri_from_repository(self, repository_uri):
        return combine(str(repository_uri), "repo-default")

    def build_content_url(self, content_uri, git_uri, relative_url, revision_id, host):
        return (
            f"ContentUrl='{content_uri}' GitUrl='{git_uri}' "
            f"RelativeUrl='{relative_url}' RevisionId='{revision_id}'"
        )


@pytest.fixture
def mock_provider():
    """Provider that reports the values passed to build_content_url."""
    return MockProvider()


@pytest.fixture
def make_mock_provider():
    """Factory for mock providers with a given name."""
    return MockProvider
