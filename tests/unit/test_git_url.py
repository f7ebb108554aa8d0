"""
Tests for git remote URL normalization.
"""

import os

import pytest

from srclink.utils.git_url import normalize_repository_url, scp_to_ssh_url


class TestScpToSshUrl:
    """Tests for scp_to_ssh_url."""

    def test_user_and_host(self):
        """git@host:path becomes ssh://git@host/path."""
        assert scp_to_ssh_url("git@github.com:user/repo.git") == "ssh://git@github.com/user/repo.git"

    def test_host_only(self):
        """A bare host works without user name."""
        assert scp_to_ssh_url("server:path/repo") == "ssh://server/path/repo"

    def test_url_is_not_scp(self):
        """scheme:// URLs are left to the URL parser."""
        assert scp_to_ssh_url("https://github.com/user/repo") is None

    def test_no_colon(self):
        """Plain paths are not scp-like."""
        assert scp_to_ssh_url("some/path") is None

    def test_invalid_host(self):
        """An address whose host is not valid yields None."""
        assert scp_to_ssh_url("bad*host:repo") is None


class TestNormalizeRepositoryUrl:
    """Tests for normalize_repository_url."""

    def test_absolute_url_unchanged(self, tmp_path):
        """Absolute URLs are returned in normalized form."""
        assert (
            normalize_repository_url("https://GitHub.com/org/repo", tmp_path)
            == "https://github.com/org/repo"
        )

    def test_scp_address(self, tmp_path):
        """scp-like addresses become ssh:// URLs."""
        assert (
            normalize_repository_url("git@ssh.dev.azure.com:v3/org/proj/repo", tmp_path)
            == "ssh://git@ssh.dev.azure.com/v3/org/proj/repo"
        )

    def test_empty(self, tmp_path):
        """An empty remote has no URL."""
        assert normalize_repository_url("", tmp_path) is None

    def test_invalid_url_with_scheme(self, tmp_path):
        """A value with a scheme that fails to parse is not treated as a path."""
        assert normalize_repository_url("http://bad*host/x", tmp_path) is None

    @pytest.mark.skipif(os.sep != "/", reason="POSIX paths")
    def test_relative_path(self):
        """Local paths are resolved against the working directory."""
        assert normalize_repository_url("../other", "/repo/sub") == "file:///repo/other"

    @pytest.mark.skipif(os.sep != "/", reason="POSIX paths")
    def test_absolute_path(self):
        """Absolute local paths become file URLs."""
        assert normalize_repository_url("/srv/git/repo.git", "/work") == "file:///srv/git/repo.git"
