"""
Git VCS provider.

Discovers the source roots of a git working tree: the repository itself and
its initialized submodules, each with its remote URL and checked out commit.
"""

import os
import subprocess
from pathlib import Path

from ...core.models.source_root import RepositoryRoot
from ...services.logging import get_logger
from ...utils.git_url import normalize_repository_url
from ...utils.uri import combine, parse_uri
from .base import BaseVCSProvider


class GitVCSProvider(BaseVCSProvider):
    """
    Git version control provider.

    Shells out to the ``git`` command line client.
    """

    @property
    def name(self) -> str:
        return "git"

    def is_available(self) -> bool:
        """Check if git is installed."""
        try:
            subprocess.run(["git", "--version"], capture_output=True, check=True)
            return True
        except (subprocess.CalledProcessError, FileNotFoundError):
            return False

    def _git(self, args: list[str], cwd: str | None = None) -> str | None:
        try:
            out = subprocess.check_output(["git", *args], cwd=cwd, stderr=subprocess.DEVNULL)
        except (subprocess.CalledProcessError, FileNotFoundError):
            return None
        # leading spaces are significant in `submodule status` output
        return out.decode().rstrip()

    def get_repo_root(self, path: str | None = None) -> str | None:
        """Get the git repository root directory."""
        return self._git(["rev-parse", "--show-toplevel"], cwd=path)

    def get_revision_id(self, repo_root: str) -> str | None:
        """Get the current commit hash."""
        return self._git(["rev-parse", "HEAD"], cwd=repo_root)

    def get_remote_url(self, repo_root: str, remote: str = "origin") -> str | None:
        """Get the URL for a remote, normalized to an absolute URL."""
        raw_url = self._git(["remote", "get-url", remote], cwd=repo_root)
        if not raw_url:
            return None

        url = normalize_repository_url(raw_url, repo_root)
        if url is None:
            get_logger().warning(f"The URL of remote '{remote}' is not valid: '{raw_url}'")
        return url

    def get_source_roots(self, repo_root: str, remote: str = "origin") -> list[RepositoryRoot]:
        """
        Enumerate the repository and its initialized submodules.

        A repository without the remote is still returned, with an empty
        repository URL.
        """
        root_dir = Path(repo_root).resolve()
        repository_url = self.get_remote_url(str(root_dir), remote)
        if repository_url is None:
            get_logger().warning(f"Repository '{root_dir}' has no remote '{remote}'")

        root = RepositoryRoot(
            local_path=_directory_path(root_dir),
            repository_url=repository_url or "",
            revision_id=self.get_revision_id(str(root_dir)) or "",
        )
        return [root, *self._submodule_roots(root_dir, root)]

    def _submodule_roots(self, containing_dir: Path, containing_root: RepositoryRoot) -> list[RepositoryRoot]:
        urls = self._read_submodule_urls(containing_dir)

        roots: list[RepositoryRoot] = []
        for state, commit, path in self._submodule_status(containing_dir):
            # '-' marks a submodule that is not initialized
            if state == "-":
                continue

            raw_url = urls.get(path)
            if raw_url is None:
                get_logger().warning(f"Submodule '{path}' of '{containing_dir}' has no url")
                url = None
            else:
                url = _resolve_submodule_url(raw_url, containing_root.repository_url, containing_dir)

            submodule_dir = (containing_dir / path).resolve()
            submodule = RepositoryRoot(
                local_path=_directory_path(submodule_dir),
                repository_url=url or "",
                revision_id=commit,
                containing_root=containing_root.local_path,
                nested_root=path.rstrip("/") + "/",
            )
            roots.append(submodule)
            roots.extend(self._submodule_roots(submodule_dir, submodule))
        return roots

    def _submodule_status(self, repo_dir: Path) -> list[tuple[str, str, str]]:
        """Parse ``git submodule status`` into (state, commit, path)."""
        out = self._git(["submodule", "status"], cwd=str(repo_dir))
        if not out:
            return []

        entries = []
        for line in out.splitlines():
            state = line[:1]
            fields = line[1:].split(" ", 1)
            if len(fields) != 2:
                continue
            commit, rest = fields
            # "path (describe)"
            path = rest.rsplit(" (", 1)[0] if rest.endswith(")") else rest
            entries.append((state, commit, path))
        return entries

    def _read_submodule_urls(self, repo_dir: Path) -> dict[str, str]:
        """Map submodule paths to the URLs declared in ``.gitmodules``."""
        if not (repo_dir / ".gitmodules").is_file():
            return {}

        out = self._git(
            ["config", "-f", ".gitmodules", "--get-regexp", r"^submodule\..*\.(path|url)$"],
            cwd=str(repo_dir),
        )
        if not out:
            return {}

        paths: dict[str, str] = {}
        urls: dict[str, str] = {}
        for line in out.splitlines():
            key, _, value = line.partition(" ")
            name, _, setting = key[len("submodule.") :].rpartition(".")
            if setting == "path":
                paths[name] = value
            elif setting == "url":
                urls[name] = value

        return {path: urls[name] for name, path in paths.items() if name in urls}


def _directory_path(path: Path) -> str:
    return str(path).rstrip(os.sep) + os.sep


def _resolve_submodule_url(url: str, containing_url: str, containing_dir: Path) -> str | None:
    # ./ and ../ are relative to the superproject's remote, like git does
    if url.startswith(("./", "../")) and parse_uri(containing_url) is not None:
        return normalize_repository_url(combine(containing_url, url), containing_dir)
    return normalize_repository_url(url, containing_dir)
