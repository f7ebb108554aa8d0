"""
Git remote URL normalization.

Git accepts remotes that are not URLs: scp-like ``[user@]host:path`` SSH
addresses and local paths relative to the working directory. The source link
engine only works with absolute URLs, so remotes are normalized here first.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from .uri import parse_uri

_WINDOWS_DRIVE_RE = re.compile(r"^[A-Za-z]:")


def _is_windows_drive_path(value: str) -> bool:
    return os.sep == "\\" and bool(_WINDOWS_DRIVE_RE.match(value))


def scp_to_ssh_url(value: str) -> str | None:
    """
    Convert an scp-like SSH address to an ``ssh://`` URL.

    Examples:
        git@github.com:user/repo.git -> ssh://git@github.com/user/repo.git
        server:path/repo             -> ssh://server/path/repo

    Args:
        value: Remote address as recorded in git configuration

    Returns:
        ssh:// URL, or None if the value is not scp-like
    """
    colon = value.find(":")
    if colon == -1:
        return None

    # scheme://...
    if value[colon + 1 : colon + 3] == "//":
        return None

    if _is_windows_drive_path(value):
        return None

    url = "ssh://" + value[:colon] + "/" + value[colon + 1 :]
    uri = parse_uri(url)
    return str(uri) if uri is not None else None


def normalize_repository_url(url: str, root: str | Path) -> str | None:
    """
    Normalize a git remote into an absolute URL.

    Args:
        url: Remote URL, scp-like address, or local path
        root: Working directory the remote is relative to

    Returns:
        Absolute URL, or None if the remote cannot be expressed as one
    """
    if not url:
        return None

    # bare drive "X:"
    if len(url) == 2 and _is_windows_drive_path(url):
        return "file:///" + url + "/"

    ssh_url = scp_to_ssh_url(url)
    if ssh_url is not None:
        return ssh_url

    uri = parse_uri(url)
    if uri is not None:
        return str(uri)

    if re.match(r"^[A-Za-z][A-Za-z0-9+.\-]*://", url):
        # has a scheme but is not a valid URL
        return None

    try:
        return Path(os.path.normpath(os.path.join(str(root), url))).as_uri()
    except ValueError:
        return None
