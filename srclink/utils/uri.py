"""
URI component utilities.

Parses absolute URLs into their components, normalizes percent-escapes in
paths without changing what they address, and provides the small helpers the
providers use to assemble content URLs (combine, split, prefix tests).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ssh": 22,
    "git": 9418,
    "ftp": 21,
}

_URI_RE = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*)://([^/?#]*)([^?#]*)(\?[^#]*)?(#.*)?$")
_HOST_RE = re.compile(r"^[\w.\-]+$")
_IPV6_RE = re.compile(r"^\[[0-9A-Fa-f:.]+\]$")
_ESCAPE_RE = re.compile(r"%[0-9A-Fa-f]{2}")

_UNRESERVED = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~")
_ALWAYS_ESCAPED = frozenset(' "<>^`{|}')


@dataclass(frozen=True)
class ParsedUri:
    """An absolute URL split into normalized components.

    ``explicit_port`` is None when the URL carries no port or carries the
    scheme's default port.
    """

    scheme: str
    userinfo: str | None
    host: str
    explicit_port: int | None
    path: str
    query: str = ""
    fragment: str = ""

    @property
    def default_port(self) -> int:
        return DEFAULT_PORTS.get(self.scheme, -1)

    @property
    def port(self) -> int:
        """Effective port: explicit if present, else the scheme default (-1 if unknown)."""
        if self.explicit_port is not None:
            return self.explicit_port
        return self.default_port

    @property
    def is_default_port(self) -> bool:
        return self.explicit_port is None

    @property
    def authority(self) -> str:
        """Host followed by the port when the port is not the scheme default."""
        if self.explicit_port is None:
            return self.host
        return f"{self.host}:{self.explicit_port}"

    @property
    def path_and_query(self) -> str:
        return self.path + self.query

    def __str__(self) -> str:
        userinfo = f"{self.userinfo}@" if self.userinfo is not None else ""
        return f"{self.scheme}://{userinfo}{self.authority}{self.path}{self.query}{self.fragment}"


def parse_uri(value: str | None) -> ParsedUri | None:
    """Parse an absolute URL.

    Args:
        value: Text of the form ``scheme://authority/path?query#fragment``

    Returns:
        ParsedUri, or None if the text is not a valid absolute URL
    """
    if not value:
        return None

    match = _URI_RE.match(value)
    if match is None:
        return None

    scheme = match.group(1).lower()
    netloc = match.group(2)
    path = match.group(3)
    query = match.group(4) or ""
    fragment = match.group(5) or ""

    userinfo: str | None = None
    if "@" in netloc:
        userinfo, _, netloc = netloc.rpartition("@")

    host, port_text = _split_host_port(netloc)
    if host is None:
        return None

    if not host:
        if scheme != "file":
            return None
    elif not (_IPV6_RE.match(host) or _HOST_RE.match(host)):
        return None

    explicit_port: int | None = None
    if port_text:
        if not port_text.isdigit() or int(port_text) > 65535:
            return None
        explicit_port = int(port_text)
        if explicit_port == DEFAULT_PORTS.get(scheme, -1):
            explicit_port = None

    path = _remove_dot_segments(safe_unescape(path)) if path else "/"

    return ParsedUri(
        scheme=scheme,
        userinfo=userinfo,
        host=host.lower(),
        explicit_port=explicit_port,
        path=path,
        query=safe_unescape(query),
        fragment=fragment,
    )


def _split_host_port(netloc: str) -> tuple[str | None, str]:
    """Split ``host[:port]`` honouring bracketed IPv6 literals."""
    if netloc.startswith("["):
        end = netloc.find("]")
        if end < 0:
            return None, ""
        host, rest = netloc[: end + 1], netloc[end + 1 :]
        if rest and not rest.startswith(":"):
            return None, ""
        return host, rest[1:]

    if ":" in netloc:
        host, _, port = netloc.partition(":")
        return host, port
    return netloc, ""


def _remove_dot_segments(path: str) -> str:
    segments = path.split("/")
    if "." not in segments and ".." not in segments:
        return path

    output: list[str] = []
    for segment in segments[1:]:
        if segment == ".":
            continue
        if segment == "..":
            if output:
                output.pop()
            continue
        output.append(segment)

    # a trailing dot segment leaves the path addressing a directory
    if segments[-1] in (".", ".."):
        output.append("")
    return "/" + "/".join(output)


def is_absolute_uri(value: str | None) -> bool:
    return parse_uri(value) is not None


def safe_unescape(text: str) -> str:
    """Decode escapes that do not change meaning and escape unsafe characters.

    ``%XX`` runs are decoded when they spell unreserved ASCII or printable
    non-ASCII UTF-8; reserved characters, ``%25``, invalid UTF-8 and
    non-printable characters stay escaped. Raw spaces, control characters and
    ``" < > ^ ` { | }`` are escaped. Applying the function twice gives the same
    result as applying it once.

    Example:
        >>> safe_unescape("test-%72epo%24%2572%2F")
        'test-repo%24%2572%2F'
    """
    out: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if ch == "%":
            run_end = i
            while _ESCAPE_RE.match(text, run_end):
                run_end += 3
            if run_end == i:
                out.append("%25")
                i += 1
                continue
            out.append(_decode_escape_run(text[i:run_end]))
            i = run_end
            continue

        if ch in _ALWAYS_ESCAPED or ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append("".join(f"%{b:02X}" for b in ch.encode("utf-8")))
        else:
            out.append(ch)
        i += 1
    return "".join(out)


def _decode_escape_run(run: str) -> str:
    escapes = [run[k : k + 3] for k in range(0, len(run), 3)]
    data = bytes(int(e[1:], 16) for e in escapes)
    out: list[str] = []
    i = 0
    while i < len(data):
        byte = data[i]
        if byte < 0x80:
            ch = chr(byte)
            out.append(ch if ch in _UNRESERVED else escapes[i])
            i += 1
            continue

        width = _utf8_width(byte)
        chunk = data[i : i + width]
        decoded: str | None = None
        if width and len(chunk) == width:
            try:
                decoded = chunk.decode("utf-8")
            except UnicodeDecodeError:
                decoded = None
        if decoded is not None and decoded.isprintable():
            out.append(decoded)
            i += width
        else:
            out.append(escapes[i])
            i += 1
    return "".join(out)


def _utf8_width(lead: int) -> int:
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def parse_authority(value: str | None) -> ParsedUri | None:
    """Parse a bare ``host[:port]`` as declared for a repository host.

    Returns None when the value has userinfo, a path or query, or no host.
    """
    if not value:
        return None
    uri = parse_uri("unknown://" + value)
    if uri is None or not uri.host or uri.userinfo is not None:
        return None
    if uri.path_and_query != "/" or uri.fragment:
        return None
    return uri


def combine(base: str, relative: str) -> str:
    """Join two URL parts with exactly one ``/`` between them."""
    if not relative:
        return base
    if base.endswith("/"):
        return base + relative[1:] if relative.startswith("/") else base + relative
    return base + relative if relative.startswith("/") else base + "/" + relative


def split_relative_url(relative_url: str) -> list[str] | None:
    """Split a URL path into segments.

    Returns an empty list for ``""`` and ``"/"`` and None when any segment is
    empty (``"//"``, ``"a//b"``).
    """
    if relative_url in ("", "/"):
        return []

    start = 1 if relative_url.startswith("/") else 0
    end = len(relative_url) - 1 if relative_url.endswith("/") else len(relative_url)
    if end <= start:
        return None

    parts = relative_url[start:end].split("/")
    if any(part == "" for part in parts):
        return None
    return parts


def url_starts_with(url: str, prefix: str) -> bool:
    """Ordinal segment-aware prefix test (``/a/b`` does not start ``/a/bc``)."""
    if not url.endswith("/"):
        url += "/"
    if not prefix.endswith("/"):
        prefix += "/"
    return url.startswith(prefix)
