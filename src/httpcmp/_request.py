"""HttpRequest: the structured form every comparison input is reduced to.

Holds the nine comparable fields of an HTTP request. Values are stored
exactly as given: no case folding, no default-port filling, and absence
(None) kept distinct from the empty string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import re2

if TYPE_CHECKING:
    from collections.abc import Mapping

    from httpcmp._types import HeaderValue

# scheme "://" authority path-and-query ["#" fragment]
_ABSOLUTE_URL = re2.compile(r"([A-Za-z][A-Za-z0-9+.\-]*)://([^/?#]*)([^#]*)(?:#.*)?")

MAX_PORT = 65535


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """Structured HTTP request.

    Headers may be passed with ``str`` or sequence-of-``str`` values; they are
    normalized to ``tuple[str, ...]`` so that ``"a"`` and ``("a",)`` describe
    the same header. Header names keep their original case.

    ``path`` is the request target path including any query string.
    """

    method: str = "GET"
    scheme: str = "http"
    host: str = ""
    port: int | None = None
    username: str | None = None
    password: str | None = None
    path: str = "/"
    protocol_version: str = "1.1"
    headers: Mapping[str, HeaderValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "headers",
            {name: _header_values(name, value) for name, value in self.headers.items()},
        )

    @classmethod
    def from_url(
        cls,
        method: str,
        url: str,
        headers: Mapping[str, HeaderValue] | None = None,
        protocol_version: str = "1.1",
    ) -> HttpRequest:
        """Build a request from an absolute URL.

        The fragment is dropped and a missing path becomes ``/``
        (``http://example.com?q=1`` has the path ``/?q=1``).

        Raises:
            ValueError: If the URL is not absolute or its authority is malformed.
        """
        m = _ABSOLUTE_URL.fullmatch(url)
        if m is None:
            msg = f"not an absolute URL: {url!r}"
            raise ValueError(msg)
        scheme, authority, path = m.group(1), m.group(2), m.group(3)
        username, password, host, port = split_authority(authority)
        return cls(
            method=method,
            scheme=scheme,
            host=host,
            port=port,
            username=username,
            password=password,
            path=path if path.startswith("/") else f"/{path}",
            protocol_version=protocol_version,
            headers=dict(headers or {}),
        )

    def header(self, name: str) -> tuple[str, ...] | None:
        """Get the values of a header by exact name."""
        return self.headers.get(name)


def split_authority(
    authority: str,
) -> tuple[str | None, str | None, str, int | None]:
    """Split ``[userinfo@]host[:port]`` into (username, password, host, port).

    IPv6 literals keep their brackets. An empty port (``host:``) is absent.

    Raises:
        ValueError: If the port is not a decimal number in 0..65535 or an
            IPv6 literal is unterminated.
    """
    username = password = None
    userinfo, sep, hostport = authority.rpartition("@")
    if sep:
        username, password = split_userinfo(userinfo)

    if hostport.startswith("["):
        end = hostport.find("]")
        if end == -1:
            msg = f"unterminated IPv6 literal in {authority!r}"
            raise ValueError(msg)
        host, rest = hostport[: end + 1], hostport[end + 1 :]
        if rest and not rest.startswith(":"):
            msg = f"unexpected text after IPv6 literal in {authority!r}"
            raise ValueError(msg)
        port_text = rest[1:]
    else:
        host, _, port_text = hostport.partition(":")

    return username, password, host, _parse_port(port_text)


def split_userinfo(userinfo: str) -> tuple[str, str | None]:
    """Split ``user[:password]``; a missing colon means no password."""
    username, sep, password = userinfo.partition(":")
    return username, (password if sep else None)


def _parse_port(text: str) -> int | None:
    if not text:
        return None
    if not text.isascii() or not text.isdigit():
        msg = f"invalid port: {text!r}"
        raise ValueError(msg)
    port = int(text)
    if port > MAX_PORT:
        msg = f"port {port} exceeds maximum {MAX_PORT}"
        raise ValueError(msg)
    return port


def _header_values(name: str, value: HeaderValue) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    values = tuple(value)
    for v in values:
        if not isinstance(v, str):
            msg = f"header {name!r} has a non-string value: {v!r}"
            raise TypeError(msg)
    return values
