"""WireRequestParser: default RequestParser for HTTP/1.x request text.

Reads the request line and the header block; the body, if any, is ignored.
All four request-target forms are understood:

| Form           | Example                     | host/port from |
|----------------|-----------------------------|----------------|
| origin-form    | ``/where?q=now``            | Host header    |
| absolute-form  | ``http://example.com/``     | target         |
| authority-form | ``example.com:443``         | target         |
| asterisk-form  | ``*``                       | Host header    |

Patterns run on ``google-re2`` so parsing stays linear-time on untrusted
text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import re2

from httpcmp._request import HttpRequest, split_authority

logger = logging.getLogger(__name__)

_TOKEN = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_REQUEST_LINE = re2.compile(rf"({_TOKEN}) (\S+) HTTP/(\d\.\d)")
_HEADER_NAME = re2.compile(_TOKEN)


class _ParseFailure(Exception):
    """Internal signal: the text is not a valid HTTP request."""


@dataclass(frozen=True, slots=True)
class WireRequestParser:
    """Parse raw HTTP/1.x request text into an HttpRequest.

    Lines may end with CRLF or a bare LF. Returns None (ParseFailure) for
    anything that is not a well-formed request line plus header block.

    >>> WireRequestParser().parse("GET http://example.com/ HTTP/1.1\\r\\n\\r\\n").host
    'example.com'
    """

    default_scheme: str = "http"

    def parse(self, text: str, /) -> HttpRequest | None:
        try:
            return self._parse(text)
        except _ParseFailure as e:
            logger.debug("unparseable request text: %s", e)
            return None

    def _parse(self, text: str) -> HttpRequest:
        lines = text.lstrip("\r\n").replace("\r\n", "\n").split("\n")
        if not lines[0]:
            msg = "empty request"
            raise _ParseFailure(msg)

        m = _REQUEST_LINE.fullmatch(lines[0])
        if m is None:
            msg = f"malformed request line: {lines[0]!r}"
            raise _ParseFailure(msg)
        method, target, version = m.group(1), m.group(2), m.group(3)

        headers = _parse_headers(lines[1:])

        if target.startswith("/") or target == "*":
            return self._from_host_header(method, target, version, headers)
        if "://" in target:
            try:
                return HttpRequest.from_url(method, target, headers, version)
            except ValueError as e:
                raise _ParseFailure(str(e)) from e
        if method == "CONNECT":
            return self._from_authority(method, target, version, headers)
        msg = f"unsupported request target: {target!r}"
        raise _ParseFailure(msg)

    def _from_host_header(
        self,
        method: str,
        path: str,
        version: str,
        headers: dict[str, list[str]],
    ) -> HttpRequest:
        values = [v for name, vs in headers.items() if name.lower() == "host" for v in vs]
        if len(values) > 1:
            msg = "multiple Host headers"
            raise _ParseFailure(msg)
        host, port = "", None
        if values:
            if "@" in values[0]:
                msg = f"userinfo in Host header: {values[0]!r}"
                raise _ParseFailure(msg)
            try:
                _, _, host, port = split_authority(values[0])
            except ValueError as e:
                raise _ParseFailure(str(e)) from e
        return HttpRequest(
            method=method,
            scheme=self.default_scheme,
            host=host,
            port=port,
            path=path,
            protocol_version=version,
            headers=headers,
        )

    def _from_authority(
        self,
        method: str,
        target: str,
        version: str,
        headers: dict[str, list[str]],
    ) -> HttpRequest:
        if "@" in target:
            msg = f"userinfo in authority-form target: {target!r}"
            raise _ParseFailure(msg)
        try:
            _, _, host, port = split_authority(target)
        except ValueError as e:
            raise _ParseFailure(str(e)) from e
        return HttpRequest(
            method=method,
            scheme=self.default_scheme,
            host=host,
            port=port,
            path="",
            protocol_version=version,
            headers=headers,
        )


def _parse_headers(lines: list[str]) -> dict[str, list[str]]:
    """Parse header lines up to the first empty line.

    Repeated names accumulate their values in order of appearance.
    """
    headers: dict[str, list[str]] = {}
    for line in lines:
        if not line:
            break
        name, sep, value = line.partition(":")
        if not sep:
            msg = f"header line without colon: {line!r}"
            raise _ParseFailure(msg)
        if _HEADER_NAME.fullmatch(name) is None:
            msg = f"invalid header name: {name!r}"
            raise _ParseFailure(msg)
        headers.setdefault(name, []).append(value.strip(" \t"))
    return headers
