"""Adapters for HTTP client library request objects.

Registers the request types of ``requests``, ``httpx`` and the standard
library's ``urllib.request`` so they can be compared directly:

- requests.PreparedRequest: method, URL and header names as they are sent
- requests.Request: prepared first, exactly as ``requests`` would send it;
  a request ``requests`` refuses to prepare is reported as a ValueError
- httpx.Request: raw header names (httpx adds Host and drops default ports)
- urllib.request.Request: ``header_items()``; urllib capitalizes header
  names (``User-agent``) and that case is kept

None of these libraries expose the protocol version of a request object,
so every adapted request carries ``1.1``.
"""

from __future__ import annotations

import urllib.request
from collections.abc import Iterable

import httpx
import requests

from httpcmp._registry import (
    AdapterRegistry,
    AdapterRegistryBuilder,
    register_core_adapters,
)
from httpcmp._request import HttpRequest, split_userinfo

DEFAULT_PROTOCOL_VERSION = "1.1"


def register(builder: AdapterRegistryBuilder) -> AdapterRegistryBuilder:
    """Register adapters for all supported client libraries."""
    return (
        builder.adapter(requests.PreparedRequest, from_prepared_request)
        .adapter(requests.Request, from_requests_request)
        .adapter(httpx.Request, from_httpx_request)
        .adapter(urllib.request.Request, from_urllib_request)
    )


def default_registry() -> AdapterRegistry:
    """Registry with HttpRequest and every supported client library."""
    builder = AdapterRegistryBuilder()
    builder = register_core_adapters(builder)
    builder = register(builder)
    return builder.build()


def from_prepared_request(request: requests.PreparedRequest) -> HttpRequest:
    return HttpRequest.from_url(
        request.method or "",
        request.url or "",
        _collect((request.headers or {}).items()),
        DEFAULT_PROTOCOL_VERSION,
    )


def from_requests_request(request: requests.Request) -> HttpRequest:
    try:
        prepared = request.prepare()
    except requests.RequestException as e:
        msg = f"cannot prepare request: {e}"
        raise ValueError(msg) from e
    return from_prepared_request(prepared)


def from_httpx_request(request: httpx.Request) -> HttpRequest:
    url = request.url
    username = password = None
    if url.userinfo:
        username, password = split_userinfo(url.userinfo.decode("ascii"))
    host = url.host
    if ":" in host:
        # httpx strips the brackets from IPv6 literals.
        host = f"[{host}]"
    encoding = request.headers.encoding
    return HttpRequest(
        method=request.method,
        scheme=url.scheme,
        host=host,
        port=url.port,
        username=username,
        password=password,
        path=url.raw_path.decode("ascii"),
        protocol_version=DEFAULT_PROTOCOL_VERSION,
        headers=_collect(
            (name.decode(encoding), value.decode(encoding))
            for name, value in request.headers.raw
        ),
    )


def from_urllib_request(request: urllib.request.Request) -> HttpRequest:
    return HttpRequest.from_url(
        request.get_method(),
        request.full_url,
        _collect(request.header_items()),
        DEFAULT_PROTOCOL_VERSION,
    )


def _collect(items: Iterable[tuple[str, str | bytes]]) -> dict[str, list[str]]:
    """Group header pairs by name, keeping repeated values in order."""
    headers: dict[str, list[str]] = {}
    for name, value in items:
        if isinstance(value, bytes):
            value = value.decode("latin-1")
        headers.setdefault(name, []).append(value)
    return headers
