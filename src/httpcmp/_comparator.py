"""RequestComparator: decide whether two request representations are equivalent.

Both inputs are normalized to HttpRequest first, then compared field by
field in a fixed order, stopping at the first mismatch:

  host, port, username, password, path, scheme, protocol_version, method, headers

Every check is exact equality. Headers are the one order-independent field:
both mappings are sorted by name before comparison. Header names are not
case-folded.

Normalization failures are raised, never reported as "not equal".
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from httpcmp._config import ComparatorConfig
from httpcmp._registry import type_name
from httpcmp._request import HttpRequest
from httpcmp._wire import WireRequestParser

if TYPE_CHECKING:
    from httpcmp._registry import AdapterRegistry
    from httpcmp._types import HeaderValue, RequestParser

logger = logging.getLogger(__name__)

# Canonical header form: (name, values) pairs sorted by name.
type NormalizedHeaders = list[tuple[str, tuple[str, ...]]]


class ComparisonError(Exception):
    """Errors from request normalization."""


class UnsupportedInputType(ComparisonError, TypeError):
    """Input is neither a supported request object nor request text."""

    def __init__(self, input_type: type) -> None:
        self.input_type = input_type
        super().__init__(
            f"{type_name(input_type)!r} is not supported: expected request text "
            "or a supported request object"
        )


class InvalidRequestFormat(ComparisonError, ValueError):
    """Request text could not be parsed as an HTTP request."""

    def __init__(self, text: str) -> None:
        self.text = text
        preview = text if len(text) <= 60 else f"{text[:57]}..."
        super().__init__(f"string is not a valid HTTP request: {preview!r}")


class InvalidRequestObject(ComparisonError, ValueError):
    """A supported request object could not be converted to an HttpRequest.

    The adapter's own error is chained as ``__cause__``.
    """

    def __init__(self, request: Any) -> None:
        self.request = request
        super().__init__(
            f"{type_name(type(request))!r} object is not a valid HTTP request"
        )


def _default_registry() -> AdapterRegistry:
    from httpcmp.clients import default_registry

    return default_registry()


@dataclass(frozen=True, slots=True)
class RequestComparator:
    """Compare HTTP requests given as HttpRequest, client objects, or text.

    The parser handles text inputs; the registry handles client library
    objects. Both are injectable, so the comparator itself does not depend
    on any particular HTTP library; the client adapters are only imported
    when no registry is given.
    """

    parser: RequestParser = field(default_factory=WireRequestParser)
    registry: AdapterRegistry = field(default_factory=_default_registry)
    config: ComparatorConfig = field(default_factory=ComparatorConfig)

    def normalize(self, request: Any) -> HttpRequest:
        """Convert any accepted input to an HttpRequest.

        Raises:
            InvalidRequestFormat: text the parser rejects
            UnsupportedInputType: anything that is neither text nor a
                supported request object
            InvalidRequestObject: a supported request object whose adapter
                rejects it (relative URL, bad port)
        """
        match request:
            case HttpRequest():
                return request
            case str():
                parsed = self.parser.parse(request)
                if parsed is None:
                    raise InvalidRequestFormat(request)
                return parsed
            case _:
                try:
                    adapted = self.registry.adapt(request)
                except ValueError as e:
                    logger.debug("adapter rejected %s: %s", type_name(type(request)), e)
                    raise InvalidRequestObject(request) from e
                if adapted is None:
                    raise UnsupportedInputType(type(request))
                return adapted

    def compare(self, request1: Any, request2: Any) -> bool:
        """Return True if both requests are equivalent on every configured field."""
        r1 = self.normalize(request1)
        r2 = self.normalize(request2)
        for name in self.config.fields:
            if not _FIELD_CHECKS[name](self, getattr(r1, name), getattr(r2, name)):
                logger.debug("requests differ on %s", name)
                return False
        return True

    def mismatched_fields(self, request1: Any, request2: Any) -> list[str]:
        """Names of every configured field on which the requests differ.

        Empty exactly when compare() returns True.
        """
        r1 = self.normalize(request1)
        r2 = self.normalize(request2)
        return [
            name
            for name in self.config.fields
            if not _FIELD_CHECKS[name](self, getattr(r1, name), getattr(r2, name))
        ]

    # ── Per-field comparisons ─────────────────────────────────────────────

    def compare_host(self, host1: str, host2: str) -> bool:
        return host1 == host2

    def compare_port(self, port1: int | None, port2: int | None) -> bool:
        """Absent ports only equal absent ports; no scheme defaults apply."""
        return port1 == port2

    def compare_username(self, username1: str | None, username2: str | None) -> bool:
        return username1 == username2

    def compare_password(self, password1: str | None, password2: str | None) -> bool:
        return password1 == password2

    def compare_path(self, path1: str, path2: str) -> bool:
        return path1 == path2

    def compare_scheme(self, scheme1: str, scheme2: str) -> bool:
        """Case-sensitive: ``http`` does not equal ``HTTP``."""
        return scheme1 == scheme2

    def compare_protocol_version(self, version1: str, version2: str) -> bool:
        return version1 == version2

    def compare_method(self, method1: str, method2: str) -> bool:
        """Case-sensitive: ``GET`` does not equal ``get``."""
        return method1 == method2

    def compare_headers(
        self,
        headers1: Mapping[str, HeaderValue],
        headers2: Mapping[str, HeaderValue],
    ) -> bool:
        """Order-independent header comparison.

        Names must match exactly (including case) and each name must carry
        the same values in the same order.
        """
        return self.normalize_headers(headers1) == self.normalize_headers(headers2)

    @staticmethod
    def normalize_headers(headers: Mapping[str, HeaderValue]) -> NormalizedHeaders:
        """Sort headers by name; single values become one-element tuples."""
        return sorted(
            (
                (name, (value,) if isinstance(value, str) else tuple(value))
                for name, value in headers.items()
            ),
            key=lambda item: item[0],
        )


_FIELD_CHECKS: dict[str, Callable[[RequestComparator, Any, Any], bool]] = {
    "host": RequestComparator.compare_host,
    "port": RequestComparator.compare_port,
    "username": RequestComparator.compare_username,
    "password": RequestComparator.compare_password,
    "path": RequestComparator.compare_path,
    "scheme": RequestComparator.compare_scheme,
    "protocol_version": RequestComparator.compare_protocol_version,
    "method": RequestComparator.compare_method,
    "headers": RequestComparator.compare_headers,
}


def compare(request1: Any, request2: Any) -> bool:
    """Compare two requests with a default RequestComparator."""
    return RequestComparator().compare(request1, request2)
