"""Test utilities for httpcmp.

``assert_requests_equal`` is the assertion form of RequestComparator.compare:
instead of a bare False it reports which fields differ and how.

>>> from httpcmp.testing import assert_requests_equal
>>> assert_requests_equal(
...     "GET http://example.com/ HTTP/1.1\\r\\n\\r\\n",
...     HttpRequest(host="example.com"),
... )
"""

from __future__ import annotations

from typing import Any

from httpcmp._comparator import RequestComparator
from httpcmp._request import HttpRequest


def assert_requests_equal(
    expected: Any,
    actual: Any,
    comparator: RequestComparator | None = None,
) -> None:
    """Assert that two requests are equivalent.

    Raises:
        AssertionError: listing every differing field with both values
        ComparisonError: if either input cannot be normalized
    """
    comparator = comparator or RequestComparator()
    r1 = comparator.normalize(expected)
    r2 = comparator.normalize(actual)
    mismatched = comparator.mismatched_fields(r1, r2)
    if not mismatched:
        return
    lines = [f"requests differ on {', '.join(mismatched)}:"]
    for name in mismatched:
        lines.append(
            f"  {name}: expected {_describe(name, r1)}, got {_describe(name, r2)}"
        )
    raise AssertionError("\n".join(lines))


def _describe(name: str, request: HttpRequest) -> str:
    if name == "headers":
        return repr(dict(RequestComparator.normalize_headers(request.headers)))
    return repr(getattr(request, name))
