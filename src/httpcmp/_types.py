"""Core protocols and type aliases for httpcmp.

- HeaderValue is what callers may pass as a header value
- RequestParser is the injected collaborator that turns request text into
  an HttpRequest
- RequestAdapter converts a client library's request object into an HttpRequest
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from httpcmp._request import HttpRequest

# A single value or the ordered values of a repeated header.
type HeaderValue = str | Sequence[str]


@runtime_checkable
class RequestParser(Protocol):
    """Parse raw request text into an HttpRequest.

    Returning None is the ParseFailure result: the text could not be
    interpreted as an HTTP request. Parsers must not raise for malformed
    input.
    """

    def parse(self, text: str, /) -> HttpRequest | None: ...


type RequestAdapter = Callable[[Any], HttpRequest]
