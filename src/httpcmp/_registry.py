"""Adapter registry for structured request variants.

Each supported request type (HttpRequest itself, or a client library's
request class) is registered with an adapter that produces an HttpRequest.

- AdapterRegistryBuilder → .build() → AdapterRegistry (immutable)
- Adapters are plain callables: (request object) → HttpRequest
- adapt() resolves through the MRO, so subclasses of a registered type
  are supported too

Example::

    builder = AdapterRegistryBuilder()
    builder = register_core_adapters(builder)
    builder.adapter(MyRequest, lambda r: HttpRequest.from_url(r.verb, r.url))
    registry = builder.build()

    registry.adapt(MyRequest(...))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from httpcmp._request import HttpRequest

if TYPE_CHECKING:
    from httpcmp._types import RequestAdapter


class AdapterRegistryBuilder:
    """Builder for constructing an AdapterRegistry.

    Register adapters by request type, then call build() to produce an
    immutable AdapterRegistry. Registering the same type twice replaces
    the earlier adapter.
    """

    def __init__(self) -> None:
        self._adapters: dict[type, RequestAdapter] = {}

    def adapter(self, type_: type, adapter: RequestAdapter) -> AdapterRegistryBuilder:
        """Register an adapter for a request type."""
        self._adapters[type_] = adapter
        return self

    def build(self) -> AdapterRegistry:
        """Freeze the registry. No further registration is possible."""
        return AdapterRegistry(_adapters=MappingProxyType(dict(self._adapters)))


def register_core_adapters(builder: AdapterRegistryBuilder) -> AdapterRegistryBuilder:
    """Register HttpRequest itself (passed through unchanged)."""
    return builder.adapter(HttpRequest, _identity)


def _identity(request: HttpRequest) -> HttpRequest:
    return request


@dataclass(frozen=True, slots=True)
class AdapterRegistry:
    """Immutable mapping of request types to adapters.

    Constructed via AdapterRegistryBuilder.
    """

    _adapters: MappingProxyType[type, RequestAdapter] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def adapter_for(self, type_: type) -> RequestAdapter | None:
        """Find the adapter for a type or its nearest registered base class."""
        for klass in type_.__mro__:
            adapter = self._adapters.get(klass)
            if adapter is not None:
                return adapter
        return None

    def adapt(self, request: Any) -> HttpRequest | None:
        """Convert a supported request object; None if its type is unsupported."""
        adapter = self.adapter_for(type(request))
        if adapter is None:
            return None
        return adapter(request)

    def supports(self, type_: type) -> bool:
        """Check if a type (or one of its bases) has an adapter."""
        return self.adapter_for(type_) is not None

    @property
    def adapter_count(self) -> int:
        """Number of registered request types."""
        return len(self._adapters)

    def type_names(self) -> list[str]:
        """Return the qualified names of all registered types (sorted)."""
        return sorted(type_name(t) for t in self._adapters)


def type_name(type_: type) -> str:
    """Qualified name of a type, e.g. ``requests.models.PreparedRequest``."""
    if type_.__module__ == "builtins":
        return type_.__qualname__
    return f"{type_.__module__}.{type_.__qualname__}"
