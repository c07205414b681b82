"""httpcmp: Semantic equality for HTTP requests.

Compares requests given as raw wire text, HttpRequest values, or request
objects from requests, httpx and urllib. All public types are exported
from this module for flat imports:

    from httpcmp import RequestComparator, HttpRequest, compare
"""

__version__ = "0.1.0"

# Comparator
from httpcmp._comparator import (
    ComparisonError,
    InvalidRequestFormat,
    InvalidRequestObject,
    NormalizedHeaders,
    RequestComparator,
    UnsupportedInputType,
    compare,
)

# Config
from httpcmp._config import (
    COMPARED_FIELDS,
    ComparatorConfig,
    ConfigParseError,
    load_comparator_config,
    parse_comparator_config,
)

# Registry
from httpcmp._registry import (
    AdapterRegistry,
    AdapterRegistryBuilder,
    register_core_adapters,
)

# Structured request
from httpcmp._request import HttpRequest

# Protocols
from httpcmp._types import HeaderValue, RequestAdapter, RequestParser

# Parser
from httpcmp._wire import WireRequestParser
from httpcmp.clients import default_registry

__all__ = [
    # Protocols
    "HeaderValue",
    "RequestAdapter",
    "RequestParser",
    # Structured request
    "HttpRequest",
    # Parser
    "WireRequestParser",
    # Comparator
    "RequestComparator",
    "NormalizedHeaders",
    "compare",
    "ComparisonError",
    "UnsupportedInputType",
    "InvalidRequestFormat",
    "InvalidRequestObject",
    # Config
    "COMPARED_FIELDS",
    "ComparatorConfig",
    "ConfigParseError",
    "parse_comparator_config",
    "load_comparator_config",
    # Registry
    "AdapterRegistry",
    "AdapterRegistryBuilder",
    "register_core_adapters",
    "default_registry",
]
