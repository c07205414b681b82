"""Comparator configuration.

Selects which fields RequestComparator.compare() checks. The same shape
loads from a dict or a YAML file:

    fields: [host, port, path, method, headers]

Selected fields are always checked in canonical order, whatever order the
config lists them in.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

# Canonical comparison order.
COMPARED_FIELDS: tuple[str, ...] = (
    "host",
    "port",
    "username",
    "password",
    "path",
    "scheme",
    "protocol_version",
    "method",
    "headers",
)

_KNOWN_KEYS = frozenset({"fields"})


class ConfigParseError(Exception):
    """Error parsing a comparator config."""


@dataclass(frozen=True, slots=True)
class ComparatorConfig:
    """Which fields compare() checks. Defaults to all of them."""

    fields: tuple[str, ...] = COMPARED_FIELDS

    def __post_init__(self) -> None:
        unknown = [f for f in self.fields if f not in COMPARED_FIELDS]
        if unknown:
            msg = f"unknown fields: {', '.join(unknown)}"
            raise ConfigParseError(msg)
        if not self.fields:
            msg = "at least one field must be compared"
            raise ConfigParseError(msg)
        object.__setattr__(
            self, "fields", tuple(f for f in COMPARED_FIELDS if f in self.fields)
        )


def parse_comparator_config(data: dict[str, Any]) -> ComparatorConfig:
    """Parse a dict into a ComparatorConfig.

    An empty dict yields the default config.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        msg = f"unknown config keys: {', '.join(map(str, unknown))}"
        raise ConfigParseError(msg)

    if "fields" not in data:
        return ComparatorConfig()

    raw_fields = data["fields"]
    if not isinstance(raw_fields, list):
        msg = f"'fields' must be a list, got {type(raw_fields).__name__}"
        raise ConfigParseError(msg)
    for f in raw_fields:
        if not isinstance(f, str):
            msg = f"field names must be strings, got {type(f).__name__}"
            raise ConfigParseError(msg)

    return ComparatorConfig(fields=tuple(raw_fields))


def load_comparator_config(path: str | Path) -> ComparatorConfig:
    """Load a ComparatorConfig from a YAML file.

    An empty file yields the default config.

    Raises:
        ConfigParseError: If the file is not valid YAML or not a valid config.
        OSError: If the file cannot be read.
    """
    with Path(path).open() as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"invalid YAML in {path}: {e}"
            raise ConfigParseError(msg) from e
    return parse_comparator_config(data if data is not None else {})
