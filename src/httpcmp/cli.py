"""Command-line comparison of two raw HTTP request files.

Usage:
    httpcmp [--config comparator.yaml] [--verbose] expected.txt actual.txt

Exit status: 0 when the requests are equivalent, 1 when they differ,
2 when either file cannot be read or parsed.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from httpcmp._comparator import ComparisonError, RequestComparator
from httpcmp._config import ComparatorConfig, ConfigParseError, load_comparator_config

EXIT_EQUAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2


@click.command()
@click.argument("request1", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("request2", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file selecting the fields to compare",
)
@click.option("--verbose", "-v", is_flag=True, help="Log comparison details to stderr")
def main(request1: Path, request2: Path, config_path: Path | None, verbose: bool) -> None:
    """Compare two HTTP requests stored as raw request text."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = (
            load_comparator_config(config_path) if config_path else ComparatorConfig()
        )
    except ConfigParseError as e:
        click.echo(f"Invalid config: {e}", err=True)
        sys.exit(EXIT_ERROR)

    comparator = RequestComparator(config=config)
    try:
        mismatched = comparator.mismatched_fields(
            _read_request(request1), _read_request(request2)
        )
    except ComparisonError as e:
        click.echo(f"Cannot compare: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if mismatched:
        click.echo(f"different: {', '.join(mismatched)}")
        sys.exit(EXIT_DIFFERENT)
    click.echo("equal")


def _read_request(path: Path) -> str:
    # newline="" keeps CRLF line endings intact.
    with path.open(encoding="latin-1", newline="") as f:
        return f.read()


if __name__ == "__main__":
    main()
