from __future__ import annotations

import logging
import sys
import time
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer

from cidrmatch.core.errors import InvalidAddress, InvalidCidr, RangeFileError
from cidrmatch.datasources.base import open_source
from cidrmatch.lookup import BuildResult, build_trie, lookup_many
from cidrmatch.models import CidrRecord
from cidrmatch.output.export import format_results, results_to_dataframe, save_matches
from cidrmatch.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Find every annotated IPv4 CIDR range that contains an address.")

log = get_logger(__name__)


class KindType(str, Enum):
    cfg = "cfg"
    csv = "csv"


class FormatType(str, Enum):
    table = "table"
    json = "json"
    csv = "csv"


RANGES_ENV = "CIDR_MATCH_RANGES"


def _load_records(ranges: Path, kind: Optional[KindType]) -> List[CidrRecord]:
    """
    Internal helper to instantiate the right range source and load it.
    Exits with code 1 when the file is unusable or holds no ranges.
    """
    ranges = ranges.expanduser().resolve()
    log.info("Ranges: %s (kind=%s)", ranges, kind.value if kind else "auto")

    try:
        records = open_source(ranges, kind.value if kind else None).load()
    except RangeFileError as e:
        typer.echo(f"Cannot load ranges: {e}", err=True)
        raise typer.Exit(code=1)

    if not records:
        typer.echo(f"No ranges loaded from {ranges}; nothing to search.", err=True)
        raise typer.Exit(code=1)

    log.info("Loaded %d range record(s) from %s", len(records), ranges)
    return records


def _build(records: List[CidrRecord], strict: bool) -> BuildResult:
    try:
        return build_trie(records, strict=strict)
    except InvalidCidr as e:
        typer.echo(f"Error inserting CIDR {e.cidr}: {e.reason}", err=True)
        raise typer.Exit(code=1)


RangesOption = typer.Option(
    ...,
    "--ranges",
    "-r",
    envvar=RANGES_ENV,
    exists=True,
    dir_okay=False,
    help=f"Range file (.cfg with a public separator, or .csv). Defaults to ${RANGES_ENV}.",
)

KindOption = typer.Option(
    None,
    "--kind",
    "-k",
    help="Range file type: cfg | csv (inferred from the suffix when omitted).",
)


@app.callback()
def main_callback(
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level."),
        debug: bool = typer.Option(False, "--debug", help="Log at DEBUG level."),
):
    """
    Without flags the log level comes from CIDR_MATCH_LOG_LEVEL (default WARNING).
    """
    if debug:
        configure_logging(logging.DEBUG)
    elif verbose:
        configure_logging(logging.INFO)
    else:
        configure_logging()


@app.command()
def lookup(
        ips: List[str] = typer.Argument(..., help="One or more IPv4 addresses to look up."),
        ranges: Path = RangesOption,
        kind: Optional[KindType] = KindOption,
        output_format: FormatType = typer.Option(
            FormatType.table,
            "--format",
            "-f",
            help="Output format on stdout: table | json | csv",
        ),
        output: Optional[Path] = typer.Option(
            None,
            "--output",
            "-o",
            help="Also save the matches to a .csv, .json or .html file.",
        ),
        compress: bool = typer.Option(
            False,
            "--compress",
            help="With --output, also write a gzipped copy.",
        ),
        strict: bool = typer.Option(
            False,
            "--strict",
            help="Abort on the first malformed range instead of skipping it.",
        ),
        timing: bool = typer.Option(
            False,
            "--timing/--no-timing",
            help="Print elapsed milliseconds (load, build and search) to stderr.",
        ),
):
    """
    Report every range containing each IP, least specific first.

    Example:

        cidr-match lookup 1.11.40.5 --ranges ranges.cfg
        cidr-match lookup 10.1.2.3 8.8.8.8 -r ranges.csv -f json -o matches.html
    """
    started = time.perf_counter()

    # 1) load + build
    records = _load_records(ranges, kind)
    trie = _build(records, strict).trie

    # 2) search
    try:
        results = lookup_many(trie, ips)
    except InvalidAddress as e:
        typer.echo(f"Error searching IP {e.address}: {e}", err=True)
        raise typer.Exit(code=2)

    elapsed_ms = (time.perf_counter() - started) * 1000

    # 3) report
    typer.echo(format_results(results, output_format.value))
    if timing:
        typer.echo(f"Elapsed: {elapsed_ms:.1f} ms", err=True)

    # 4) export
    if output is not None:
        try:
            out_path = save_matches(
                results_to_dataframe(results),
                output.expanduser().resolve(),
                compress=compress,
            )
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--output")
        typer.echo(f"Wrote matches to {out_path}", err=True)


@app.command()
def check(
        ranges: Path = RangesOption,
        kind: Optional[KindType] = KindOption,
):
    """
    Load a range file, build the trie and report ranges that were rejected.
    """
    records = _load_records(ranges, kind)
    result = _build(records, strict=False)

    typer.echo(f"Loaded:   {len(records)}")
    typer.echo(f"Inserted: {result.inserted}")
    typer.echo(f"Rejected: {len(result.rejected)}")
    for record, error in result.rejected:
        typer.echo(f"  {record.ip_range}  ({error.reason})")

    if not result.ok:
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for console_scripts."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Interrupted by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
