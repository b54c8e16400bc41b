"""Parse command - decode, filter and re-serialize access logs."""

from __future__ import annotations

import signal
import sys
import threading
from pathlib import Path  # noqa: TC003 - typer needs this at runtime for argument parsing
from typing import TYPE_CHECKING, Annotated, TypeVar

import typer
from rich.console import Console

from logcarve.config import load_config
from logcarve.decoders import DecoderName, get_decoder
from logcarve.errors import LogcarveError, ParseCancelledError, SourceError
from logcarve.formatters import OutputFormat, get_line_handler
from logcarve.models import Option
from logcarve.parser import LogParser
from logcarve.reader import open_stdin
from logcarve.result import render_summary

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import FrameType

    from logcarve.models import Profile, Result

T = TypeVar("T")


def _split_labels(values: list[str]) -> list[str]:
    """Accept both ``-l a -l b`` and ``-l a,b``."""
    return [name.strip() for v in values for name in v.split(",") if name.strip()]


def _pick(flag: T | None, profile_value: T | None, default: T) -> T:
    """Command-line flag, then profile, then configured default."""
    if flag is not None:
        return flag
    if profile_value is not None:
        return profile_value
    return default


def _load_profile(name: str | None) -> Profile | None:
    if name is None:
        return None
    from logcarve.profiles import load_profile  # noqa: PLC0415

    return load_profile(name)


def _iter_results(
    log_parser: LogParser, files: list[Path], gzip: bool, zip_glob: str | None
) -> Iterator[Result]:
    if not files:
        yield log_parser.parse(open_stdin())
        return
    for f in files:
        if zip_glob is not None:
            yield from log_parser.parse_zip_entries(f, zip_glob)
        elif gzip:
            yield log_parser.parse_gzip(f)
        else:
            yield log_parser.parse_file(f)


def parse(  # noqa: C901, PLR0912, PLR0913, PLR0915
    files: Annotated[list[Path] | None, typer.Argument(help="Log file(s) to parse (default: stdin)")] = None,
    decoder: Annotated[
        DecoderName | None, typer.Option("--decoder", "-d", help="Line decoder or preset (default: regex)")
    ] = None,
    patterns: Annotated[
        list[str] | None, typer.Option("--pattern", "-p", help="Regex with named groups; repeat for fallbacks")
    ] = None,
    field_delimiter: Annotated[
        str | None, typer.Option("--field-delimiter", help="LTSV field delimiter (default: tab)")
    ] = None,
    kv_delimiter: Annotated[str | None, typer.Option("--kv-delimiter", help="LTSV label/value delimiter")] = None,
    labels: Annotated[
        list[str] | None, typer.Option("--labels", "-l", help="Labels to output, in order (comma separated)")
    ] = None,
    filters: Annotated[
        list[str] | None, typer.Option("--filter", "-f", help="Filter expression, e.g. 'status >= 500'")
    ] = None,
    skip: Annotated[list[int] | None, typer.Option("--skip", "-s", help="Line number to skip (repeatable)")] = None,
    prefix: Annotated[
        bool | None, typer.Option("--prefix/--no-prefix", help="Mark output lines as PROCESSED/UNMATCHED")
    ] = None,
    unmatch: Annotated[
        bool | None, typer.Option("--unmatch/--no-unmatch", "-u", help="Also output lines no pattern matched")
    ] = None,
    line_number: Annotated[
        bool | None, typer.Option("--line-number/--no-line-number", "-n", help="Add the input line number")
    ] = None,
    fmt: Annotated[OutputFormat | None, typer.Option("--format", "-F", help="Output format")] = None,
    gzip: Annotated[bool, typer.Option("--gzip", "-z", help="Inputs are gzip-compressed")] = False,  # noqa: FBT002
    zip_archive: Annotated[bool, typer.Option("--zip", help="Inputs are zip archives")] = False,  # noqa: FBT002
    glob: Annotated[
        str, typer.Option("--glob", "-g", help="Archive entries to parse (with --zip); * stops at /")
    ] = "*",
    summary: Annotated[
        bool, typer.Option("--summary", "-S", help="Print a summary table to stderr when done")
    ] = False,  # noqa: FBT002
    profile: Annotated[str | None, typer.Option("--profile", "-P", help="Apply a saved profile")] = None,
) -> None:
    """Extract fields from access logs and print them in a structured format."""
    if gzip and zip_archive:
        typer.echo("Error: --gzip and --zip cannot be combined")
        raise typer.Exit(1)
    if not files and (gzip or zip_archive):
        typer.echo("Error: --gzip and --zip need file arguments")
        raise typer.Exit(1)
    if not files and sys.stdin.isatty():
        typer.echo("Error: provide a file or pipe input")
        raise typer.Exit(1)

    config = load_config()
    try:
        prof = _load_profile(profile)
    except LogcarveError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)  # noqa: B904

    output_format = _pick(fmt, prof.output_format if prof else None, config.output_format)
    try:
        line_decoder = get_decoder(
            _pick(decoder, prof.decoder if prof else None, DecoderName.REGEX),
            patterns=[*(prof.patterns if prof else []), *(patterns or [])],
            field_delimiter=_pick(field_delimiter, prof.field_delimiter if prof else None, "\t"),
            kv_delimiter=_pick(kv_delimiter, prof.kv_delimiter if prof else None, ":"),
        )
        option = Option(
            labels=_split_labels(labels) if labels else (prof.labels if prof else []),
            filters=[*(prof.filters if prof else []), *(filters or [])],
            skip_lines=frozenset(skip if skip else (prof.skip_lines if prof else [])),
            prefix=_pick(prefix, prof.prefix if prof else None, config.prefix),
            unmatch_lines=_pick(unmatch, prof.unmatch_lines if prof else None, config.unmatch_lines),
            line_number=_pick(line_number, prof.line_number if prof else None, config.line_number),
            line_handler=get_line_handler(output_format),
        )
    except LogcarveError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)  # noqa: B904

    cancel = threading.Event()

    def _on_interrupt(signum: int, frame: FrameType | None) -> None:
        # second Ctrl-C aborts without waiting for the next line
        if cancel.is_set():
            raise KeyboardInterrupt
        cancel.set()

    log_parser = LogParser(line_decoder, option, writer=sys.stdout, cancel_event=cancel)
    results: list[Result] = []
    exit_code = 0
    previous = signal.signal(signal.SIGINT, _on_interrupt)
    try:
        for result in _iter_results(log_parser, files or [], gzip, glob if zip_archive else None):
            results.append(result)
    except ParseCancelledError as e:
        results.extend(e.results)
        typer.echo("Cancelled", err=True)
        exit_code = 130
    except SourceError as e:
        results.extend(e.results)
        typer.echo(f"Error: {e}")
        exit_code = 1
    except LogcarveError as e:
        typer.echo(f"Error: {e}")
        exit_code = 1
    finally:
        signal.signal(signal.SIGINT, previous)
        sys.stdout.flush()

    if summary and results:
        render_summary(results, Console(stderr=True))
    if exit_code:
        raise typer.Exit(exit_code)
