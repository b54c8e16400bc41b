"""Result aggregation and the end-of-run summary report."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from logcarve.models import ErrorRecord, FormatErrorRecord, InputType, Result

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

logger = logging.getLogger(__name__)

_TOP_ERRORS = 10
_ENTRY_WIDTH = 18
_LINE_WIDTH = 94


@dataclass(slots=True)
class ResultAggregator:
    """Mutable counters for one logical input; frozen into a Result on finalize."""

    source: str = ""
    input_type: InputType = InputType.STREAM
    entry: str | None = None
    total: int = 0
    matched: int = 0
    unmatched: int = 0
    excluded: int = 0
    skipped: int = 0
    errors: list[ErrorRecord] = field(default_factory=list)
    format_errors: list[FormatErrorRecord] = field(default_factory=list)
    started: float = field(default_factory=time.monotonic)

    def add_unmatched(self, line_number: int, line: str) -> None:
        self.unmatched += 1
        self.errors.append(ErrorRecord(line_number=line_number, line=line, entry=self.entry))

    def add_format_error(self, line_number: int, message: str) -> None:
        self.format_errors.append(FormatErrorRecord(line_number=line_number, message=message))

    def finalize(self) -> Result:
        """Freeze the counters into a Result."""
        result = Result(
            total=self.total,
            matched=self.matched,
            unmatched=self.unmatched,
            excluded=self.excluded,
            skipped=self.skipped,
            elapsed_time=timedelta(seconds=time.monotonic() - self.started),
            source=self.source,
            zip_entries=(self.entry,) if self.entry is not None else (),
            errors=tuple(self.errors),
            format_errors=tuple(self.format_errors),
            input_type=self.input_type,
        )
        logger.info(
            "parsed %s: total=%d matched=%d unmatched=%d excluded=%d skipped=%d",
            self.source or self.input_type.value,
            result.total,
            result.matched,
            result.unmatched,
            result.excluded,
            result.skipped,
        )
        return result


def _fold(s: str, width: int) -> str:
    """Insert line breaks every ``width`` characters."""
    return "\n".join(s[i : i + width] for i in range(0, len(s), width)) or s


def summary_table(results: Sequence[Result]) -> Table:
    """Counts per Result, one row each."""
    table = Table(title="SUMMARY", title_justify="left", title_style="bold cyan")
    show_source = any(r.source for r in results)
    if show_source:
        table.add_column("Source")
    for name in ("Total", "Matched", "Unmatched", "Excluded", "Skipped"):
        table.add_column(name, justify="right")
    table.add_column("Elapsed", justify="right")
    for r in results:
        row = [str(n) for n in r.counts()]
        row.append(f"{r.elapsed_time.total_seconds():.3f}s")
        if show_source:
            row.insert(0, r.source or "-")
        table.add_row(*row)
    return table


def errors_table(results: Sequence[Result], top: int = _TOP_ERRORS) -> Table | None:
    """Up to ``top`` unmatched lines per Result, or None if there are none."""
    records = [e for r in results for e in r.errors[:top]]
    if not records:
        return None
    total = sum(len(r.errors) for r in results)
    table = Table(title="UNMATCHED LINES", title_justify="left", title_style="bold cyan")
    show_entry = any(e.entry for e in records)
    if show_entry:
        table.add_column("Entry")
    table.add_column("LineNumber", justify="right")
    table.add_column("Line")
    for e in records:
        row = [str(e.line_number), _fold(e.line, _LINE_WIDTH).replace("\t", "\\t")]
        if show_entry:
            row.insert(0, _fold(e.entry or "", _ENTRY_WIDTH))
        table.add_row(*row)
    if total > len(records):
        table.caption = f"Showing {len(records)} of {total} unmatched lines (first {top} per source)"
    return table


def render_summary(results: Sequence[Result], console: Console) -> None:
    """Print the summary table, then the unmatched-lines table if any."""
    console.print(summary_table(results))
    console.print(
        Text(
            "Excluded: lines removed by filter expressions; Skipped: lines skipped by line number",
            style="dim",
        )
    )
    table = errors_table(results)
    if table is not None:
        console.print(table)
