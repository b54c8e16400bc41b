"""Pydantic models for logcarve."""

from __future__ import annotations

from collections.abc import Callable  # noqa: TC003 - Pydantic needs this at runtime for model field resolution
from datetime import datetime, timedelta  # noqa: TC003 - Pydantic needs this at runtime for model field resolution
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from logcarve.decoders import DecoderName
from logcarve.formatters import OutputFormat

# labels, values, line_number, line_number_enabled, is_first -> formatted line
LineHandler = Callable[[list[str], list[str], int, bool, bool], str]


class InputType(StrEnum):
    """Kind of source a Result was produced from."""

    STREAM = "stream"
    STRING = "string"
    FILE = "file"
    GZIP = "gzip"
    ZIP = "zip"


class ErrorRecord(BaseModel):
    """A raw line that no pattern matched."""

    model_config = ConfigDict(frozen=True)

    line_number: int
    line: str
    entry: str | None = None


class FormatErrorRecord(BaseModel):
    """A matched line whose formatter raised instead of returning text."""

    model_config = ConfigDict(frozen=True)

    line_number: int
    message: str


class Result(BaseModel):
    """Immutable summary of one parsed input (or one archive entry)."""

    model_config = ConfigDict(frozen=True)

    total: int = 0
    matched: int = 0
    unmatched: int = 0
    excluded: int = 0
    skipped: int = 0
    elapsed_time: timedelta
    source: str = ""
    zip_entries: tuple[str, ...] = ()
    errors: tuple[ErrorRecord, ...] = ()
    format_errors: tuple[FormatErrorRecord, ...] = ()
    input_type: InputType = InputType.STREAM

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_errors(self) -> bool:
        """Whether any line was unmatched. Not an error condition on its own."""
        return len(self.errors) > 0

    def counts(self) -> tuple[int, int, int, int, int]:
        """(total, matched, unmatched, excluded, skipped), for comparing runs."""
        return self.total, self.matched, self.unmatched, self.excluded, self.skipped


class Option(BaseModel):
    """Per-run configuration shared read-only by every input of a run.

    skip_lines must not be used with unbounded streams, where the line
    count cannot be known in advance.
    """

    model_config = ConfigDict(frozen=True)

    labels: list[str] = Field(default_factory=list)
    filters: list[str] = Field(default_factory=list)
    skip_lines: frozenset[int] = frozenset()
    prefix: bool = False
    unmatch_lines: bool = False
    line_number: bool = False
    line_handler: LineHandler | None = None


class AppConfig(BaseModel):
    """Application configuration persisted to disk."""

    output_format: OutputFormat = OutputFormat.JSON
    prefix: bool = False
    unmatch_lines: bool = False
    line_number: bool = False


class Profile(BaseModel):
    """A named, reusable set of parse options."""

    name: str
    decoder: DecoderName = DecoderName.REGEX
    patterns: list[str] = []
    field_delimiter: str = "\t"
    kv_delimiter: str = ":"
    labels: list[str] = []
    filters: list[str] = []
    skip_lines: list[int] = []
    output_format: OutputFormat | None = None
    prefix: bool | None = None
    unmatch_lines: bool | None = None
    line_number: bool | None = None
    created_at: datetime
    updated_at: datetime
