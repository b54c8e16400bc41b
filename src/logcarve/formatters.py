"""Line formatters: turn projected labels/values into one output line."""

from __future__ import annotations

import json
from enum import StrEnum
from typing import TYPE_CHECKING

from logcarve.decoders.base import EMPTY_VALUE

if TYPE_CHECKING:
    from logcarve.models import LineHandler

LINE_NUMBER_LABEL = "no"


class OutputFormat(StrEnum):
    """Supported output formats."""

    JSON = "json"
    PRETTY_JSON = "pretty-json"
    KEY_VALUE = "kv"
    LTSV = "ltsv"
    TSV = "tsv"


def _with_line_number(
    labels: list[str], values: list[str], line_number: int, has_line_number: bool
) -> tuple[list[str], list[str]]:
    if not has_line_number:
        return labels, values
    return [LINE_NUMBER_LABEL, *labels], [str(line_number), *values]


def _quote(s: str) -> str:
    return json.dumps(s, ensure_ascii=False)


def json_line_handler(
    labels: list[str], values: list[str], line_number: int, has_line_number: bool, is_first: bool
) -> str:
    """NDJSON object with every value as a string, in label order."""
    labels, values = _with_line_number(labels, values, line_number, has_line_number)
    pairs = ",".join(f"{_quote(label)}:{_quote(value)}" for label, value in zip(labels, values, strict=True))
    return "{" + pairs + "}"


def pretty_json_line_handler(
    labels: list[str], values: list[str], line_number: int, has_line_number: bool, is_first: bool
) -> str:
    """Indented JSON object, one field per line."""
    labels, values = _with_line_number(labels, values, line_number, has_line_number)
    if not labels:
        return "{}"
    body = ",\n".join(f"  {_quote(label)}: {_quote(value)}" for label, value in zip(labels, values, strict=True))
    return "{\n" + body + "\n}"


def key_value_line_handler(
    labels: list[str], values: list[str], line_number: int, has_line_number: bool, is_first: bool
) -> str:
    """Space separated ``label="value"`` pairs."""
    labels, values = _with_line_number(labels, values, line_number, has_line_number)
    return " ".join(f"{label}={_quote(value)}" for label, value in zip(labels, values, strict=True))


def ltsv_line_handler(
    labels: list[str], values: list[str], line_number: int, has_line_number: bool, is_first: bool
) -> str:
    """Tab separated ``label:value`` pairs."""
    labels, values = _with_line_number(labels, values, line_number, has_line_number)
    return "\t".join(f"{label}:{value or EMPTY_VALUE}" for label, value in zip(labels, values, strict=True))


def tsv_line_handler(
    labels: list[str], values: list[str], line_number: int, has_line_number: bool, is_first: bool
) -> str:
    """Tab separated values, preceded by a header row on the first line."""
    labels, values = _with_line_number(labels, values, line_number, has_line_number)
    row = "\t".join(values)
    if is_first:
        return "\t".join(labels) + "\n" + row
    return row


_FORMATTERS: dict[OutputFormat, LineHandler] = {
    OutputFormat.JSON: json_line_handler,
    OutputFormat.PRETTY_JSON: pretty_json_line_handler,
    OutputFormat.KEY_VALUE: key_value_line_handler,
    OutputFormat.LTSV: ltsv_line_handler,
    OutputFormat.TSV: tsv_line_handler,
}


def get_line_handler(fmt: OutputFormat) -> LineHandler:
    """Get the line handler for an output format."""
    return _FORMATTERS[fmt]
