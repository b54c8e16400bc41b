"""LTSV (label:value, tab separated) decoder."""

from __future__ import annotations

from typing_extensions import override

from logcarve.decoders.base import DecodedLine, LineDecoder
from logcarve.errors import ConfigurationError


class LTSVDecoder(LineDecoder):
    """Splits a line into label/value tokens.

    Example: host:10.0.0.1<TAB>status:200<TAB>size:512

    A token without the kv delimiter makes the whole line unmatched.
    """

    def __init__(self, field_delimiter: str = "\t", kv_delimiter: str = ":") -> None:
        if not field_delimiter or not kv_delimiter:
            msg = "delimiters must not be empty"
            raise ConfigurationError(msg)
        if field_delimiter == kv_delimiter:
            msg = f"field and kv delimiters must differ, both are {field_delimiter!r}"
            raise ConfigurationError(msg)
        self.field_delimiter = field_delimiter
        self.kv_delimiter = kv_delimiter

    @property
    def name(self) -> str:
        return "ltsv"

    @override
    def decode(self, raw: str) -> DecodedLine | None:
        line = DecodedLine()
        for token in raw.split(self.field_delimiter):
            label, sep, value = token.partition(self.kv_delimiter)
            if not sep:
                return None
            line.append(label, value)
        return line
