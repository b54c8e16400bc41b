"""Decoder registry and the DecoderName enum."""

# ruff: noqa: PLC0415
from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from logcarve.decoders.base import EMPTY_VALUE, DecodedLine, LineDecoder

if TYPE_CHECKING:
    import re
    from collections.abc import Sequence

__all__ = ["EMPTY_VALUE", "DecodedLine", "DecoderName", "LineDecoder", "get_decoder"]


class DecoderName(StrEnum):
    """Available decoder names for CLI selection."""

    REGEX = "regex"
    LTSV = "ltsv"
    APACHE = "apache"
    APACHE_VHOST = "apache-vhost"
    S3 = "s3"
    CLOUDFRONT = "cloudfront"
    ALB = "alb"
    NLB = "nlb"
    CLB = "clb"


def get_decoder(
    name: DecoderName = DecoderName.REGEX,
    patterns: Sequence[str | re.Pattern[str]] = (),
    field_delimiter: str = "\t",
    kv_delimiter: str = ":",
) -> LineDecoder:
    """Get a decoder instance by name.

    ``patterns`` are appended to the regex chain (after any preset patterns);
    the delimiters only apply to the LTSV decoder.
    """
    from logcarve.decoders.ltsv import LTSVDecoder
    from logcarve.decoders.presets import preset_decoder
    from logcarve.decoders.regex import RegexDecoder

    if name == DecoderName.LTSV:
        return LTSVDecoder(field_delimiter=field_delimiter, kv_delimiter=kv_delimiter)
    decoder = RegexDecoder() if name == DecoderName.REGEX else preset_decoder(name.value)
    decoder.add_patterns(patterns)
    return decoder
