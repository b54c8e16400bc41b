"""Regex fallback-chain decoder."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from typing_extensions import override

from logcarve.decoders.base import DecodedLine, LineDecoder
from logcarve.errors import ConfigurationError, PatternError

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


def compile_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile and validate a pattern whose capture groups are all named."""
    if isinstance(pattern, re.Pattern):
        compiled = pattern
    else:
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            msg = f"invalid pattern {pattern!r}: {e}"
            raise PatternError(msg) from e
    if compiled.groups == 0:
        msg = f"invalid pattern {compiled.pattern!r}: capture group not found"
        raise PatternError(msg)
    if len(compiled.groupindex) != compiled.groups:
        msg = f"invalid pattern {compiled.pattern!r}: non-named capture group detected"
        raise PatternError(msg)
    return compiled


def _group_names(pattern: re.Pattern[str]) -> list[str]:
    """Group names in declaration order."""
    return [name for name, _ in sorted(pattern.groupindex.items(), key=lambda item: item[1])]


class RegexDecoder(LineDecoder):
    """Tries each registered pattern in order; the first match wins.

    Patterns are searched (not fully matched) against the line, so more
    specific patterns must be registered before their shorter variants.
    """

    def __init__(self, patterns: Iterable[str | re.Pattern[str]] = ()) -> None:
        self._patterns: list[re.Pattern[str]] = []
        self._names: list[list[str]] = []
        self.add_patterns(patterns)

    @property
    def name(self) -> str:
        return "regex"

    @property
    def patterns(self) -> list[re.Pattern[str]]:
        return list(self._patterns)

    def add_pattern(self, pattern: str | re.Pattern[str]) -> None:
        """Register one pattern at the end of the chain."""
        compiled = compile_pattern(pattern)
        self._patterns.append(compiled)
        self._names.append(_group_names(compiled))
        logger.debug("registered pattern #%d with %d fields", len(self._patterns), compiled.groups)

    def add_patterns(self, patterns: Iterable[str | re.Pattern[str]]) -> None:
        """Register several patterns; nothing is registered if any is invalid."""
        compiled = [compile_pattern(p) for p in patterns]
        for p in compiled:
            self.add_pattern(p)

    @override
    def validate(self) -> None:
        if not self._patterns:
            msg = "cannot parse input: no patterns provided"
            raise ConfigurationError(msg)

    @override
    def decode(self, raw: str) -> DecodedLine | None:
        for pattern, names in zip(self._patterns, self._names, strict=True):
            m = pattern.search(raw)
            if m is None:
                continue
            line = DecodedLine()
            for name in names:
                line.append(name, m.group(name))
            return line
        return None
