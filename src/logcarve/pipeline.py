"""Per-line processing: skip, decode, filter, project, format, emit."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from logcarve.errors import ParseCancelledError
from logcarve.filters import check_line, compile_filters
from logcarve.formatters import json_line_handler
from logcarve.labels import project

if TYPE_CHECKING:
    import threading
    from collections.abc import Iterable
    from typing import TextIO

    from logcarve.decoders.base import LineDecoder
    from logcarve.models import Option, Result
    from logcarve.result import ResultAggregator

logger = logging.getLogger(__name__)

PROCESSED_MARKER = "[ PROCESSED ] "
UNMATCHED_MARKER = "[ UNMATCHED ] "


class LinePipeline:
    """Runs lines through the decoder, filters and formatter, counting outcomes.

    Configuration errors (no patterns, bad filter syntax) surface from the
    constructor, before any line is read. One pipeline may run several
    inputs in turn (e.g. archive entries); only the "first emitted line"
    flag carries over between them, so header rows are written once.
    """

    def __init__(
        self,
        decoder: LineDecoder,
        option: Option,
        writer: TextIO,
        cancel_event: threading.Event | None = None,
    ) -> None:
        decoder.validate()
        self.decoder = decoder
        self.option = option
        self.writer = writer
        self.cancel_event = cancel_event
        self.filters = compile_filters(option.filters)
        self.handler = option.line_handler or json_line_handler
        self.emitted = False

    def run(self, lines: Iterable[str], aggregator: ResultAggregator) -> Result:
        """Process every line and return the finalized Result.

        Raises ParseCancelledError, carrying the partial Result, if the
        cancel event is set.
        """
        logger.debug("parsing %s with %s decoder", aggregator.source or aggregator.input_type.value, self.decoder.name)
        for line_number, raw in enumerate(lines, start=1):
            if self.cancel_event is not None and self.cancel_event.is_set():
                logger.info("cancelled at line %d", line_number)
                raise ParseCancelledError([aggregator.finalize()])
            self._process(line_number, raw, aggregator)
        return aggregator.finalize()

    def _process(self, line_number: int, raw: str, aggregator: ResultAggregator) -> None:
        aggregator.total += 1
        if line_number in self.option.skip_lines:
            aggregator.skipped += 1
            return

        decoded = self.decoder.decode(raw)
        if decoded is None:
            aggregator.add_unmatched(line_number, raw)
            if self.option.unmatch_lines:
                self._write_unmatched(line_number, raw)
            return

        if not check_line(self.filters, decoded.labels, decoded.values):
            aggregator.excluded += 1
            return

        aggregator.matched += 1
        labels, values = project(decoded.labels, decoded.values, self.option.labels)
        try:
            text = self.handler(labels, values, line_number, self.option.line_number, not self.emitted)
        except Exception as e:  # noqa: BLE001 - formatter failures are per-line, the run goes on
            logger.warning("line %d: formatter failed: %s", line_number, e)
            aggregator.add_format_error(line_number, str(e))
            return
        self.emitted = True
        if self.option.prefix:
            text = PROCESSED_MARKER + text
        self.writer.write(text + "\n")

    def _write_unmatched(self, line_number: int, raw: str) -> None:
        text = raw
        if self.option.line_number:
            text = f"{line_number} {text}"
        if self.option.prefix:
            text = UNMATCHED_MARKER + text
        self.writer.write(text + "\n")
