"""Public entry points: parse a stream, string, file, gzip file or zip archive."""

from __future__ import annotations

import io
import logging
import sys
from contextlib import closing
from pathlib import Path
from typing import TYPE_CHECKING

from logcarve.errors import ParseCancelledError, SourceError
from logcarve.models import InputType, Option, Result
from logcarve.pipeline import LinePipeline
from logcarve.reader import iter_lines, iter_zip_entries, open_file, open_gzip
from logcarve.result import ResultAggregator

if TYPE_CHECKING:
    import threading
    from typing import TextIO

    from logcarve.decoders.base import LineDecoder

logger = logging.getLogger(__name__)


class LogParser:
    """Decode, filter and re-serialize log lines from any supported source.

    The decoder and Option are shared read-only by every call; each call
    gets its own pipeline and Result(s). Output goes to ``writer``
    (stdout by default) as lines are processed.
    """

    def __init__(
        self,
        decoder: LineDecoder,
        option: Option | None = None,
        writer: TextIO | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self.decoder = decoder
        self.option = option or Option()
        self.writer = writer
        self.cancel_event = cancel_event

    def _pipeline(self) -> LinePipeline:
        return LinePipeline(self.decoder, self.option, self.writer or sys.stdout, self.cancel_event)

    def parse(self, stream: TextIO) -> Result:
        """Parse an already-open text stream."""
        pipeline = self._pipeline()
        return pipeline.run(iter_lines(stream), ResultAggregator(input_type=InputType.STREAM))

    def parse_string(self, text: str) -> Result:
        """Parse in-memory text; a trailing newline does not add a line."""
        pipeline = self._pipeline()
        return pipeline.run(iter_lines(io.StringIO(text)), ResultAggregator(input_type=InputType.STRING))

    def parse_file(self, path: str | Path) -> Result:
        """Parse a plain text file. Source is the file's base name."""
        pipeline = self._pipeline()
        with open_file(path) as f:
            aggregator = ResultAggregator(source=Path(path).name, input_type=InputType.FILE)
            return pipeline.run(iter_lines(f, str(path)), aggregator)

    def parse_gzip(self, path: str | Path) -> Result:
        """Parse a gzip-compressed file. Source is the file's base name."""
        pipeline = self._pipeline()
        with open_gzip(path) as f:
            aggregator = ResultAggregator(source=Path(path).name, input_type=InputType.GZIP)
            return pipeline.run(iter_lines(f, str(path)), aggregator)

    def parse_zip_entries(self, path: str | Path, glob: str = "*") -> list[Result]:
        """Parse every archive entry whose name matches ``glob``, in archive order.

        ``*`` does not match ``/``: use ``logs/*.log`` for entries in ``logs/``.

        Returns one Result per entry; its source is the entry name. On a
        source failure or cancellation the Results of completed entries are
        attached to the raised error.
        """
        pipeline = self._pipeline()
        results: list[Result] = []
        try:
            with closing(iter_zip_entries(path, glob)) as entries:
                for name, lines in entries:
                    aggregator = ResultAggregator(source=name, input_type=InputType.ZIP, entry=name)
                    results.append(pipeline.run(lines, aggregator))
        except ParseCancelledError as e:
            raise ParseCancelledError([*results, *e.results]) from None
        except SourceError as e:
            raise SourceError(str(e), [*results, *e.results]) from e
        if not results:
            logger.warning("no entries in %s match %r", path, glob)
        return results
