"""Raw line sources: text streams, plain files, gzip files and zip archives."""

from __future__ import annotations

import gzip
import io
import logging
import re
import sys
import zipfile
import zlib
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from logcarve.errors import SourceError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import TextIO

logger = logging.getLogger(__name__)

# Undecodable bytes must not abort a run over otherwise valid logs
_ENCODING = "utf-8"
_ERRORS = "replace"
# Lines end at "\n" only, as with io.StringIO; a lone "\r" stays in the line
_NEWLINE = "\n"


def _check_path(path: str | Path) -> Path:
    if not str(path):
        msg = "empty file path"
        raise SourceError(msg)
    return Path(path)


def _bad_glob(pattern: str, reason: str) -> SourceError:
    return SourceError(f"invalid glob pattern {pattern!r}: {reason}")


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    if i >= len(pattern) or pattern[i] in "-]":
        raise _bad_glob(pattern, "malformed character class")
    if pattern[i] == "\\":
        i += 1
        if i >= len(pattern):
            raise _bad_glob(pattern, "unclosed '['")
    return pattern[i], i + 1


def _translate_class(pattern: str, i: int) -> tuple[str, int]:
    """Translate the ``[...]`` class starting after ``[`` at ``i``."""
    negate = i < len(pattern) and pattern[i] == "^"
    if negate:
        i += 1
    items: list[str] = []
    while True:
        if i >= len(pattern):
            raise _bad_glob(pattern, "unclosed '['")
        if pattern[i] == "]" and items:
            return "[" + ("^" if negate else "") + "".join(items) + "]", i + 1
        lo, i = _class_char(pattern, i)
        if i < len(pattern) and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if hi < lo:
                raise _bad_glob(pattern, f"bad range {lo}-{hi}")
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")
        else:
            items.append(re.escape(lo))


def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile an archive entry glob.

    ``*`` matches any run of characters except ``/`` and ``?`` one such
    character, so ``*.log`` does not reach into sub-directories. ``[...]``
    takes ranges and ``^`` for negation; ``\\`` escapes the next character.
    Malformed patterns raise SourceError.
    """
    if not pattern:
        raise _bad_glob(pattern, "empty")
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        c = pattern[i]
        i += 1
        if c == "*":
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "[":
            cls, i = _translate_class(pattern, i)
            parts.append(cls)
        elif c == "\\":
            if i >= len(pattern):
                raise _bad_glob(pattern, "trailing backslash")
            parts.append(re.escape(pattern[i]))
            i += 1
        else:
            parts.append(re.escape(c))
    return re.compile("".join(parts))


def iter_lines(stream: TextIO, name: str = "<stream>") -> Iterator[str]:
    """Yield lines from ``stream`` with trailing newlines removed.

    Read failures (truncated gzip, I/O errors) become SourceError.
    """
    try:
        for line in stream:
            yield line.rstrip("\r\n")
    except (OSError, EOFError, zipfile.BadZipFile, zlib.error) as e:
        msg = f"cannot read {name}: {e}"
        raise SourceError(msg) from e


def open_stdin() -> TextIO:
    """Standard input as text, split the same way as files."""
    if isinstance(sys.stdin, io.TextIOWrapper):
        sys.stdin.reconfigure(encoding=_ENCODING, errors=_ERRORS, newline=_NEWLINE)
    return sys.stdin


@contextmanager
def open_file(path: str | Path) -> Iterator[TextIO]:
    """Open a plain text log file."""
    p = _check_path(path)
    try:
        f = p.open(encoding=_ENCODING, errors=_ERRORS, newline=_NEWLINE)
    except OSError as e:
        msg = f"cannot open {p}: {e}"
        raise SourceError(msg) from e
    with f:
        yield f


@contextmanager
def open_gzip(path: str | Path) -> Iterator[TextIO]:
    """Open a gzip-compressed log file as text."""
    p = _check_path(path)
    try:
        f = gzip.open(p, "rt", encoding=_ENCODING, errors=_ERRORS, newline=_NEWLINE)
    except OSError as e:
        msg = f"cannot open gzip file {p}: {e}"
        raise SourceError(msg) from e
    try:
        # gzip.open is lazy; peek so a non-gzip file fails here
        f.buffer.peek(1)  # type: ignore[attr-defined]
    except (OSError, EOFError) as e:
        f.close()
        msg = f"cannot open gzip file {p}: {e}"
        raise SourceError(msg) from e
    with f:
        yield f


def iter_zip_entries(path: str | Path, glob: str) -> Iterator[tuple[str, Iterator[str]]]:
    """Yield ``(entry_name, lines)`` for each archive entry matching ``glob``.

    Entries come in archive order; directories are skipped. Each entry's
    lines must be consumed before advancing to the next entry.
    """
    p = _check_path(path)
    matcher = compile_glob(glob)
    try:
        archive = zipfile.ZipFile(p)
    except (OSError, zipfile.BadZipFile) as e:
        msg = f"cannot open zip file {p}: {e}"
        raise SourceError(msg) from e
    with archive:
        for info in archive.infolist():
            if info.is_dir() or matcher.fullmatch(info.filename) is None:
                continue
            logger.debug("reading zip entry %s", info.filename)
            try:
                raw = archive.open(info)
            except (OSError, zipfile.BadZipFile, RuntimeError) as e:
                msg = f"cannot open zip entry {info.filename}: {e}"
                raise SourceError(msg) from e
            with io.TextIOWrapper(raw, encoding=_ENCODING, errors=_ERRORS, newline=_NEWLINE) as text:
                yield info.filename, iter_lines(text, info.filename)
