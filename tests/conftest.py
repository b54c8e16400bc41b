"""Shared test fixtures."""

from __future__ import annotations

import gzip
import zipfile
from typing import TYPE_CHECKING

import pytest

from logcarve.decoders.regex import RegexDecoder

if TYPE_CHECKING:
    from pathlib import Path

REQUEST_PATTERN = r"^(?P<method>[A-Z]+) (?P<uri>\S+) (?P<protocol>HTTP/[0-9.]+) (?P<status>\d{3}) (?P<size>\d+|-)$"

SAMPLE_LINES = [
    "GET /index.html HTTP/1.1 200 512",
    "POST /login HTTP/1.1 401 -",
    "this line matches nothing",
    "GET /api/users HTTP/2.0 200 2048",
    "DELETE /api/users/7 HTTP/1.1 500 13",
]

APACHE_COMBINED_LINE = (
    '123.45.67.89 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" 200 2326 '
    '"http://www.example.com/start.html" "Mozilla/4.08 [en] (Win98; I ;Nav)"'
)
APACHE_COMMON_LINE = '123.45.67.89 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" 200 2326'

S3_LINE = (
    "01b23c45d67890a12b345c6789d01a23b45c67d89012a34b5678c90d1234e56f awsrandombucket77 "
    "[28/Feb/2019:14:12:59 +0000] 192.0.2.213 "
    "01b23c45d67890a12b345c6789d01a23b45c67d89012a34b5678c90d1234e56f 3E57427F3EXAMPLE "
    'REST.GET.VERSIONING - "GET /awsrandombucket77?versioning HTTP/1.1" 200 - 113 - 7 - "-" "S3Console/0.4" -'
)

LTSV_LINES = [
    "host:127.0.0.1\tmethod:GET\tstatus:200\tsize:512",
    "host:10.0.0.2\tmethod:POST\tstatus:503\tsize:",
    "not an ltsv line",
]


@pytest.fixture
def sample_log_file(tmp_path: Path) -> Path:
    """Create a temporary log file with sample content."""
    log_file = tmp_path / "access.log"
    log_file.write_text("\n".join(SAMPLE_LINES) + "\n")
    return log_file


@pytest.fixture
def sample_gzip_file(tmp_path: Path) -> Path:
    """Create a gzip-compressed copy of the sample log."""
    gz_file = tmp_path / "access.log.gz"
    with gzip.open(gz_file, "wt") as f:
        f.write("\n".join(SAMPLE_LINES) + "\n")
    return gz_file


@pytest.fixture
def sample_zip_file(tmp_path: Path) -> Path:
    """Create a zip archive with two log entries, a text file and a directory."""
    zip_file = tmp_path / "logs.zip"
    with zipfile.ZipFile(zip_file, "w") as zf:
        zf.writestr("logs/", "")
        zf.writestr("logs/a.log", "\n".join(SAMPLE_LINES[:3]) + "\n")
        zf.writestr("notes.txt", "GET /ignored HTTP/1.1 200 1\n")
        zf.writestr("logs/b.log", "\n".join(SAMPLE_LINES[3:]) + "\n")
    return zip_file


@pytest.fixture
def apache_combined_line() -> str:
    return APACHE_COMBINED_LINE


@pytest.fixture
def apache_common_line() -> str:
    return APACHE_COMMON_LINE


@pytest.fixture
def s3_line() -> str:
    return S3_LINE


@pytest.fixture
def request_decoder() -> RegexDecoder:
    """Decoder for the ``METHOD URI PROTOCOL STATUS SIZE`` sample lines."""
    return RegexDecoder([REQUEST_PATTERN])
