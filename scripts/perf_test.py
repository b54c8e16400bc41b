"""Performance benchmark for logcarve core engines.

Usage:
    uv run python scripts/perf_test.py
"""

# ruff: noqa: PLR2004, T201, E501
from __future__ import annotations

import io
import time
from typing import Any

from logcarve.decoders import DecoderName, get_decoder
from logcarve.filters import check_line, compile_filters
from logcarve.formatters import tsv_line_handler
from logcarve.models import Option
from logcarve.parser import LogParser

# --- Log line templates ---

APACHE_TEMPLATES = [
    '10.0.{a}.{b} - - [17/May/2024:10:05:{sec:02d} +0000] "GET /index.html HTTP/1.1" 200 {n} "http://example.com/" "Mozilla/5.0 (X11; Linux x86_64)"',
    '10.0.{a}.{b} - frank [17/May/2024:10:05:{sec:02d} +0000] "POST /api/orders HTTP/1.1" 201 {n}',
    '10.0.{a}.{b} - - [17/May/2024:10:05:{sec:02d} +0000] "GET /api/users/{n} HTTP/2.0" 503 0 "-" "curl/8.0"',
]

JUNK_TEMPLATES = [
    "2024-05-17T10:05:{sec:02d}Z health check passed (attempt {n})",
]

decoder = get_decoder(DecoderName.APACHE)


def generate_lines(count: int) -> list[str]:
    """Generate a mix of Apache access lines and unmatched noise."""
    templates = APACHE_TEMPLATES * 3 + JUNK_TEMPLATES
    result: list[str] = []
    for i in range(count):
        tmpl = templates[i % len(templates)]
        raw = tmpl.format(a=i % 256, b=(i // 256) % 256, sec=i % 60, n=i)
        result.append(raw)
    return result


def bench_decode(raw_lines: list[str]) -> float:
    """Benchmark the Apache preset fallback chain."""
    start = time.perf_counter()
    for raw in raw_lines:
        decoder.decode(raw)
    return time.perf_counter() - start


def bench_filter(raw_lines: list[str]) -> float:
    """Benchmark check_line with 3 filters on pre-decoded lines."""
    decoded = [d for d in (decoder.decode(raw) for raw in raw_lines) if d is not None]
    filters = compile_filters(["status >= 500", "method == GET", "request_uri =~ ^/api/"])
    start = time.perf_counter()
    for d in decoded:
        check_line(filters, d.labels, d.values)
    return time.perf_counter() - start


def bench_parse(raw_lines: list[str], option: Option) -> float:
    """Benchmark the whole pipeline writing to memory."""
    text = "\n".join(raw_lines)
    parser = LogParser(decoder, option, writer=io.StringIO())
    start = time.perf_counter()
    parser.parse_string(text)
    return time.perf_counter() - start


def format_rate(count: int, elapsed: float) -> str:
    """Format lines/sec."""
    if elapsed <= 0:
        return "inf"
    rate = count / elapsed
    if rate >= 1_000_000:
        return f"{rate / 1_000_000:.1f}M/s"
    if rate >= 1_000:
        return f"{rate / 1_000:.1f}K/s"
    return f"{rate:.0f}/s"


def run_benchmark(count: int) -> dict[str, Any]:
    """Run all benchmarks for a given line count."""
    raw_lines = generate_lines(count)
    return {
        "count": count,
        "decode": bench_decode(raw_lines),
        "filter": bench_filter(raw_lines),
        "json": bench_parse(raw_lines, Option(line_number=True)),
        "tsv": bench_parse(raw_lines, Option(labels=["remote_host", "status"], line_handler=tsv_line_handler)),
    }


def main() -> None:
    sizes = [10_000, 100_000, 500_000]

    print(f"{'Lines':>10}  {'Decode':>10}  {'Filter':>10}  {'JSON':>10}  {'TSV':>10}")
    print("-" * 58)

    for size in sizes:
        result = run_benchmark(size)
        count = result["count"]
        print(
            f"{count:>10,}  "
            f"{result['decode']:>7.3f}s {format_rate(count, result['decode']):>5}  "
            f"{result['filter']:>7.3f}s {format_rate(count, result['filter']):>5}  "
            f"{result['json']:>7.3f}s {format_rate(count, result['json']):>5}  "
            f"{result['tsv']:>7.3f}s {format_rate(count, result['tsv']):>5}"
        )

    print()
    print("Done.")


if __name__ == "__main__":
    main()
