"""Tests for output line formatters."""

from __future__ import annotations

import json

from logcarve.formatters import (
    OutputFormat,
    get_line_handler,
    json_line_handler,
    key_value_line_handler,
    ltsv_line_handler,
    pretty_json_line_handler,
    tsv_line_handler,
)

LABELS = ["method", "status"]
VALUES = ["GET", "200"]


class TestJsonHandler:
    def test_compact_object(self) -> None:
        assert json_line_handler(LABELS, VALUES, 1, False, True) == '{"method":"GET","status":"200"}'

    def test_line_number_comes_first(self) -> None:
        assert json_line_handler(LABELS, VALUES, 7, True, False) == '{"no":"7","method":"GET","status":"200"}'

    def test_values_are_escaped(self) -> None:
        out = json_line_handler(["msg"], ['say "hi"\tnow'], 1, False, True)
        assert json.loads(out) == {"msg": 'say "hi"\tnow'}

    def test_non_ascii_kept(self) -> None:
        assert json_line_handler(["city"], ["Zürich"], 1, False, True) == '{"city":"Zürich"}'

    def test_empty_projection(self) -> None:
        assert json_line_handler([], [], 1, False, True) == "{}"


class TestPrettyJsonHandler:
    def test_indented(self) -> None:
        out = pretty_json_line_handler(LABELS, VALUES, 1, False, True)
        assert out == '{\n  "method": "GET",\n  "status": "200"\n}'
        assert json.loads(out) == {"method": "GET", "status": "200"}

    def test_empty(self) -> None:
        assert pretty_json_line_handler([], [], 1, False, True) == "{}"


class TestKeyValueHandler:
    def test_pairs(self) -> None:
        assert key_value_line_handler(LABELS, VALUES, 1, False, True) == 'method="GET" status="200"'

    def test_line_number(self) -> None:
        assert key_value_line_handler(["a"], ["1"], 3, True, True) == 'no="3" a="1"'


class TestLTSVHandler:
    def test_pairs(self) -> None:
        assert ltsv_line_handler(LABELS, VALUES, 1, False, True) == "method:GET\tstatus:200"

    def test_empty_value_becomes_placeholder(self) -> None:
        assert ltsv_line_handler(["referer"], [""], 1, False, True) == "referer:-"


class TestTSVHandler:
    def test_header_on_first_line(self) -> None:
        assert tsv_line_handler(LABELS, VALUES, 1, False, True) == "method\tstatus\nGET\t200"

    def test_no_header_afterwards(self) -> None:
        assert tsv_line_handler(LABELS, VALUES, 2, False, False) == "GET\t200"

    def test_header_includes_line_number(self) -> None:
        assert tsv_line_handler(LABELS, VALUES, 1, True, True) == "no\tmethod\tstatus\n1\tGET\t200"


class TestRegistry:
    def test_every_format_has_a_handler(self) -> None:
        for fmt in OutputFormat:
            assert callable(get_line_handler(fmt))

    def test_lookup_by_value(self) -> None:
        assert get_line_handler(OutputFormat("tsv")) is tsv_line_handler
        assert get_line_handler(OutputFormat("kv")) is key_value_line_handler
