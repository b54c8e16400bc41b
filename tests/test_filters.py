"""Tests for the filter expression engine."""

from __future__ import annotations

import pytest

from logcarve.errors import ConfigurationError, FilterSyntaxError
from logcarve.filters import Operator, check_line, compile_filter, compile_filters


class TestCompileFilter:
    def test_numeric_comparison(self) -> None:
        f = compile_filter("status >= 500")
        assert f.label == "status"
        assert f.operator == Operator.GE
        assert f.number == 500.0

    def test_operand_keeps_inner_spaces(self) -> None:
        f = compile_filter("user_agent == Mozilla 5.0 (X11)")
        assert f.operand == "Mozilla 5.0 (X11)"

    def test_case_insensitive_flag(self) -> None:
        assert compile_filter("method ==* get").case_insensitive is True
        assert compile_filter("method == get").case_insensitive is False

    def test_regex_is_compiled_once(self) -> None:
        f = compile_filter("uri =~ ^/api/")
        assert f.regex is not None
        assert f.regex.pattern == "^/api/"

    @pytest.mark.parametrize(
        "expression",
        [
            "status = active",
            "status ?? active",
            "status >=",
            "status",
            "",
            "score > not_a_number",
            "uri =~ [",
        ],
    )
    def test_invalid_expressions(self, expression: str) -> None:
        with pytest.raises(FilterSyntaxError):
            compile_filter(expression)

    def test_error_carries_expression(self) -> None:
        with pytest.raises(FilterSyntaxError) as exc_info:
            compile_filter("status = 200")
        assert exc_info.value.expression == "status = 200"
        assert "unknown operator" in exc_info.value.reason

    def test_error_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_filter("size > big")

    def test_compile_filters_keeps_order(self) -> None:
        filters = compile_filters(["a == 1", "b != 2", "c =~ x"])
        assert [f.label for f in filters] == ["a", "b", "c"]

    def test_compile_filters_fails_on_first_bad_expression(self) -> None:
        with pytest.raises(FilterSyntaxError, match="nope"):
            compile_filters(["a == 1", "b nope 2"])


class TestNumericOperators:
    @pytest.mark.parametrize(
        ("expression", "value", "expected"),
        [
            ("size > 100", "150", True),
            ("size > 100", "100", False),
            ("size >= 100", "100", True),
            ("size < 100", "99.5", True),
            ("size <= 100", "100.0", True),
            ("size <= 100", "101", False),
            ("time > 0.5", "0.51", True),
        ],
    )
    def test_comparisons(self, expression: str, value: str, expected: bool) -> None:
        assert compile_filter(expression).evaluate(value) is expected

    @pytest.mark.parametrize("value", ["-", "", "abc", "1_000", " 5", "5 ", "\u0665", "inf", "nan"])
    def test_non_numeric_value_fails_filter(self, value: str) -> None:
        assert compile_filter("size > 0").evaluate(value) is False

    @pytest.mark.parametrize("operand", ["1_000", "inf", "nan", "\u0665"])
    def test_operand_must_be_a_plain_decimal(self, operand: str) -> None:
        with pytest.raises(FilterSyntaxError, match="not a number"):
            compile_filter(f"size > {operand}")

    def test_exponent_and_sign(self) -> None:
        f = compile_filter("size >= -1e3")
        assert f.number == -1000.0
        assert f.evaluate("+.5") is True


class TestEqualityOperators:
    def test_string_equality(self) -> None:
        f = compile_filter("method == GET")
        assert f.evaluate("GET") is True
        assert f.evaluate("get") is False

    def test_numeric_equality_when_both_sides_are_numbers(self) -> None:
        f = compile_filter("status == 200")
        assert f.evaluate("200") is True
        assert f.evaluate("200.0") is True
        assert f.evaluate("201") is False

    def test_nan_and_underscores_compare_as_strings(self) -> None:
        assert compile_filter("ratio == nan").evaluate("nan") is True
        assert compile_filter("size == 1_000").evaluate("1000") is False
        assert compile_filter("size == 1_000").evaluate("1_000") is True

    def test_not_equal(self) -> None:
        f = compile_filter("method != GET")
        assert f.evaluate("POST") is True
        assert f.evaluate("GET") is False

    def test_case_insensitive_equality(self) -> None:
        assert compile_filter("method ==* get").evaluate("GET") is True
        assert compile_filter("method !=* get").evaluate("Get") is False
        assert compile_filter("method !=* get").evaluate("POST") is True


class TestRegexOperators:
    def test_match(self) -> None:
        f = compile_filter("uri =~ ^/api/")
        assert f.evaluate("/api/users") is True
        assert f.evaluate("/v1/api/users") is False

    def test_match_is_a_search(self) -> None:
        assert compile_filter("uri =~ users").evaluate("/api/users/7") is True

    def test_not_match(self) -> None:
        f = compile_filter("uri !~ \\.png$")
        assert f.evaluate("/logo.png") is False
        assert f.evaluate("/index.html") is True

    def test_case_insensitive_match(self) -> None:
        assert compile_filter("ua =~* curl").evaluate("CURL/8.0") is True
        assert compile_filter("ua !~* curl").evaluate("Curl/8.0") is False


class TestCheckLine:
    def setup_method(self) -> None:
        self.filters = compile_filters(["size >= 100", "method == GET"])

    def test_all_filters_pass(self) -> None:
        assert check_line(self.filters, ["method", "size"], ["GET", "150"]) is True

    def test_one_filter_fails(self) -> None:
        assert check_line(self.filters, ["method", "size"], ["GET", "50"]) is False

    def test_missing_label_fails(self) -> None:
        assert check_line(self.filters, ["method"], ["GET"]) is False

    def test_no_filters(self) -> None:
        assert check_line([], ["method"], ["GET"]) is True
