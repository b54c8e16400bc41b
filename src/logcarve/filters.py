"""Filter expression engine for decoded lines.

An expression reads ``<label> <operator> <operand>``; the operand is the rest
of the string and may contain spaces.

Operators:
    >  >=  <=  <        numeric comparison (operands parsed as float)
    ==  !=              equality; numeric when both sides parse as float
    ==*  !=*            case-insensitive string equality
    =~  !~              regex match / non-match
    =~*  !~*            case-insensitive regex match / non-match

Filters are AND-ed. A filter on a label the line does not have excludes
the line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from logcarve.errors import FilterSyntaxError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)


class Operator(StrEnum):
    """Comparison operators understood by the filter engine."""

    GT = ">"
    GE = ">="
    LE = "<="
    LT = "<"
    EQ = "=="
    NE = "!="
    EQ_FOLD = "==*"
    NE_FOLD = "!=*"
    MATCH = "=~"
    NOT_MATCH = "!~"
    MATCH_FOLD = "=~*"
    NOT_MATCH_FOLD = "!~*"


_ORDERING = frozenset({Operator.GT, Operator.GE, Operator.LE, Operator.LT})
_EQUALITY = frozenset({Operator.EQ, Operator.NE, Operator.EQ_FOLD, Operator.NE_FOLD})
_NEGATED = frozenset({Operator.NE, Operator.NE_FOLD, Operator.NOT_MATCH, Operator.NOT_MATCH_FOLD})
_FOLDED = frozenset({Operator.EQ_FOLD, Operator.NE_FOLD, Operator.MATCH_FOLD, Operator.NOT_MATCH_FOLD})

_EXPRESSION_PARTS = 3

# Plain ASCII decimals only: no "1_000", padding, "nan" or "inf"
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _to_float(value: str) -> float | None:
    if _NUMBER_RE.fullmatch(value) is None:
        return None
    return float(value)


@dataclass(frozen=True, slots=True)
class FilterExpression:
    """A compiled filter: label, operator and operand, ready to evaluate."""

    label: str
    operator: Operator
    operand: str
    case_insensitive: bool = False
    number: float | None = None
    regex: re.Pattern[str] | None = None

    def evaluate(self, value: str) -> bool:
        """Whether ``value`` satisfies this filter."""
        if self.operator in _ORDERING:
            return self._compare(value)
        if self.regex is not None:
            matched = self.regex.search(value) is not None
        else:
            matched = self._equals(value)
        return not matched if self.operator in _NEGATED else matched

    def _compare(self, value: str) -> bool:
        # Free-text logs carry "-" and friends in numeric columns
        number = _to_float(value)
        if number is None or self.number is None:
            return False
        match self.operator:
            case Operator.GT:
                return number > self.number
            case Operator.GE:
                return number >= self.number
            case Operator.LE:
                return number <= self.number
            case _:
                return number < self.number

    def _equals(self, value: str) -> bool:
        if self.case_insensitive:
            return value.casefold() == self.operand.casefold()
        if self.number is not None:
            number = _to_float(value)
            if number is not None:
                return number == self.number
        return value == self.operand


def compile_filter(expression: str) -> FilterExpression:
    """Compile one expression. Raises FilterSyntaxError on bad syntax."""
    parts = expression.split(maxsplit=2)
    if len(parts) != _EXPRESSION_PARTS:
        raise FilterSyntaxError(expression, "expected '<label> <operator> <operand>'")
    label, token, operand = parts
    try:
        operator = Operator(token)
    except ValueError:
        raise FilterSyntaxError(expression, f"unknown operator {token!r}") from None

    folded = operator in _FOLDED
    if operator in _ORDERING:
        number = _to_float(operand)
        if number is None:
            raise FilterSyntaxError(expression, f"operand {operand!r} is not a number")
        return FilterExpression(label, operator, operand, number=number)
    if operator in _EQUALITY:
        number = None if folded else _to_float(operand)
        return FilterExpression(label, operator, operand, case_insensitive=folded, number=number)
    try:
        regex = re.compile(operand, re.IGNORECASE if folded else 0)
    except re.error as e:
        raise FilterSyntaxError(expression, f"invalid regular expression: {e}") from e
    return FilterExpression(label, operator, operand, case_insensitive=folded, regex=regex)


def compile_filters(expressions: Iterable[str]) -> list[FilterExpression]:
    """Compile every expression up front, before any line is processed."""
    filters = [compile_filter(e) for e in expressions]
    if filters:
        logger.debug("compiled %d filter(s): %s", len(filters), ", ".join(f"{f.label} {f.operator}" for f in filters))
    return filters


def check_line(filters: Sequence[FilterExpression], labels: Sequence[str], values: Sequence[str]) -> bool:
    """Check if a decoded line passes every filter."""
    for f in filters:
        try:
            i = labels.index(f.label)
        except ValueError:
            return False
        if not f.evaluate(values[i]):
            return False
    return True
