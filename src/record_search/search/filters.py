"""
Record Filters

Non-relevance predicates applied to candidate records before scoring.

Query string syntax:
- ``status=published``: equality on a declared filter field
- ``views[gte]=100``: operator filter, allowed per field via ``filter_config``
- ``status[in]=draft,review`` / ``views[between]=10,100``: comma-separated lists
- ``deleted_at[null]=true``: null check

Equality-style operators compare string forms (booleans as ``true``/``false``,
missing or null values as ``null``). Range operators compare numbers; date and
datetime values compare by ISO format.
"""

import math
import operator as op
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from record_search.search.scoring import stringify


class FilterOperator(str, Enum):
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    NIN = "nin"
    LIKE = "like"
    ILIKE = "ilike"
    NULL = "null"
    BETWEEN = "between"


@dataclass(frozen=True)
class FilterCondition:
    """One parsed filter. ``value`` is a list for in/nin/between, a bool for null."""

    field: str
    operator: FilterOperator
    value: Any


AllowedFilters = dict[str, frozenset[FilterOperator]]

_BRACKET_RE = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_]*)\[([a-z]+)\]$")
_LIST_OPERATORS = {FilterOperator.IN, FilterOperator.NIN, FilterOperator.BETWEEN}
_RANGE_OPERATORS = {
    FilterOperator.GT: op.gt,
    FilterOperator.GTE: op.ge,
    FilterOperator.LT: op.lt,
    FilterOperator.LTE: op.le,
}


def allowed_filters(
    filter_fields: Iterable[str],
    filter_config: Mapping[str, Iterable[str]] | None = None,
) -> AllowedFilters:
    """
    Operators accepted per field.

    Plain filter fields accept equality only; ``filter_config`` entries replace
    that with their own operator list.

    Raises:
        ValueError: unknown operator name in ``filter_config``
    """
    allowed: AllowedFilters = {name: frozenset({FilterOperator.EQ}) for name in filter_fields}
    for name, operators in (filter_config or {}).items():
        allowed[name] = frozenset(FilterOperator(o) for o in operators)
    return allowed


def parse_filter_value(operator: FilterOperator, raw: str) -> Any:
    if operator in _LIST_OPERATORS:
        return [v.strip() for v in raw.split(",")]
    if operator == FilterOperator.NULL:
        return raw.lower() == "true"
    return raw


def parse_filter_params(
    params: Mapping[str, str], allowed: AllowedFilters
) -> list[FilterCondition]:
    """Filter conditions from query parameters; undeclared fields/operators are ignored."""
    conditions = []
    for key, raw in params.items():
        if raw is None:
            continue

        match = _BRACKET_RE.match(key)
        if match:
            name, op_name = match.groups()
            try:
                operator = FilterOperator(op_name)
            except ValueError:
                continue
            if operator in allowed.get(name, ()):
                conditions.append(
                    FilterCondition(name, operator, parse_filter_value(operator, raw))
                )
        elif key in allowed:
            conditions.append(FilterCondition(key, FilterOperator.EQ, raw))
    return conditions


def filter_string(value: Any) -> str:
    """String form of a record value for equality-style comparison."""
    return "null" if value is None else stringify(value)


def _number(value: Any) -> float:
    if value is None:
        return math.nan
    if isinstance(value, (bool, int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return math.nan


def _compare(value: Any, bound: str, compare) -> bool:
    if isinstance(value, (datetime, date)):
        return compare(value.isoformat(), bound)
    left, right = _number(value), _number(bound)
    if math.isnan(left) or math.isnan(right):
        return False
    return compare(left, right)


def matches_condition(record: Mapping[str, Any], condition: FilterCondition) -> bool:
    value = record.get(condition.field)
    operator = condition.operator
    expected = condition.value

    if operator == FilterOperator.EQ:
        return filter_string(value) == expected
    if operator == FilterOperator.NE:
        return filter_string(value) != expected
    if operator in _RANGE_OPERATORS:
        return _compare(value, expected, _RANGE_OPERATORS[operator])
    if operator == FilterOperator.IN:
        return filter_string(value) in expected
    if operator == FilterOperator.NIN:
        return filter_string(value) not in expected
    if operator == FilterOperator.LIKE:
        return expected.replace("%", "") in filter_string(value)
    if operator == FilterOperator.ILIKE:
        return expected.replace("%", "").lower() in filter_string(value).lower()
    if operator == FilterOperator.NULL:
        return (value is None) == expected
    if operator == FilterOperator.BETWEEN:
        if len(expected) != 2:
            return False
        low, high = expected
        return _compare(value, low, op.ge) and _compare(value, high, op.le)
    return True


def apply_filters(
    records: Iterable[Mapping[str, Any]], conditions: Iterable[FilterCondition]
) -> list:
    """Records satisfying every condition, in input order."""
    conditions = list(conditions)
    return [r for r in records if all(matches_condition(r, c) for c in conditions)]
