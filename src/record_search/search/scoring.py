"""
Weighted Field Relevance Scoring

Scores one record against tokenized query terms across weighted fields.

score = Σ weight(f) * strength(f) / Σ weight(f)

The denominator includes every configured field present on the record,
matched or not, so a match on a low-weight field scores lower than the same
match on a high-weight field.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from record_search.search.fields import FieldConfig, FieldKind
from record_search.search.tokenizer import SearchMode, normalize


@dataclass
class FieldScore:
    """Score of one record, with the fields that contributed to it."""

    score: float = 0.0
    matched_fields: list[str] = field(default_factory=list)


def stringify(value: Any) -> str:
    """String form of a field value, as used for matching. Lists join with commas."""
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else stringify(v) for v in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def field_values(value: Any, kind: FieldKind) -> list[str]:
    """Normalized textual values of a field. Array fields yield one per element."""
    if value is None or isinstance(value, Mapping):
        return []
    if kind == FieldKind.ARRAY and isinstance(value, (list, tuple, set, frozenset)):
        return [normalize(stringify(v)) for v in value if v is not None]
    return [normalize(stringify(value))]


def value_matches(value: str, token: str, kind: FieldKind) -> bool:
    """Whether a normalized value matches one token under the field kind."""
    if kind == FieldKind.KEYWORD:
        return value == token
    return token in value


def match_strength(
    values: list[str], tokens: list[str], kind: FieldKind, mode: SearchMode
) -> float:
    """
    Per-field match strength in [0, 1].

    - any: fraction of distinct tokens found in any value
    - all: 1.0 when every token is found somewhere in the field, else 0
    - phrase: 1.0 when the phrase token is found, else 0
    """
    distinct = list(dict.fromkeys(tokens))
    if not values or not distinct:
        return 0.0

    found = sum(
        1 for token in distinct if any(value_matches(v, token, kind) for v in values)
    )

    if mode == SearchMode.ANY:
        return found / len(distinct)
    return 1.0 if found == len(distinct) else 0.0


def score_record(
    record: Mapping[str, Any],
    tokens: list[str],
    field_config: Mapping[str, FieldConfig],
    mode: SearchMode,
) -> FieldScore:
    """
    Score a record against query tokens.

    Fields absent from the record or set to None are skipped entirely.
    ``matched_fields`` follows the iteration order of ``field_config``.
    """
    result = FieldScore()
    if not tokens:
        return result

    weighted_sum = 0.0
    weight_total = 0.0

    for name, config in field_config.items():
        raw = record.get(name)
        if raw is None:
            continue

        strength = match_strength(field_values(raw, config.kind), tokens, config.kind, mode)
        weight_total += config.weight
        if strength > 0:
            result.matched_fields.append(name)
            weighted_sum += config.weight * strength

    if weight_total <= 0:
        return result

    result.score = min(1.0, max(0.0, weighted_sum / weight_total))
    return result
