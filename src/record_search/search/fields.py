"""
Searchable Field Configuration

Resolves the different ways an endpoint can declare its searchable fields
(explicit per-field map, flat field list with weight overrides, or a
schema-derived default) into one canonical field -> FieldConfig map.
"""

import types
import typing
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel


class FieldKind(str, Enum):
    """How a field's value is matched against query tokens."""

    TEXT = "text"  # substring matching
    KEYWORD = "keyword"  # whole-value equality
    ARRAY = "array"  # element-wise substring matching


@dataclass(frozen=True)
class FieldConfig:
    """Relevance weight and match kind for one searchable field."""

    weight: float = 1.0
    kind: FieldKind = FieldKind.TEXT

    def __post_init__(self):
        if self.weight < 0:
            raise ValueError(f"Field weight must not be negative, got {self.weight}")


FieldMap = dict[str, FieldConfig]


def _coerce_field_config(value: FieldConfig | Mapping[str, Any] | None) -> FieldConfig:
    if isinstance(value, FieldConfig):
        return value
    if not value:
        return FieldConfig()
    weight = value.get("weight")
    kind = value.get("type", value.get("kind"))
    return FieldConfig(
        weight=1.0 if weight is None else float(weight),
        kind=FieldKind(kind) if kind else FieldKind.TEXT,
    )


def build_search_config(
    fields: Iterable[str], weights: Mapping[str, float] | None = None
) -> FieldMap:
    """Build a text-kind field map from a flat list of names."""
    weights = weights or {}
    return {
        name: FieldConfig(weight=float(weights.get(name, 1.0)), kind=FieldKind.TEXT)
        for name in fields
    }


def _is_string_annotation(annotation: Any) -> bool:
    if annotation is str:
        return True
    # Optional[str] / str | None
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        return len(args) == 1 and args[0] is str
    return False


def schema_string_fields(schema: type[BaseModel]) -> FieldMap:
    """Every str-typed field declared on a pydantic model, weight 1.0."""
    return {
        name: FieldConfig()
        for name, info in schema.model_fields.items()
        if _is_string_annotation(info.annotation)
    }


def resolve_search_fields(
    searchable_fields: Mapping[str, FieldConfig | Mapping[str, Any]] | None = None,
    search_fields: Iterable[str] | None = None,
    field_weights: Mapping[str, float] | None = None,
    schema: type[BaseModel] | None = None,
) -> FieldMap:
    """
    Resolve an endpoint's field declarations into one canonical map.

    Precedence:
    1. ``searchable_fields`` (explicit map) wins outright when non-empty.
    2. ``search_fields`` (flat list) with optional ``field_weights``.
    3. String fields of ``schema``.

    Never raises for empty input; an empty map simply matches nothing.
    """
    if searchable_fields:
        return {
            name: _coerce_field_config(config)
            for name, config in searchable_fields.items()
        }

    search_fields = list(search_fields or [])
    if search_fields:
        return build_search_config(search_fields, field_weights)

    if schema is not None:
        return schema_string_fields(schema)

    return {}


def parse_search_fields(param: str | None, configured: Mapping[str, Any]) -> list[str]:
    """
    Parse a comma-separated ``fields`` parameter.

    Unknown names are dropped and duplicates collapsed. An omitted or empty
    parameter means all configured fields; a parameter naming only unknown
    fields yields an empty list (search nothing).
    """
    if param is None or not param.strip():
        return list(configured)

    fields: list[str] = []
    for name in param.split(","):
        name = name.strip()
        if name and name in configured and name not in fields:
            fields.append(name)
    return fields
