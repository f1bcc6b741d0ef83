"""SchemaInferencer: structural schema of a Value.

Schemas mirror Value shapes:

- NullSchema       for Null (always ``nullable``)
- ArraySchema      items = one Schema, a OneOf of distinct shapes, or None
                   for an empty array; ``length`` always recorded
- ObjectSchema     properties in key order; ``required`` = keys whose value
                   is not Null (a null-valued key is *not* required)
- PrimitiveSchema  ``string`` / ``number`` / ``boolean`` plus an optional
                   format hint (email > uri > date-time)

Array element schemas are deduplicated by their canonical serialisation,
keeping first-seen order.  Exactly one distinct shape is stored bare; only
two or more are wrapped in ``OneOf``.  Schemas are structural only: no
min/max or length constraints are recorded.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from response_lens.analysis.patterns import format_hint
from response_lens.config import ViewerConfig
from response_lens.errors import SerializationFailure
from response_lens.tree.value import CycleGuard, Value, ValueKind

__all__ = [
    "ArraySchema",
    "NullSchema",
    "ObjectSchema",
    "OneOf",
    "PrimitiveSchema",
    "Schema",
    "SchemaInferencer",
    "canonical",
]


@dataclass(frozen=True, slots=True)
class NullSchema:
    nullable: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"type": "null", "nullable": self.nullable}


@dataclass(frozen=True, slots=True)
class PrimitiveSchema:
    type: str
    format: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.format is not None:
            out["format"] = self.format
        return out


@dataclass(frozen=True, slots=True)
class OneOf:
    """Union of two or more structurally distinct item schemas."""

    variants: tuple[Schema, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"oneOf": [variant.to_dict() for variant in self.variants]}


@dataclass(frozen=True, slots=True)
class ArraySchema:
    items: Schema | OneOf | None
    length: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "array",
            "items": self.items.to_dict() if self.items is not None else {},
            "length": self.length,
        }


@dataclass(frozen=True, slots=True)
class ObjectSchema:
    properties: dict[str, Schema] = field(default_factory=dict)
    required: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {k: v.to_dict() for k, v in self.properties.items()},
            "required": list(self.required),
        }


Schema = NullSchema | ArraySchema | ObjectSchema | PrimitiveSchema


def _unordered_required(node: Any) -> Any:
    if isinstance(node, dict):
        return {
            key: sorted(child)
            if key == "required" and isinstance(child, list)
            else _unordered_required(child)
            for key, child in node.items()
        }
    if isinstance(node, list):
        return [_unordered_required(child) for child in node]
    return node


def canonical(schema: Schema | OneOf) -> str:
    """Canonical serialisation used as the structural-equality key.

    Keys and ``required`` lists are sorted, so two objects with the same
    properties in a different order count as one shape.
    """
    return json.dumps(
        _unordered_required(schema.to_dict()), sort_keys=True, separators=(",", ":")
    )


class SchemaInferencer:
    """Infers a ``Schema`` from a Value.

    Args:
        config: Only ``enable_type_detection`` is consulted; when False no
            format hints are recorded.

    Example::

        inferencer = SchemaInferencer()
        schema = inferencer.infer(ingest('[{"a": 1}, {"a": 2}]'))
        # ArraySchema(items=ObjectSchema(...), length=2) -- no OneOf wrapper
    """

    def __init__(self, config: ViewerConfig | None = None) -> None:
        self._config = config if config is not None else ViewerConfig()

    def infer(self, value: Value) -> Schema:
        """Return the schema of ``value``.

        Raises:
            CyclicStructureError: If ``value`` refers back to an ancestor.
            SerializationFailure: If ``value`` nests too deeply to walk.
        """
        try:
            return self._infer(value, CycleGuard())
        except RecursionError as exc:
            msg = "value is nested too deeply to analyse"
            raise SerializationFailure(msg) from exc

    def _infer(self, node: Value, guard: CycleGuard) -> Schema:
        match node.kind:
            case ValueKind.NULL:
                return NullSchema()
            case ValueKind.ARRAY:
                with guard.enter(node):
                    return self._infer_array(node, guard)
            case ValueKind.OBJECT:
                with guard.enter(node):
                    return self._infer_object(node, guard)
            case ValueKind.STRING:
                if not self._config.enable_type_detection:
                    return PrimitiveSchema("string")
                return PrimitiveSchema("string", format_hint(node.data))
            case ValueKind.NUMBER:
                return PrimitiveSchema("number")
            case ValueKind.BOOLEAN:
                return PrimitiveSchema("boolean")

    def _infer_array(self, node: Value, guard: CycleGuard) -> ArraySchema:
        distinct: dict[str, Schema] = {}
        for item in node.data:
            schema = self._infer(item, guard)
            distinct.setdefault(canonical(schema), schema)

        shapes = list(distinct.values())
        items: Schema | OneOf | None
        if not shapes:
            items = None
        elif len(shapes) == 1:
            items = shapes[0]
        else:
            items = OneOf(tuple(shapes))
        return ArraySchema(items=items, length=len(node.data))

    def _infer_object(self, node: Value, guard: CycleGuard) -> ObjectSchema:
        properties = {
            key: self._infer(child, guard) for key, child in node.data.items()
        }
        required = tuple(
            key for key, child in node.data.items() if child.kind is not ValueKind.NULL
        )
        return ObjectSchema(properties=properties, required=required)
