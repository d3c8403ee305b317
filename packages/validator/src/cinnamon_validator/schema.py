"""Schema model and structural classification.

A schema is plain data, one of three shapes:

- **Field**: a mapping with a string ``type`` tag plus constraints, e.g.
  ``{"type": "string", "required": True, "maxLength": 32}``
- **Object**: a mapping of key to nested schema, e.g.
  ``{"user": {"name": {"type": "string"}}}``
- **Array**: an empty list (only an empty array is valid) or a list holding
  exactly one schema that every element must satisfy, e.g.
  ``[{"type": "number", "min": 0}]``

``compile_schema`` classifies the raw data once and produces an immutable
tree of ``ObjectSchema``, ``ArraySchema`` and ``FieldSchema`` nodes tagged
with their ``SchemaKind``, so validation never re-inspects shapes. The
caller's schema data is copied and never modified.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Union

from .data import UNDEFINED, is_array
from .exceptions import SchemaError

logger = logging.getLogger(__name__)

#: Default limit on schema nesting depth.
DEFAULT_MAX_DEPTH = 64


class SchemaKind(Enum):
    """Shape of a compiled schema node."""

    OBJECT = "object"
    ARRAY = "array"
    FIELD = "field"


class FieldType:
    """Known values of a field's ``type`` tag."""

    ANY = "any"
    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    ONE_OF = "OneOf"


class Required:
    """Valid values of a field's ``required`` attribute."""

    NO = False
    YES = True
    EXPLICIT = "explicit"


def is_field_schema(value: Any) -> bool:
    """Check whether a value carries a string ``type`` tag."""
    return isinstance(value, Mapping) and isinstance(value.get("type"), str)


def is_array_schema(value: Any) -> bool:
    """Check whether a value is an array schema (array-shaped)."""
    return is_array(value)


def is_object_schema(value: Any, _ancestors: frozenset[int] = frozenset()) -> bool:
    """Check whether a value is an object schema.

    A value is an object schema when it is a mapping whose every value is a
    field (has a string ``type``) or is itself an object or array schema.
    An empty mapping is an object schema with no constraints.

    Raises:
        SchemaError: If the mapping contains itself
    """
    if not isinstance(value, Mapping):
        return False
    if id(value) in _ancestors:
        raise SchemaError("Schema contains a cycle and cannot be compiled")
    ancestors = _ancestors | {id(value)}

    for entry in value.values():
        if not (
            is_field_schema(entry)
            or is_array_schema(entry)
            or is_object_schema(entry, ancestors)
        ):
            return False

    return True


def classify(value: Any) -> SchemaKind:
    """Determine the shape of a raw schema value."""
    if is_array_schema(value):
        return SchemaKind.ARRAY
    if is_object_schema(value):
        return SchemaKind.OBJECT
    return SchemaKind.FIELD


@dataclass(frozen=True)
class ObjectSchema:
    """A mapping of key to nested schema, in the schema's own key order."""

    fields: tuple[tuple[str, SchemaNode], ...]

    kind = SchemaKind.OBJECT


@dataclass(frozen=True)
class ArraySchema:
    """An array schema; ``element`` is None for the empty-array schema."""

    element: SchemaNode | None

    kind = SchemaKind.ARRAY

    @property
    def is_empty(self) -> bool:
        return self.element is None


@dataclass(frozen=True)
class FieldSchema:
    """A leaf constraint set.

    ``attributes`` holds the field's raw attributes (read-only); the
    executor interprets them at validation time. ``possible_schemas`` holds
    the compiled alternatives of a ``OneOf`` field.
    """

    attributes: Mapping[str, Any]
    possible_schemas: tuple[SchemaNode, ...] = ()

    kind = SchemaKind.FIELD

    def get(self, name: str, default: Any = UNDEFINED) -> Any:
        return self.attributes.get(name, default)

    def has(self, name: str) -> bool:
        """Check whether an attribute is set to something other than None."""
        return self.attributes.get(name) is not None

    @property
    def type(self) -> Any:
        return self.attributes.get("type")

    @property
    def field_name(self) -> str | None:
        return self.attributes.get("fieldName")

    @property
    def invalid_message(self) -> Any:
        return self.attributes.get("invalidMessage")


SchemaNode = Union[ObjectSchema, ArraySchema, FieldSchema]


def compile_schema(schema: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> SchemaNode:
    """Classify and compile a raw schema into an immutable node tree.

    Args:
        schema: Raw schema data
        max_depth: Maximum nesting depth allowed

    Returns:
        The compiled root node

    Raises:
        SchemaError: If the schema is cyclic, nested deeper than
            ``max_depth``, or an array schema holds more than one element
    """
    node = _compile(schema, depth=0, max_depth=max_depth, ancestors=frozenset())
    logger.debug(f"Compiled {node.kind.value} schema")
    return node


def _compile(
    schema: Any,
    depth: int,
    max_depth: int,
    ancestors: frozenset[int],
) -> SchemaNode:
    if depth > max_depth:
        raise SchemaError(
            f"Schema is nested deeper than the maximum depth of {max_depth}",
            context={"max_depth": max_depth},
        )

    if isinstance(schema, (Mapping, list, tuple)):
        if id(schema) in ancestors:
            raise SchemaError("Schema contains a cycle and cannot be compiled")
        ancestors = ancestors | {id(schema)}

    kind = classify(schema)

    if kind is SchemaKind.ARRAY:
        if len(schema) > 1:
            raise SchemaError(
                "An array schema may hold at most one element schema",
                context={"length": len(schema)},
            )
        if not schema:
            return ArraySchema(None)
        return ArraySchema(_compile(schema[0], depth + 1, max_depth, ancestors))

    if kind is SchemaKind.OBJECT:
        return ObjectSchema(tuple(
            (str(key), _compile(value, depth + 1, max_depth, ancestors))
            for key, value in schema.items()
        ))

    attributes = dict(schema) if isinstance(schema, Mapping) else {}
    possible_schemas: tuple[SchemaNode, ...] = ()
    if attributes.get("type") == FieldType.ONE_OF:
        raw_possible = attributes.get("possibleSchemas") or ()
        if not is_array(raw_possible):
            raise SchemaError(
                "A OneOf field's possibleSchemas must be a list of schemas",
                context={"possibleSchemas": raw_possible},
            )
        possible_schemas = tuple(
            _compile(possible, depth + 1, max_depth, ancestors) for possible in raw_possible
        )

    return FieldSchema(MappingProxyType(attributes), possible_schemas)
