"""Validation executor.

A ``Validator`` is built once from a schema and then validates any number of
candidate values against it::

    validator = create_validator({
        "username": {"type": "string", "required": True, "minLength": 2},
        "password": {"type": "string", "required": True, "minLength": 8},
        "confirmPassword": {"type": "string", "required": True, "$eq": "password"},
    })

    result, value = validator.validate(payload)
    if not result:
        return error_response(result.message)

Validation failures are returned as ``ValidationResult.fail(...)``; only a
malformed schema raises (``SchemaError``). The validator keeps no per-call
state, so a single instance may be shared between threads.
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping
from numbers import Integral, Real
from typing import Any

from .attributes import Literal, parse_attribute
from .config import ValidatorOptions
from .data import (
    UNDEFINED,
    get_key,
    is_absent,
    is_array,
    resolve_path,
    array_equals,
    strict_equals,
)
from .exceptions import SchemaError
from .format import (
    ROOT_SEGMENT,
    human_readable_name,
    ordinal,
    pluralize,
    render_message,
)
from .result import ValidationResult
from .schema import (
    ArraySchema,
    FieldSchema,
    FieldType,
    ObjectSchema,
    Required,
    SchemaKind,
    SchemaNode,
    compile_schema,
)

logger = logging.getLogger(__name__)

ROOT_PATH: tuple[str, ...] = (ROOT_SEGMENT,)

DEFAULT_INVALID_MESSAGE = "The ${fieldName} field was invalid."

# Marks a dynamic bound that resolved to something that is not a number.
_UNUSABLE_BOUND = object()


def _stringify(value: Any) -> str:
    """Render a constraint value for inclusion in a message."""
    if value is None or isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if is_array(value):
        return ",".join(_stringify(v) for v in value)
    return str(value)


def _to_json(value: Any) -> str:
    return json.dumps(value, default=str)


class Validator:
    """Validates values against a fixed schema.

    Once initialized the schema may not be changed; create a new Validator
    for a new schema.
    """

    def __init__(self, schema: Any, options: ValidatorOptions | Mapping | None = None):
        """Initialize the validator and compile its schema.

        Args:
            schema: The schema to validate with (field, object or array)
            options: Optional ValidatorOptions (or a dict of option values)

        Raises:
            SchemaError: If the schema is cyclic or nested too deeply
        """
        if options is None or isinstance(options, Mapping):
            options = ValidatorOptions.from_dict(options)
        self.schema = schema
        self.options: ValidatorOptions = options
        self._root: SchemaNode = compile_schema(schema, max_depth=options.max_depth)
        logger.debug(f"Created validator for {self._root.kind.value} schema")

    @property
    def kind(self) -> SchemaKind:
        """The shape of the top-level schema."""
        return self._root.kind

    @property
    def is_single_field_schema(self) -> bool:
        return self._root.kind is SchemaKind.FIELD

    def validate(self, value: Any = UNDEFINED) -> tuple[ValidationResult, Any]:
        """Validate a value against the schema.

        Args:
            value: The value to check; omit it to validate an absent value

        Returns:
            A ``(result, value)`` tuple where ``value`` is the very object that
            was passed in if validation passed, or None if it failed

        Raises:
            SchemaError: If the schema turns out to be malformed
        """
        # The root object is established by the first object schema reached.
        result = self._dispatch(self._root, value, UNDEFINED, ROOT_PATH)

        if not result.success:
            logger.debug(f"Validation failed: {result.message}")
        return result, (value if result.success else None)

    def is_valid(self, value: Any = UNDEFINED) -> bool:
        """Check whether a value passes validation."""
        return self.validate(value)[0].success

    def _dispatch(self, node: SchemaNode, value: Any, root: Any, path: tuple[str, ...]) -> ValidationResult:
        if isinstance(node, ObjectSchema):
            return self._validate_object(node, value, root, path)
        if isinstance(node, ArraySchema):
            return self._validate_array(node, value, root, path)
        return self._validate_field(node, value, root, path)

    @staticmethod
    def _missing(path: tuple[str, ...]) -> ValidationResult:
        """Failure for an object or array that is absent or of the wrong shape.

        Nested objects and arrays are always expected to be present, even
        when none of their fields are required, so ``{}`` fails a schema
        such as ``{"user": {"name": {"type": "string"}}}``. A container is
        not treated as optional just because all of its fields are.
        """
        if path == ROOT_PATH:
            return ValidationResult.fail("The submitted value is invalid.")
        return ValidationResult.fail(f"The '{human_readable_name(path)}' field is missing.")

    @staticmethod
    def _subject(path: tuple[str, ...]) -> str:
        if path == ROOT_PATH:
            return "submitted value"
        return f"{human_readable_name(path)} field"

    @staticmethod
    def _nested_root(root: Any, value: Any) -> Any:
        """Root object for a nested object validated without an enclosing root."""
        if root is UNDEFINED and isinstance(value, Mapping):
            return value
        return root

    # Objects

    def _validate_object(
        self, node: ObjectSchema, value: Any, root: Any, path: tuple[str, ...]
    ) -> ValidationResult:
        if not isinstance(value, Mapping):
            return self._missing(path)

        root = self._nested_root(root, value)

        # The first failing key, in the schema's own order, wins.
        for key, child in node.fields:
            result = self._dispatch(child, get_key(value, key), root, path + (key,))
            if not result.success:
                return result

        return ValidationResult.success()

    # Arrays

    def _coerce_array(self, value: Any) -> list | tuple | None:
        """Accept an array, or a string holding a JSON array unless strict."""
        if is_array(value):
            return value
        if isinstance(value, str) and not self.options.strict_arrays:
            try:
                parsed = json.loads(value)
            except (ValueError, RecursionError):
                return None
            return parsed if isinstance(parsed, list) else None
        return None

    def _validate_array(
        self, node: ArraySchema, value: Any, root: Any, path: tuple[str, ...]
    ) -> ValidationResult:
        items = self._coerce_array(value)
        if items is None:
            return self._missing(path)

        if not items:
            if node.is_empty:
                return ValidationResult.success()
            return ValidationResult.fail(f"The {self._subject(path)} must contain at least one entry.")
        if node.element is None:
            return ValidationResult.fail(f"The {self._subject(path)} must contain at least one entry.")

        element = node.element
        if isinstance(element, FieldSchema):
            for index, item in enumerate(items):
                result = self._validate_field(element, item, root, path)
                if not result.success:
                    return self._element_failure(element, item, index, path)
            return ValidationResult.success()

        for item in items:
            if not self._dispatch(element, item, self._nested_root(root, item), path).success:
                return ValidationResult.fail(f"The {self._subject(path)} contains invalid entries.")

        return ValidationResult.success()

    @staticmethod
    def _element_failure(
        element: FieldSchema, item: Any, index: int, path: tuple[str, ...]
    ) -> ValidationResult:
        position = ordinal(index + 1)
        if element.field_name:
            name = f"{position} {human_readable_name([element.field_name])}"
        elif path == ROOT_PATH:
            name = position
        else:
            name = f"{position} {human_readable_name(path)}"

        template = element.invalid_message or DEFAULT_INVALID_MESSAGE
        return ValidationResult.fail(render_message(template, name, item))

    # Fields

    def _fail(
        self,
        field: FieldSchema,
        path: tuple[str, ...],
        value: Any,
        default_message: str = DEFAULT_INVALID_MESSAGE,
    ) -> ValidationResult:
        template = field.invalid_message or default_message
        return ValidationResult.fail(render_message(template, human_readable_name(path), value))

    def _validate_field(
        self, field: FieldSchema, value: Any, root: Any, path: tuple[str, ...]
    ) -> ValidationResult:
        if field.field_name:
            path = path[:-1] + (field.field_name,)

        if field.type == FieldType.ONE_OF:
            return self._validate_one_of(field, value, root, path)

        required = field.get("required", False)
        if required is None or required is Required.NO:
            if is_absent(value):
                return ValidationResult.success()
        elif required is Required.YES:
            if is_absent(value):
                return self._fail(field, path, value, "The ${fieldName} field must be set and not null.")
        elif required == Required.EXPLICIT:
            if value is UNDEFINED:
                return self._fail(field, path, value, "The ${fieldName} field must be set.")
            if value is None:
                return ValidationResult.success()
        else:
            raise SchemaError(
                "You may only set a field's required property to True, False or 'explicit'.",
                context={"field": human_readable_name(path), "required": required},
            )

        if field.has("equals") and field.has("arrayEquals"):
            raise SchemaError(
                "You may not specify equals AND arrayEquals; they are mutually exclusive.",
                context={"field": human_readable_name(path)},
            )

        result = self._check_equals(field, value, path)
        if result is not None:
            return result

        result = self._check_array_equals(field, value, path)
        if result is not None:
            return result

        if field.has("matches") and not self._check_matches(field.get("matches"), value, path):
            return self._fail(field, path, value)

        result = self._check_reference(field, value, root, path)
        if result is not None:
            return result

        return self._check_type(field, value, root, path)

    def _validate_one_of(
        self, field: FieldSchema, value: Any, root: Any, path: tuple[str, ...]
    ) -> ValidationResult:
        # Every possible schema must pass; the first failure is reported.
        for possible in field.possible_schemas:
            nested_root = self._nested_root(root, value) if isinstance(possible, ObjectSchema) else root
            result = self._dispatch(possible, value, nested_root, path)
            if not result.success:
                if field.invalid_message:
                    return self._fail(field, path, value)
                return result

        return ValidationResult.success()

    def _check_equals(self, field: FieldSchema, value: Any, path: tuple[str, ...]) -> ValidationResult | None:
        expected = field.get("equals", None)
        if expected is None:
            return None

        # A list of allowed values is a membership test, unless the value
        # itself is an array (use arrayEquals for that).
        if is_array(expected) and not is_array(value):
            if not any(strict_equals(value, entry) for entry in expected):
                return self._fail(
                    field, path, value,
                    "The ${fieldName} field was not set to a valid value. "
                    "Possible values are: " + _to_json(list(expected)),
                )
        elif not strict_equals(value, expected):
            return self._fail(
                field, path, value, "The ${fieldName} field must be equal to: " + _stringify(expected)
            )

        return None

    def _check_array_equals(self, field: FieldSchema, value: Any, path: tuple[str, ...]) -> ValidationResult | None:
        expected = field.get("arrayEquals", None)
        if expected is None:
            return None

        if is_array(expected) and expected and all(is_array(entry) for entry in expected):
            if not any(array_equals(entry, value) for entry in expected):
                return self._fail(
                    field, path, value,
                    "The ${fieldName} field was not set to a valid value. "
                    "Possible values are: " + _to_json([list(entry) for entry in expected]),
                )
        elif not array_equals(expected, value):
            return self._fail(
                field, path, value, "The ${fieldName} field must be equal to: " + _stringify(expected)
            )

        return None

    @staticmethod
    def _search(pattern: Any, value: Any, path: tuple[str, ...]) -> bool:
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        if not isinstance(pattern, re.Pattern):
            raise SchemaError(
                "Invalid matches property. Must be a regular expression (regex), "
                "or an aggregate expression with $any or $all operator.",
                context={"field": human_readable_name(path)},
            )
        text = value if isinstance(value, str) else _stringify(value)
        return pattern.search(text) is not None

    def _check_matches(self, matches: Any, value: Any, path: tuple[str, ...]) -> bool:
        if not isinstance(matches, Mapping):
            return self._search(matches, value, path)

        any_of = matches.get("$any")
        all_of = matches.get("$all")
        if any_of and all_of:
            raise SchemaError(
                "You may not have $any and $all specified on a field's 'matches' "
                "property; they are mutually exclusive.",
                context={"field": human_readable_name(path)},
            )
        if any_of:
            return any(self._search(pattern, value, path) for pattern in any_of)
        if all_of:
            return all(self._search(pattern, value, path) for pattern in all_of)

        raise SchemaError(
            "Invalid matches property. Must be a regular expression (regex), "
            "or an aggregate expression with $any or $all operator.",
            context={"field": human_readable_name(path)},
        )

    def _check_reference(
        self, field: FieldSchema, value: Any, root: Any, path: tuple[str, ...]
    ) -> ValidationResult | None:
        reference = field.get("$eq", None)
        if reference is None:
            return None

        if not isinstance(root, Mapping):
            raise SchemaError(
                "The $eq operator may not be used on a field outside of an object context.",
                context={"field": human_readable_name(path), "$eq": reference},
            )

        if not strict_equals(resolve_path(reference, root), value):
            return self._fail(
                field, path, value,
                "The ${fieldName} field must be equal to the "
                + self._referenced_name(reference) + " field.",
            )

        return None

    def _referenced_name(self, reference: str) -> str:
        """Human-readable name of the field a ``$eq`` path points at."""
        segments = reference.split(".")
        node: SchemaNode | None = self._root
        for segment in segments:
            node = dict(node.fields).get(segment) if isinstance(node, ObjectSchema) else None

        if isinstance(node, FieldSchema) and node.field_name:
            return human_readable_name([node.field_name])
        return human_readable_name(segments)

    def _resolve_bound(self, field: FieldSchema, name: str, root: Any, path: tuple[str, ...]) -> Any:
        """Resolve a numeric smart attribute; None when it is not set."""
        attribute = parse_attribute(field.get(name, None))
        if attribute is None:
            return None

        bound = attribute.resolve(root)
        if bound is UNDEFINED or bound is None:
            return None
        if isinstance(bound, Real) and not isinstance(bound, bool):
            return bound
        if isinstance(attribute, Literal):
            raise SchemaError(
                f"The '{name}' attribute must be a number.",
                context={"field": human_readable_name(path), name: bound},
            )
        return _UNUSABLE_BOUND

    def _check_type(
        self, field: FieldSchema, value: Any, root: Any, path: tuple[str, ...]
    ) -> ValidationResult:
        field_type = field.type

        if field_type == FieldType.ANY:
            return ValidationResult.success()

        if field_type == FieldType.STRING:
            if not isinstance(value, str):
                return self._fail(field, path, value, "The ${fieldName} field must be a string.")

            min_length = self._resolve_bound(field, "minLength", root, path)
            max_length = self._resolve_bound(field, "maxLength", root, path)
            if min_length is _UNUSABLE_BOUND or max_length is _UNUSABLE_BOUND:
                return self._fail(field, path, value)

            if (min_length is not None and len(value) < min_length) or (
                max_length is not None and len(value) > max_length
            ):
                return self._fail(field, path, value, self._length_message(min_length, max_length))

            return ValidationResult.success()

        if field_type == FieldType.BOOLEAN:
            if value is not True and value is not False:
                return self._fail(field, path, value, "The ${fieldName} must be either true or false.")

            return ValidationResult.success()

        if field_type == FieldType.NUMBER:
            if (
                not isinstance(value, Real)
                or isinstance(value, bool)
                or (not isinstance(value, Integral) and math.isnan(value))
            ):
                return self._fail(field, path, value, "The ${fieldName} must be a number.")

            if field.get("integer", False) is True and not self._is_whole(value):
                return self._fail(field, path, value, "The ${fieldName} must be a whole number.")

            minimum = self._resolve_bound(field, "min", root, path)
            maximum = self._resolve_bound(field, "max", root, path)
            if minimum is _UNUSABLE_BOUND or maximum is _UNUSABLE_BOUND:
                return self._fail(field, path, value)

            if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
                return self._fail(field, path, value, self._range_message(minimum, maximum))

            return ValidationResult.success()

        raise SchemaError(
            f"Invalid or unimplemented validation type '{field_type}' encountered!",
            context={"field": human_readable_name(path), "type": field_type},
        )

    @staticmethod
    def _is_whole(value: Real) -> bool:
        if isinstance(value, Integral):
            return True
        return float(value).is_integer()

    @staticmethod
    def _length_message(min_length: Any, max_length: Any) -> str:
        parts = []
        if min_length is not None:
            parts.append(f"at least {_stringify(min_length)} {pluralize(min_length, 'character')}")
        if max_length is not None:
            parts.append(f"at most {_stringify(max_length)} {pluralize(max_length, 'character')}")
        return "The ${fieldName} field must be " + " and ".join(parts) + "."

    @staticmethod
    def _range_message(minimum: Any, maximum: Any) -> str:
        parts = []
        if minimum is not None:
            parts.append(f"at least {_stringify(minimum)}")
        if maximum is not None:
            parts.append(f"at most {_stringify(maximum)}")
        return "The ${fieldName} field must be " + " and ".join(parts) + " in value."


def create_validator(schema: Any, options: ValidatorOptions | Mapping | None = None) -> Validator:
    """Create a Validator for the given schema.

    Args:
        schema: The schema to validate with
        options: Optional ValidatorOptions (or a dict of option values)

    Returns:
        Validator instance
    """
    return Validator(schema, options)
