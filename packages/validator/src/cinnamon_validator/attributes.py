"""Smart attributes: constraint values resolved per validation call.

A smart attribute is written in a schema as one of:

- a literal value, e.g. ``"minLength": 8``
- a reference to another field, e.g. ``"max": {"$eq": "limits.max"}``
- a computed value, e.g. ``"min": {"$eval": lambda obj: obj["start"]}``

References and computed values are resolved against the root object being
validated, once per ``validate`` call, and never cached.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .data import UNDEFINED, resolve_path
from .exceptions import SchemaError

EQ_OPERATOR = "$eq"
EVAL_OPERATOR = "$eval"


class SmartAttribute(ABC):
    """Base class for all smart attribute variants."""

    @abstractmethod
    def resolve(self, root: Any) -> Any:
        """Resolve the attribute's value.

        Args:
            root: The root object being validated, or ``UNDEFINED`` when
                validating a field with no enclosing object

        Returns:
            The effective constraint value
        """


@dataclass(frozen=True)
class Literal(SmartAttribute):
    """A constant value."""

    value: Any

    def resolve(self, root: Any) -> Any:
        return self.value


@dataclass(frozen=True)
class FieldRef(SmartAttribute):
    """The value of another field, addressed by dot-notation path."""

    path: str

    def resolve(self, root: Any) -> Any:
        if not isinstance(root, Mapping):
            return UNDEFINED
        return resolve_path(self.path, root)


@dataclass(frozen=True)
class Computed(SmartAttribute):
    """The result of calling a function with the root object."""

    fn: Callable[[Any], Any]

    def resolve(self, root: Any) -> Any:
        return self.fn(None if root is UNDEFINED else root)


def parse_attribute(raw: Any) -> SmartAttribute | None:
    """Classify a raw schema attribute value.

    Args:
        raw: The attribute as written in the schema (absent attributes are
            passed as ``None`` or ``UNDEFINED``)

    Returns:
        The matching SmartAttribute, or None if the attribute is absent

    Raises:
        SchemaError: If both ``$eq`` and ``$eval`` are set
    """
    if raw is None or raw is UNDEFINED:
        return None

    if isinstance(raw, Mapping):
        ref = raw.get(EQ_OPERATOR)
        fn = raw.get(EVAL_OPERATOR)
        has_ref = isinstance(ref, str)
        has_fn = callable(fn)

        if has_ref and has_fn:
            raise SchemaError(
                "You cannot set both $eq and $eval attribute operators. "
                "They are mutually exclusive.",
                context={"attribute": dict(raw)},
            )
        if has_fn:
            return Computed(fn)
        if has_ref:
            return FieldRef(ref)

    return Literal(raw)

