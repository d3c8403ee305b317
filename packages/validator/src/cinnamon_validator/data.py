"""Data helpers shared by the validator.

Provides the ``UNDEFINED`` sentinel (a key that is absent, as opposed to a
key that is present and set to ``None``), strict equality, order-independent
array equality and dot-notation path lookup.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

#: Delimiter between nested keys in a dot-notation path.
NESTED_KEY_DELIMITER = "."


class _Undefined:
    """Marker type for an absent value."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Undefined:
        return self

    def __deepcopy__(self, memo: dict) -> _Undefined:
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()


def is_array(value: Any) -> bool:
    """Check whether a value is array-shaped (an ordered, indexable sequence)."""
    return isinstance(value, (list, tuple))


def is_absent(value: Any) -> bool:
    """Check whether a value is either undefined or None."""
    return value is UNDEFINED or value is None


def strict_equals(a: Any, b: Any) -> bool:
    """Compare two values without cross-type coercion.

    Python's ``==`` treats ``True == 1`` and ``False == 0``; this comparison
    does not. Integers and floats still compare by value (``1 == 1.0``).

    Args:
        a: First value
        b: Second value

    Returns:
        True if the values are equal and neither is a bool unless both are
    """
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    if a is UNDEFINED or b is UNDEFINED:
        return a is b
    return bool(a == b)


def _index_of(items: list[Any], value: Any) -> int:
    for index, item in enumerate(items):
        if strict_equals(item, value):
            return index
    return -1


def array_equals(a: Any, b: Any) -> bool:
    """Compare two arrays by the values they hold, ignoring order.

    Duplicate counts matter: ``[1, 1, 2]`` is not equal to ``[1, 2]``.

    Args:
        a: An array to check
        b: The array to check against

    Returns:
        True if both are arrays holding the same multiset of values
    """
    if not is_array(a) or not is_array(b):
        return False
    if len(a) != len(b):
        return False

    remaining = list(a)
    for element in b:
        index = _index_of(remaining, element)
        if index < 0:
            return False
        del remaining[index]
    return not remaining


def resolve_path(path: str, obj: Any) -> Any:
    """Resolve a value in a nested mapping using dot notation.

    Args:
        path: Dot-notation path such as ``"user.address.street"``
        obj: Mapping to traverse

    Returns:
        The value at the path, or ``UNDEFINED`` if any segment is missing

    Raises:
        TypeError: If ``obj`` is not a mapping or ``path`` is not a string
    """
    if not isinstance(obj, Mapping):
        raise TypeError("Cannot deep-resolve a key in a non-mapping.")
    if not isinstance(path, str):
        raise TypeError("Cannot deep-resolve a non-string key.")

    current: Any = obj
    for part in path.split(NESTED_KEY_DELIMITER):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return UNDEFINED

    return current


def get_key(obj: Mapping, key: str) -> Any:
    """Get a key from a mapping, returning ``UNDEFINED`` when it is absent."""
    return obj[key] if key in obj else UNDEFINED
