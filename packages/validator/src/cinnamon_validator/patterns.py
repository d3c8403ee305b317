"""Commonly used regular expressions and a helper to match against them.

The patterns can be used directly in a schema's ``matches`` attribute::

    {"email": {"type": "string", "matches": COMMON_PATTERNS["email"]}}

or through the ``Matcher`` for readability::

    Matcher.is_email("me@example.com")          # True
    Matcher.assert_username("a")                # 'is too short (must be at least 2 characters)'
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

COMMON_PATTERNS: dict[str, re.Pattern] = {
    # RFC 2822 e-mail address
    "email": re.compile(
        r"^(?:[a-z\d!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z\d!#$%&'*+/=?^_`{|}~-]+)*"
        r"|\"(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21\x23-\x5b\x5d-\x7f]|\\[\x01-\x09\x0b\x0c\x0e-\x7f])*\")"
        r"@(?:(?:[a-z\d](?:[a-z\d-]*[a-z\d])?\.)+[a-z\d](?:[a-z\d-]*[a-z\d])?"
        r"|\[(?:(2(5[0-5]|[0-4]\d)|1\d\d|[1-9]?\d)\.){3}(?:(2(5[0-5]|[0-4]\d)|1\d\d|[1-9]?\d)"
        r"|[a-z\d-]*[a-z\d]:(?:[\x01-\x08\x0b\x0c\x0e-\x1f\x21-\x5a\x53-\x7f]|\\[\x01-\x09\x0b\x0c\x0e-\x7f])+)\])$"
    ),
    # Any version of UUID
    "uuid": re.compile(
        r"^[\dA-F]{8}\b-[\dA-F]{4}\b-[\dA-F]{4}\b-[\dA-F]{4}\b-[\dA-F]{12}$", re.IGNORECASE
    ),
    # Random (version 4) UUID
    "uuid_v4": re.compile(
        r"^[\dA-F]{8}\b-[\dA-F]{4}\b-4[\dA-F]{3}\b-[89AB][\dA-F]{3}\b-[\dA-F]{12}$", re.IGNORECASE
    ),
    # Easy-to-type handle with no spaces
    "username": re.compile(r"^[\w.]{2,30}$", re.ASCII),
    # Lowercase letter, uppercase letter and digit; 8 to 255 characters
    "password": re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,255}$"),
}


def _username_message(value: Any, vague: bool = False) -> str:
    if vague:
        return "is not a valid username"
    if len(value) < 2:
        return "is too short (must be at least 2 characters)"
    if len(value) > 30:
        return "is too long (must be at most 30 characters)"
    return "is not a valid username (may contain only letters, numbers, periods or underscores)"


def _password_message(value: Any, vague: bool = False) -> str:
    if vague:
        return "is not a valid password"
    if len(value) < 8:
        return "is too short (must be at least 8 characters)"
    if len(value) > 255:
        return "is too long (must be at most 255 characters)"
    return (
        "is not a complex enough password (must contain at least one lowercase "
        "letter, one uppercase letter and one number)"
    )


#: Failure message for each common pattern, either fixed or computed from
#: the failing value (optionally kept vague).
PATTERN_MESSAGES: dict[str, str | Callable[..., str]] = {
    "email": "is not a valid e-mail address",
    "uuid": "is not a valid ID",
    "uuid_v4": "is not a valid ID",
    "username": _username_message,
    "password": _password_message,
}


class _Matcher:
    """Matches values against the COMMON_PATTERNS.

    For every pattern ``name`` two methods are available:

    - ``is_<name>(value) -> bool``
    - ``assert_<name>(value, vague_errors=False) -> str | None``, returning
      None when the value matches and the failure message otherwise
    """

    def matches(self, name: str, value: Any) -> bool:
        """Check a value against the named pattern."""
        if not isinstance(value, str):
            return False
        return COMMON_PATTERNS[name].search(value) is not None

    def check(self, name: str, value: Any, vague_errors: bool = False) -> str | None:
        """Return None if the value matches the named pattern, else a message."""
        if self.matches(name, value):
            return None
        message = PATTERN_MESSAGES[name]
        if callable(message):
            return message(value if isinstance(value, str) else "", vague=vague_errors)
        return message


def _install(name: str) -> None:
    def is_match(self: _Matcher, value: Any) -> bool:
        return self.matches(name, value)

    def assert_match(self: _Matcher, value: Any, vague_errors: bool = False) -> str | None:
        return self.check(name, value, vague_errors)

    is_match.__name__ = f"is_{name}"
    is_match.__doc__ = f"Check whether a value matches the '{name}' pattern."
    assert_match.__name__ = f"assert_{name}"
    assert_match.__doc__ = f"Return None if a value matches the '{name}' pattern, else a message."
    setattr(_Matcher, is_match.__name__, is_match)
    setattr(_Matcher, assert_match.__name__, assert_match)


for _name in COMMON_PATTERNS:
    _install(_name)

Matcher: Any = _Matcher()
