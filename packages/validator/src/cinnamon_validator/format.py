"""Formatting of user-facing validation messages.

Messages produced by the validator are shown to end users, so the wording
here (breadcrumbs, ordinals, pluralization) is part of the public contract.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import Any

#: Placeholder substituted with the human-readable field name.
FIELD_NAME_PLACEHOLDER = "${fieldName}"

#: Name of the implicit root segment of every field path.
ROOT_SEGMENT = "$root"

#: Rendered name of a field schema validated on its own (no enclosing object).
ROOT_FIELD_NAME = "value"

BREADCRUMB_SEPARATOR = " > "

_CAPITAL_LETTER = re.compile(r"(?<=\S)[A-Z]")

Message = str | Callable[[Any], str]


def humanize_segment(segment: str) -> str:
    """Turn a single key into a readable word or phrase.

    Underscores become spaces, hyphens are dropped and interior capitals are
    split off and lowercased, so ``"confirmPassword"`` reads as
    ``"confirm password"``.
    """
    segment = segment.replace("_", " ").replace("-", "")
    return _CAPITAL_LETTER.sub(lambda match: " " + match.group(0).lower(), segment)


def human_readable_name(path: Sequence[str]) -> str:
    """Render a field path as a breadcrumb.

    Args:
        path: Path segments, optionally starting with ``$root``

    Returns:
        Breadcrumb such as ``"user > first name"``, or ``"value"`` for the
        root itself
    """
    segments = list(path)
    if segments and segments[0] == ROOT_SEGMENT:
        segments = segments[1:]
    if not segments:
        return ROOT_FIELD_NAME
    return BREADCRUMB_SEPARATOR.join(humanize_segment(str(s)) for s in segments)


def ordinal(n: int) -> str:
    """Format a positive integer with its English ordinal suffix.

    >>> [ordinal(i) for i in (1, 2, 3, 4, 11, 12, 13, 21, 112, 206)]
    ['1st', '2nd', '3rd', '4th', '11th', '12th', '13th', '21st', '112th', '206th']
    """
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    return f"{n}" + {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def pluralize(count: Any, word: str) -> str:
    """Return ``word`` with an ``s`` appended unless ``count`` is exactly one."""
    return word if count == 1 else f"{word}s"


def render_message(template: Message, field_name: str, value: Any = None) -> str:
    """Substitute the field name placeholder in a message.

    Args:
        template: Message string, or a callable taking the failing value
        field_name: Human-readable name to substitute
        value: The failing value (passed to callable templates)

    Returns:
        The final message
    """
    text = template(value) if callable(template) else template
    return text.replace(FIELD_NAME_PLACEHOLDER, field_name)
