"""Pytest configuration for cinnamon_validator tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from cinnamon_validator import create_validator  # noqa: E402


@pytest.fixture
def signup_validator():
    """Validator for a typical sign-up request body."""
    return create_validator({
        "username": {
            "type": "string",
            "required": True,
            "minLength": 2,
            "maxLength": 32,
        },
        "password": {
            "type": "string",
            "required": True,
            "minLength": 8,
            "maxLength": 128,
            "matches": {
                "$all": [r"[a-z]", r"[A-Z]", r"[0-9]", r"[^a-zA-Z0-9]"],
            },
        },
        "confirmPassword": {
            "type": "string",
            "required": True,
            "$eq": "password",
        },
        "birthYear": {
            "type": "number",
            "integer": True,
            "min": 1900,
            "max": 2010,
        },
    })


@pytest.fixture
def people_validator():
    """Validator for an array of people objects."""
    def make(required: bool = True, **options):
        return create_validator([
            {
                "name": {
                    "type": "string",
                    "required": required,
                    "minLength": 3,
                    "maxLength": 255,
                },
                "age": {
                    "type": "number",
                    "required": required,
                    "min": 18,
                    "max": 100,
                    "integer": True,
                },
            },
        ], options or None)

    return make
