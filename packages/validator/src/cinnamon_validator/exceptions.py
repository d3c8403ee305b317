"""Custom exceptions for the cinnamon_validator package.

This module defines exception types for the validator, built on the common
exception framework from dataknobs_common.

Validation *failures* are never raised: they are returned as
``ValidationResult.fail(...)``. The exceptions here signal programmer
mistakes instead, such as a malformed schema or invalid options, which
should fail loudly rather than be reported as bad input data.

Example:
    ```python
    from cinnamon_validator import SchemaError, create_validator

    validator = create_validator({"name": {"type": "text"}})
    try:
        validator.validate({"name": "Alice"})
    except SchemaError as e:
        logger.error(f"Broken schema: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from dataknobs_common import (
    ConfigurationError as BaseConfigurationError,
    DataknobsError,
)


class ValidatorError(DataknobsError):
    """Base exception for the validator package."""

    pass


class SchemaError(ValidatorError):
    """Raised when a schema is malformed.

    Common scenarios include:
    - ``equals`` and ``arrayEquals`` set on the same field
    - ``$any`` and ``$all`` set on the same ``matches`` attribute
    - ``$eq`` used on a field with no enclosing object
    - an unknown field ``type``
    - a cyclic or excessively deep schema

    Example:
        ```python
        raise SchemaError(
            "Invalid or unimplemented validation type 'text' encountered!",
            context={"field": "name", "type": "text"}
        )
        ```
    """

    pass


class ConfigurationError(ValidatorError, BaseConfigurationError):
    """Raised when validator options or a validator configuration are invalid.

    Also catchable as ``dataknobs_common.ConfigurationError``.

    Example:
        ```python
        raise ConfigurationError(
            "max_depth must be a positive integer",
            context={"max_depth": -1}
        )
        ```
    """

    pass


__all__ = [
    "ValidatorError",
    "SchemaError",
    "ConfigurationError",
]
