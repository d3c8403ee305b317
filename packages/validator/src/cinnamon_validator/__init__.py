"""Cinnamon Validator - declarative validation of nested data.

A schema is plain data describing what a valid value looks like. Build a
validator from it once, then validate as many values as needed:

    ```python
    from cinnamon_validator import create_validator

    validator = create_validator({
        "user": {
            "name": {"type": "string", "required": True, "maxLength": 64},
            "age": {"type": "number", "integer": True, "min": 0},
        },
        "tags": [{"type": "string", "minLength": 1}],
    })

    result, value = validator.validate({"user": {"age": 30}})
    result.success   # False
    result.message   # 'The user > name field must be set and not null.'
    ```

Modules:
    executor: Validator and create_validator
    schema: Schema model and structural classification
    attributes: Smart attributes ($eq references and $eval functions)
    result: ValidationResult
    patterns: Common regular expressions and the Matcher helper
    config: ValidatorOptions and configuration file loading
    factory: ValidatorFactory for building validators from configuration
    exceptions: Errors raised for malformed schemas or configuration
"""

from .attributes import Computed, FieldRef, Literal, SmartAttribute, parse_attribute
from .config import VALIDATORS_TYPE, ValidatorOptions, load_config
from .data import UNDEFINED, array_equals, resolve_path
from .exceptions import ConfigurationError, SchemaError, ValidatorError
from .executor import Validator, create_validator
from .factory import ValidatorFactory, validator_factory
from .patterns import COMMON_PATTERNS, PATTERN_MESSAGES, Matcher
from .result import ValidationResult
from .schema import SchemaKind, compile_schema, is_array_schema, is_object_schema

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Validation
    "create_validator",
    "Validator",
    "ValidatorOptions",
    "ValidationResult",
    "UNDEFINED",
    # Schema model
    "SchemaKind",
    "compile_schema",
    "is_object_schema",
    "is_array_schema",
    # Smart attributes
    "SmartAttribute",
    "Literal",
    "FieldRef",
    "Computed",
    "parse_attribute",
    # Helpers
    "array_equals",
    "resolve_path",
    "COMMON_PATTERNS",
    "PATTERN_MESSAGES",
    "Matcher",
    # Configuration
    "load_config",
    "VALIDATORS_TYPE",
    "ValidatorFactory",
    "validator_factory",
    # Exceptions
    "ValidatorError",
    "SchemaError",
    "ConfigurationError",
]
