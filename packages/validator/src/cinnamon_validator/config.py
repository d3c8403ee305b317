"""Validator options and configuration loading."""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

from dataknobs_config import Config

from .exceptions import ConfigurationError
from .schema import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatorOptions:
    """Options that tune how a Validator treats its input.

    Attributes:
        strict_arrays: If True, arrays submitted as JSON strings are rejected
            instead of being parsed
        max_depth: Maximum schema nesting depth accepted at construction
    """

    strict_arrays: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.strict_arrays, bool):
            raise ConfigurationError(
                "strict_arrays must be a boolean",
                context={"strict_arrays": self.strict_arrays},
            )
        if (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or self.max_depth < 1
        ):
            raise ConfigurationError(
                "max_depth must be a positive integer",
                context={"max_depth": self.max_depth},
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "ValidatorOptions":
        """Create options from a dictionary, ignoring unknown keys.

        Args:
            data: Option values keyed by attribute name

        Returns:
            ValidatorOptions instance
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown validator options: {', '.join(sorted(unknown))}")

        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


#: Configuration type under which validators are listed.
VALIDATORS_TYPE = "validators"


def load_config(source: Union[str, Path, dict], use_env: bool = True) -> Config:
    """Load validator configurations from a YAML or JSON file, or a dict.

    Validators are atomic configurations of the ``validators`` type, each
    holding a ``schema`` plus option values::

        validators:
          - name: people
            strict_arrays: true
            schema:
              - name: {type: string, required: true}

    Args:
        source: Path to a configuration file, or a configuration dictionary
        use_env: Whether to apply ``DATAKNOBS_VALIDATORS__<NAME>__<OPTION>``
            environment overrides

    Returns:
        The loaded Config
    """
    config = Config(source, use_env=use_env)
    logger.debug(
        f"Loaded {config.get_count(VALIDATORS_TYPE)} validator configuration(s)"
    )
    return config
