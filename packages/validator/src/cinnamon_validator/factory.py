"""Factory for building validators from configuration."""

import logging
from pathlib import Path
from typing import Any, Union

from dataknobs_config import Config, FactoryBase

from .config import VALIDATORS_TYPE, ValidatorOptions, load_config
from .exceptions import ConfigurationError
from .executor import Validator

logger = logging.getLogger(__name__)

# Keys that describe a configuration entry rather than validator options
_METADATA_KEYS = ("name", "type", "schema", "factory", "class")


class ValidatorFactory(FactoryBase):
    """Factory for creating validators from configuration.

    Configuration Options:
        name (str): Optional validator name, used for logging
        schema (dict | list): The validation schema
        strict_arrays (bool): Reject arrays submitted as JSON strings (default: False)
        max_depth (int): Maximum schema nesting depth (default: 64)

    Configuration files cannot hold compiled regular expressions or
    callables, so ``matches`` patterns may be given as strings and ``$eval``
    attributes are only available to schemas built in code.

    Example Configuration:
        validators:
          - name: signup
            factory: cinnamon_validator.ValidatorFactory
            strict_arrays: true
            schema:
              username:
                type: string
                required: true
                minLength: 2
                maxLength: 32
                matches: "^[\\\\w.]+$"
              password:
                type: string
                required: true
                minLength: 8
              confirmPassword:
                type: string
                required: true
                $eq: password

    With a ``factory`` entry, ``Config.get_instance("validators", "signup")``
    builds the validator directly.
    """

    def create(self, **config: Any) -> Validator:
        """Create a Validator instance from configuration.

        Args:
            **config: Validator configuration

        Returns:
            Validator instance

        Raises:
            ConfigurationError: If no schema is configured
        """
        if "schema" not in config:
            raise ConfigurationError(
                "Validator configuration is missing 'schema'",
                context={"keys": sorted(config)},
            )

        name = config.get("name", "unnamed_validator")
        options = ValidatorOptions.from_dict(
            {key: value for key, value in config.items() if key not in _METADATA_KEYS}
        )

        logger.info(f"Creating validator: {name}")
        return Validator(config["schema"], options)

    def from_config(self, config: Config, name_or_index: Union[str, int] = 0) -> Validator:
        """Create a Validator from one entry of a loaded Config.

        Args:
            config: Config holding ``validators`` entries
            name_or_index: Name or position of the entry

        Returns:
            Validator instance
        """
        return self.create(**config.get(VALIDATORS_TYPE, name_or_index))

    def from_file(self, path: Union[str, Path], name_or_index: Union[str, int] = 0) -> Validator:
        """Create a Validator from a YAML or JSON configuration file.

        Args:
            path: Path to the configuration file
            name_or_index: Name or position of the validator entry

        Returns:
            Validator instance
        """
        return self.from_config(load_config(path), name_or_index)


# Singleton instance for registration
validator_factory = ValidatorFactory()
