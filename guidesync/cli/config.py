"""YAML configuration loading and validation.

The configuration file is shared with the rest of the sync tooling, so it
may hold keys (backend subdomain, credentials, locales) that the converter
does not use. Those are ignored.
"""

import logging
import os
from typing import Any, Dict

import yaml

from ..errors import ConfigError, FilesystemError
from .models import ConverterConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles configuration file loading and validation.

    Configuration file structure:
        enable_link_target_blank: true
        contents_dir: "./articles"

    A missing file is not an error: the defaults are used.
    """

    DEFAULT_CONFIG_PATH = os.path.join('~', '.config', 'guidesync', 'config.yaml')

    # Expected type for each recognised field
    FIELD_TYPES = {
        'enable_link_target_blank': bool,
        'contents_dir': str,
    }

    @classmethod
    def default_path(cls) -> str:
        """Return the expanded default configuration path."""
        return os.path.expanduser(cls.DEFAULT_CONFIG_PATH)

    @classmethod
    def load(cls, config_path: str) -> ConverterConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ConverterConfig with parsed values (defaults if the file is missing)

        Raises:
            FilesystemError: If the file exists but cannot be read
            ConfigError: If the configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            logger.debug(f"No configuration at {config_path}, using defaults")
            return ConverterConfig()
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        if not content.strip():
            return ConverterConfig()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            return ConverterConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ConverterConfig:
        """Validate the raw dictionary and build a ConverterConfig.

        Raises:
            ConfigError: If a recognised field has the wrong type or is empty
        """
        values = {}
        for field_name, value in config_dict.items():
            expected = cls.FIELD_TYPES.get(field_name)
            if expected is None:
                logger.debug(f"Ignoring configuration key '{field_name}'")
                continue

            if value is None:
                continue

            if not isinstance(value, expected):
                raise ConfigError(
                    f"must be a {expected.__name__}, got {type(value).__name__}",
                    field_name
                )

            if expected is str:
                value = value.strip()
                if not value:
                    raise ConfigError("cannot be empty", field_name)

            values[field_name] = value

        return ConverterConfig(**values)
