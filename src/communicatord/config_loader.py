"""
Loader for the flags configuration file.

The file is a YAML mapping. Only the ``path`` parameter is used by the flag
subsystem; it names the directory where flag records are stored.

Example ``/etc/communicatord/flags.yaml``::

    path: /var/lib/communicatord/flags
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .constants import DEFAULT_FLAGS_CONFIG_FILE, FLAGS_CONFIG_ENV_VAR
from .interfaces.config_reader_interface import IConfigReader

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Custom exception for configuration errors."""

    pass


def get_config_file_path() -> Path:
    """Get the flags configuration file, honoring the environment override."""
    override = os.environ.get(FLAGS_CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return DEFAULT_FLAGS_CONFIG_FILE


class FlagsConfig(IConfigReader):
    """
    Configuration parameters read from the flags YAML file.

    Values are exposed as strings, the way they would appear in a
    ``name=value`` configuration file.
    """

    def __init__(self, parameters: Optional[Dict[str, Any]] = None, source: Optional[Path] = None):
        self.source = source
        self._parameters: Dict[str, str] = {}
        for name, value in (parameters or {}).items():
            if value is None:
                continue
            self._parameters[str(name)] = str(value)

    @classmethod
    def load(
        cls, file_path: Optional[Union[str, Path]] = None, strict: bool = False
    ) -> "FlagsConfig":
        """
        Load the configuration file.

        Args:
            file_path: File to read, defaults to ``get_config_file_path()``
            strict: Raise instead of falling back to an empty configuration

        Returns:
            The loaded configuration

        Raises:
            ConfigurationError: If strict and the file is missing or invalid
        """
        path = Path(file_path) if file_path is not None else get_config_file_path()

        if not path.exists():
            if strict:
                raise ConfigurationError(f"Configuration file not found: {path}")
            logger.debug(f"Flags configuration file {path} does not exist, using defaults")
            return cls(source=path)

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
            if strict:
                raise ConfigurationError(f"Invalid configuration file {path}: {e}") from e
            logger.warning(f"Failed to load flags configuration {path}: {e}")
            return cls(source=path)

        if data is None:
            return cls(source=path)

        if not isinstance(data, dict):
            if strict:
                raise ConfigurationError(
                    f"Configuration file {path} must contain a mapping, found {type(data).__name__}"
                )
            logger.warning(f"Flags configuration {path} is not a mapping, ignoring it")
            return cls(source=path)

        return cls(data, source=path)

    def has_parameter(self, name: str) -> bool:
        return name in self._parameters

    def get_parameter(self, name: str) -> Optional[str]:
        return self._parameters.get(name)
