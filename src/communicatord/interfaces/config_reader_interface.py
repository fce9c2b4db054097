"""
Interface for configuration lookups implementing Dependency Inversion Principle.

The flags directory is resolved through this abstraction so that the flag
subsystem does not depend on where or how the configuration is stored.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IConfigReader(ABC):
    """
    Abstract interface for reading named configuration parameters.
    """

    @abstractmethod
    def has_parameter(self, name: str) -> bool:
        """
        Check whether a parameter is defined.

        Args:
            name: Name of the parameter

        Returns:
            True if the parameter is defined, False otherwise
        """
        pass

    @abstractmethod
    def get_parameter(self, name: str) -> Optional[str]:
        """
        Get the value of a parameter.

        Args:
            name: Name of the parameter

        Returns:
            The parameter value as a string, or None if it is not defined
        """
        pass


def create_config_reader() -> IConfigReader:
    """Create the default config reader (the flags YAML configuration file)."""
    from ..config_loader import FlagsConfig

    return FlagsConfig.load()
