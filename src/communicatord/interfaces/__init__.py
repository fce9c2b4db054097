"""
Abstract collaborators of the flag subsystem and their default implementations.
"""

from .config_reader_interface import IConfigReader, create_config_reader
from .environment_interface import (
    IClock,
    IDirectoryEnumerator,
    IHostIdentity,
    IVersionProvider,
    create_clock,
    create_directory_enumerator,
    create_host_identity,
    create_version_provider,
)

__all__ = [
    "IConfigReader",
    "IClock",
    "IDirectoryEnumerator",
    "IHostIdentity",
    "IVersionProvider",
    "create_config_reader",
    "create_clock",
    "create_directory_enumerator",
    "create_host_identity",
    "create_version_provider",
]
