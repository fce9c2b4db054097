"""
Interfaces for the runtime environment consumed by flag persistence.

Flags record when they were raised, on which host, and with which software
version. These interfaces abstract the clock, the host identity, the version
and the directory listing so that tests can substitute deterministic values.
"""

from abc import ABC, abstractmethod
from typing import List


class IClock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> int:
        """
        Get the current time.

        Returns:
            Current time in seconds since the Unix epoch
        """
        pass


class IHostIdentity(ABC):
    """Identity of the computer the process runs on."""

    @abstractmethod
    def hostname(self) -> str:
        """Get the name of this host."""
        pass


class IVersionProvider(ABC):
    """Version of the software writing the flag records."""

    @abstractmethod
    def current_version(self) -> str:
        """Get the version string of the running software."""
        pass


class IDirectoryEnumerator(ABC):
    """
    Lists the files of a directory matching a glob pattern.
    """

    @abstractmethod
    def list_files(self, directory: str, pattern: str) -> List[str]:
        """
        List matching files.

        Args:
            directory: Directory to search (not recursive)
            pattern: Glob pattern such as ``*.flag``

        Returns:
            Paths of the matching files. An unreadable or missing directory
            yields an empty list.
        """
        pass


# Factory functions for creating environment collaborators


def create_clock() -> IClock:
    """Create default clock implementation."""
    from .environment_implementations import SystemClock

    return SystemClock()


def create_host_identity() -> IHostIdentity:
    """Create default host identity implementation."""
    from .environment_implementations import SocketHostIdentity

    return SocketHostIdentity()


def create_version_provider() -> IVersionProvider:
    """Create default version provider implementation."""
    from .environment_implementations import PackageVersionProvider

    return PackageVersionProvider()


def create_directory_enumerator() -> IDirectoryEnumerator:
    """Create default directory enumerator implementation."""
    from .environment_implementations import GlobDirectoryEnumerator

    return GlobDirectoryEnumerator()
