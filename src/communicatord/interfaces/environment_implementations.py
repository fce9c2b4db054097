"""
Default implementations of the environment interfaces.
"""

import logging
import socket
import time
from importlib import metadata
from pathlib import Path
from typing import List, Optional

from ..constants import DISTRIBUTION_NAME, FALLBACK_VERSION
from .environment_interface import IClock, IDirectoryEnumerator, IHostIdentity, IVersionProvider

logger = logging.getLogger(__name__)


class SystemClock(IClock):
    """Wall clock time truncated to whole seconds."""

    def now(self) -> int:
        return int(time.time())


class SocketHostIdentity(IHostIdentity):
    def hostname(self) -> str:
        return socket.gethostname()


class PackageVersionProvider(IVersionProvider):
    """
    Reads the version from the installed distribution metadata.

    The lookup happens once; running from a source tree that was never
    installed falls back to ``FALLBACK_VERSION``.
    """

    def __init__(self, distribution: str = DISTRIBUTION_NAME) -> None:
        self.distribution = distribution
        self._version: Optional[str] = None

    def current_version(self) -> str:
        if self._version is None:
            try:
                self._version = metadata.version(self.distribution)
            except metadata.PackageNotFoundError:
                logger.debug(
                    f"Distribution {self.distribution} is not installed, using version {FALLBACK_VERSION}"
                )
                self._version = FALLBACK_VERSION
        return self._version


class GlobDirectoryEnumerator(IDirectoryEnumerator):
    """
    Lists files with ``Path.glob``.

    The result is sorted so that one run is reproducible; callers must not
    rely on the order between runs since files come and go.
    """

    def list_files(self, directory: str, pattern: str) -> List[str]:
        try:
            return sorted(str(p) for p in Path(directory).glob(pattern) if p.is_file())
        except OSError as e:
            logger.error(f"Failed to list {pattern} files in {directory}: {e}")
            return []
