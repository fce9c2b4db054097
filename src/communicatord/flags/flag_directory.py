"""
Resolution of the directory holding the flag records.

The directory is looked up once per process. The result, including the
"unresolved" outcome when the directory does not exist, is kept for the
life of the process: a directory created later is only noticed after a
restart, and every save or load meanwhile fails cheaply instead of probing
the filesystem again.
"""

import logging
import os
from typing import Optional

from ..config_loader import FlagsConfig
from ..constants import DEFAULT_FLAGS_PATH
from ..interfaces.config_reader_interface import IConfigReader, create_config_reader

logger = logging.getLogger(__name__)

# Marks a FlagsDirectory that was not probed yet; None means probed and unresolved.
_NOT_PROBED = object()


class FlagsDirectory:
    """
    Lazily resolved flags directory.

    Args:
        config_reader: Where the ``path`` parameter is read from. Defaults to
            the flags configuration file.
    """

    def __init__(self, config_reader: Optional[IConfigReader] = None) -> None:
        self._config_reader = config_reader
        self._path: object = _NOT_PROBED

    @classmethod
    def at(cls, path: str) -> "FlagsDirectory":
        """Create a directory resolver bound to an explicit path."""
        return cls(FlagsConfig({"path": path}))

    def get_configured_path(self) -> str:
        """Get the configured path without checking that it exists."""
        if self._config_reader is None:
            self._config_reader = create_config_reader()
        if self._config_reader.has_parameter("path"):
            path = self._config_reader.get_parameter("path")
            if path:
                return path
        return DEFAULT_FLAGS_PATH

    def is_resolved(self) -> bool:
        return self._path is not _NOT_PROBED and self._path is not None

    def get_path(self) -> Optional[str]:
        """
        Get the flags directory.

        Returns:
            The directory path, or None if it does not exist or is not a
            directory. The first answer is final.
        """
        if self._path is _NOT_PROBED:
            self._path = self._probe()
        return self._path  # type: ignore[return-value]

    def _probe(self) -> Optional[str]:
        path = self.get_configured_path()
        if not os.path.exists(path):
            logger.error(
                f'could not find the flags directory "{path}"; did you start communicatord yet?'
                " (it creates it if not yet present)"
            )
            return None
        if not os.path.isdir(path):
            logger.error(
                f'the flags path "{path}" is not a directory;'
                " did you make your service part of the flags group?"
            )
            return None
        return path


_default_directory: Optional[FlagsDirectory] = None


def get_flags_directory() -> FlagsDirectory:
    """Get the process-wide flags directory, creating it on first use."""
    global _default_directory
    if _default_directory is None:
        _default_directory = FlagsDirectory()
    return _default_directory


def set_flags_directory(directory: FlagsDirectory) -> None:
    """Replace the process-wide flags directory (daemon bootstrap)."""
    global _default_directory
    _default_directory = directory


def reset_flags_directory() -> None:
    """Forget the process-wide flags directory so the next use probes again."""
    global _default_directory
    _default_directory = None
