"""
Registry of the flags currently raised on this host.

The registry lists the record files of the flags directory and loads them.
The number of flags returned is capped: a runaway detector raising
thousands of flags must not make every report read thousands of files. When
the cap is reached, the registry raises one more flag, about itself, through
the same save path as any other flag, so the overflow shows up wherever
flags are reported.
"""

import logging
import os
from typing import List, Optional

from ..constants import FLAG_FILE_EXTENSION, FLAGS_LIMIT, TOO_MANY_FLAGS_PRIORITY
from ..exceptions import FlagError
from ..interfaces.environment_interface import IDirectoryEnumerator, create_directory_enumerator
from .flag import Flag
from .flag_directory import FlagsDirectory
from .flag_store import FlagStore, get_flag_store
from .helpers import flag_up

logger = logging.getLogger(__name__)

OVERFLOW_UNIT = "communicatord"
OVERFLOW_SECTION = "flag"
OVERFLOW_NAME = "too-many-flags"
OVERFLOW_TAGS = ("flag", "too-many")
OVERFLOW_BASENAME = f"{OVERFLOW_UNIT}_{OVERFLOW_SECTION}_{OVERFLOW_NAME}{FLAG_FILE_EXTENSION}"


class FlagRegistry:
    """
    Loads all the flags found in the flags directory.

    Args:
        store: Store used to load the records and save the overflow flag
        directory: Flags directory, defaults to the store's directory
        enumerator: Lists the record files of the directory
        limit: Maximum number of flags returned by ``load_flags()``
    """

    def __init__(
        self,
        store: Optional[FlagStore] = None,
        directory: Optional[FlagsDirectory] = None,
        enumerator: Optional[IDirectoryEnumerator] = None,
        limit: int = FLAGS_LIMIT,
    ) -> None:
        if limit < 1:
            raise ValueError(f"the flags limit must be at least 1, got {limit}")
        self._store = store
        self._directory = directory
        self.enumerator = enumerator or create_directory_enumerator()
        self.limit = limit

    @property
    def store(self) -> FlagStore:
        return self._store or get_flag_store()

    @property
    def directory(self) -> FlagsDirectory:
        return self._directory or self.store.directory

    def load_flags(self) -> List[Flag]:
        """
        Load the raised flags.

        Records that cannot be loaded are skipped with a warning. If loading
        every record would return more than ``limit`` flags, the first
        ``limit - 1`` records are loaded, the remaining files are not read,
        and the ``communicatord/flag/too-many-flags`` flag takes the last
        slot (it is also saved so the next load sees it).

        The order follows the directory listing, except that a saved
        overflow flag is listed last: it is only loaded from disk when no new
        overflow replaces it. Callers must not depend on the order between
        runs.

        Returns:
            The flags, empty if the flags directory is unavailable
        """
        result: List[Flag] = []

        path = self.directory.get_path()
        if not path:
            return result

        filenames = self._list_records(path)
        for index, filename in enumerate(filenames):
            remaining = len(filenames) - index
            if len(result) >= self.limit - 1 and remaining > 1:
                result.append(self._raise_overflow_flag(path))
                break

            try:
                result.append(self.store.load(filename))
            except FlagError as e:
                logger.warning(f"Skipping flag file {filename}: {e}")

        return result

    def _list_records(self, path: str) -> List[str]:
        filenames = self.enumerator.list_files(path, f"*{FLAG_FILE_EXTENSION}")
        records = [f for f in filenames if os.path.basename(f) != OVERFLOW_BASENAME]
        if len(records) < len(filenames):
            records.append(os.path.join(path, OVERFLOW_BASENAME))
        return records

    def _raise_overflow_flag(self, path: str) -> Flag:
        flag = flag_up(
            OVERFLOW_UNIT,
            OVERFLOW_SECTION,
            OVERFLOW_NAME,
            f"too many flags were raised, showing only the first {self.limit - 1},"
            f' others can be viewed on this system at "{path}"',
        )
        flag.set_priority(TOO_MANY_FLAGS_PRIORITY)
        for tag in OVERFLOW_TAGS:
            flag.add_tag(tag)

        logger.warning(f"More than {self.limit} flags are raised in {path}")
        flag.get_filename(self.directory)
        if not self.store.save(flag):
            logger.error(f"Failed to save the {OVERFLOW_NAME} flag in {path}")
        return flag


def load_flags() -> List[Flag]:
    """Load the raised flags using the process-wide store and directory."""
    return FlagRegistry().load_flags()
