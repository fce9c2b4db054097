"""
The flag value object.

A flag records a standing problem that someone has to look at, for example
"clamav is not installed". It is identified by a unit, a section and a name
and persists as one record file until the problem goes away::

    flag = Flag("core-plugins", "attachment", "clamav-missing")
    flag.set_message("clamav not installed").set_priority(15)
    flag.save()  # raise: creates or merges the record

    flag.set_state(FlagState.DOWN)
    flag.save()  # clear: deletes the record

Callers must not save a DOWN state for a flag marked ``manual_down``; those
flags are only cleared by an explicit administrator action. ``save()`` does
not enforce this.
"""

from enum import Enum
from typing import TYPE_CHECKING, FrozenSet, Optional, Set

from ..constants import DEFAULT_PRIORITY, FLAG_FILE_EXTENSION, MAX_PRIORITY, MIN_PRIORITY
from .flag_directory import FlagsDirectory, get_flags_directory
from .name_validator import valid_name

if TYPE_CHECKING:
    from .flag_store import FlagStore


class FlagState(Enum):
    """Whether the problem described by a flag is present."""

    UP = "up"
    DOWN = "down"


class Flag:
    """
    A raised (or cleared) flag.

    Args:
        unit: Name of the software unit, e.g. ``core-plugins``
        section: Part of the unit raising the flag, e.g. a plugin name
        name: Short name of the problem, e.g. ``clamav-missing``

    Raises:
        InvalidName: If one of the names does not match the name grammar
    """

    def __init__(self, unit: str, section: str, name: str) -> None:
        self._unit = valid_name(unit)
        self._section = valid_name(section)
        self._name = valid_name(name)

        self._source_file = ""
        self._function = ""
        self._line = 0
        self._message = ""
        self._priority = DEFAULT_PRIORITY
        self._manual_down = False
        self._state = FlagState.UP
        self._date: Optional[int] = None
        self._modified: Optional[int] = None
        self._count = 0
        self._tags: Set[str] = set()
        self._hostname = ""
        self._version = ""
        self._filename: Optional[str] = None

    @classmethod
    def load(cls, filename: str, store: Optional["FlagStore"] = None) -> "Flag":
        """
        Load a flag from its record file.

        The returned flag keeps ``filename`` as its filename whether or not
        it matches the unit, section and name found in the record.

        Raises:
            InvalidParameter: If ``filename`` is empty, or the record is
                missing one of ``unit``, ``section``, ``name``, ``message``
        """
        from .flag_store import get_flag_store

        return (store or get_flag_store()).load(filename)

    def __repr__(self) -> str:
        return (
            f"Flag(unit={self._unit!r}, section={self._section!r}, name={self._name!r},"
            f" state={self._state.name}, priority={self._priority}, count={self._count})"
        )

    # Setters

    def set_state(self, state: FlagState) -> "Flag":
        """Set UP to raise the flag on the next save, DOWN to clear it."""
        self._state = FlagState(state)
        return self

    def set_source_file(self, source_file: str) -> "Flag":
        self._source_file = source_file
        return self

    def set_function(self, function: str) -> "Flag":
        self._function = function
        return self

    def set_line(self, line: int) -> "Flag":
        """Set the line raising the flag; 0 means no line was defined."""
        self._line = int(line)
        return self

    def set_message(self, message: str) -> "Flag":
        """Set the plain text message explaining the problem. It may span lines."""
        self._message = message
        return self

    def set_priority(self, priority: int) -> "Flag":
        """
        Set the priority, clamped to [0, 100].

        The default is 5. A priority of 50 or more is meant to reach the
        administrators by email, so values close to 100 should be rare.
        """
        self._priority = max(MIN_PRIORITY, min(MAX_PRIORITY, int(priority)))
        return self

    def set_manual_down(self, manual: bool) -> "Flag":
        """Mark the flag as one that automated checks never take down."""
        self._manual_down = bool(manual)
        return self

    def add_tag(self, tag: str) -> "Flag":
        """
        Add a tag grouping this flag with flags of other units or sections.

        Raises:
            InvalidName: If the tag does not match the name grammar
        """
        self._tags.add(valid_name(tag))
        return self

    # Getters

    def get_unit(self) -> str:
        return self._unit

    def get_section(self) -> str:
        return self._section

    def get_name(self) -> str:
        return self._name

    def get_source_file(self) -> str:
        return self._source_file

    def get_function(self) -> str:
        return self._function

    def get_line(self) -> int:
        return self._line

    def get_message(self) -> str:
        return self._message

    def get_priority(self) -> int:
        return self._priority

    def get_manual_down(self) -> bool:
        return self._manual_down

    def get_state(self) -> FlagState:
        return self._state

    def get_date(self) -> Optional[int]:
        """Get when the flag was first raised (Unix time), None if never saved."""
        return self._date

    def get_modified(self) -> Optional[int]:
        """Get when the flag was last raised (Unix time), None if never saved."""
        return self._modified

    def get_count(self) -> int:
        """Get how many times the flag was raised. Starts at 0 before the first save."""
        return self._count

    def get_tags(self) -> FrozenSet[str]:
        return frozenset(self._tags)

    def get_hostname(self) -> str:
        return self._hostname

    def get_version(self) -> str:
        return self._version

    def get_filename(self, directory: Optional[FlagsDirectory] = None) -> Optional[str]:
        """
        Get the record filename of this flag.

        The filename is ``<flags-dir>/<unit>_<section>_<name>.flag``. It is
        computed on the first call and kept afterward, so the backing file
        never moves during the life of this object.

        Args:
            directory: Flags directory to use on the first call, defaults to
                the process-wide one

        Returns:
            The filename, or None if the flags directory is unavailable
        """
        if self._filename is None:
            path = (directory or get_flags_directory()).get_path()
            if path:
                self._filename = f"{path}/{self.get_basename()}"
        return self._filename

    def get_basename(self) -> str:
        return f"{self._unit}_{self._section}_{self._name}{FLAG_FILE_EXTENSION}"

    def save(self, store: Optional["FlagStore"] = None) -> bool:
        """
        Raise (UP) or clear (DOWN) the flag on disk.

        Returns:
            True on success, False if the record could not be written or
            deleted, or if the flags directory is unavailable
        """
        from .flag_store import get_flag_store

        return (store or get_flag_store()).save(self)

    # Used by FlagStore to mirror what is on disk

    def _bind_filename(self, filename: str) -> None:
        self._filename = filename

    def _set_persisted(
        self,
        date: Optional[int],
        modified: Optional[int],
        count: int,
        hostname: str,
        version: str,
    ) -> None:
        self._date = date
        self._modified = modified
        self._count = count
        self._hostname = hostname
        self._version = version
