"""
Flag storage and retrieval.

Each flag maps to exactly one record file, a flat ``key=value`` text
document. Saving an UP flag creates the record or merges into the existing
one; saving a DOWN flag deletes it. A record therefore exists on disk if and
only if the last successful save of that unit/section/name was UP.

Saving is a read-modify-write: the existing ``date`` and ``count`` are read
first, then the whole record is rewritten. Two processes saving the same flag
at the same time can lose one ``count`` increment; processes are expected to
own distinct flags.
"""

import logging
import os
import shutil
from typing import Dict, Optional

from ..constants import BACKUP_EXTENSION
from ..exceptions import InvalidName, InvalidParameter
from ..interfaces.environment_interface import (
    IClock,
    IHostIdentity,
    IVersionProvider,
    create_clock,
    create_host_identity,
    create_version_provider,
)
from .flag import Flag, FlagState
from .flag_directory import FlagsDirectory, get_flags_directory

logger = logging.getLogger(__name__)

# Order in which the fields are written to a record
RECORD_FIELDS = (
    "unit",
    "section",
    "name",
    "source_file",
    "function",
    "line",
    "message",
    "priority",
    "manual_down",
    "date",
    "modified",
    "tags",
    "hostname",
    "count",
    "version",
)

MANDATORY_FIELDS = ("unit", "section", "name", "message")


def escape_value(value: str) -> str:
    """Escape a value so it fits on one line of a record."""
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace("\r", "\\r")


def unescape_value(value: str) -> str:
    """Reverse ``escape_value()``. Unknown escapes are kept as is."""
    if "\\" not in value:
        return value
    result = []
    chars = iter(value)
    for c in chars:
        if c != "\\":
            result.append(c)
            continue
        n = next(chars, "")
        if n == "n":
            result.append("\n")
        elif n == "r":
            result.append("\r")
        elif n == "\\":
            result.append("\\")
        else:
            result.append(c + n)
    return "".join(result)


def parse_record(text: str) -> Dict[str, str]:
    """
    Parse the content of a record file.

    Blank lines and lines starting with ``#`` are ignored. Whitespace around
    the key is dropped; the value is kept as written, up to the end of the
    line. A later definition of a key replaces an earlier one.
    """
    fields: Dict[str, str] = {}
    for number, line in enumerate(text.split("\n"), start=1):
        stripped = line.lstrip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition("=")
        key = key.strip()
        if not sep or not key:
            logger.warning(f"Ignoring malformed line {number} in flag record: {line!r}")
            continue
        fields[key] = unescape_value(value.rstrip("\r"))
    return fields


def format_record(fields: Dict[str, str]) -> str:
    """Format record fields, known fields first in their usual order."""
    keys = [k for k in RECORD_FIELDS if k in fields]
    keys.extend(k for k in fields if k not in RECORD_FIELDS)
    return "".join(f"{key}={escape_value(fields[key])}\n" for key in keys)


class FlagStore:
    """
    Saves flags to and loads flags from their record files.

    Args:
        directory: Flags directory used to name new records, defaults to the
            process-wide one
        clock: Source of ``date`` and ``modified``
        host_identity: Source of ``hostname``
        version_provider: Source of ``version``
    """

    def __init__(
        self,
        directory: Optional[FlagsDirectory] = None,
        clock: Optional[IClock] = None,
        host_identity: Optional[IHostIdentity] = None,
        version_provider: Optional[IVersionProvider] = None,
    ) -> None:
        self._directory = directory
        self.clock = clock or create_clock()
        self.host_identity = host_identity or create_host_identity()
        self.version_provider = version_provider or create_version_provider()

    @property
    def directory(self) -> FlagsDirectory:
        return self._directory or get_flags_directory()

    def read_record(self, filename: str) -> Optional[Dict[str, str]]:
        """
        Read a record file.

        Returns:
            The record fields, or None if the file does not exist

        Raises:
            OSError: If the file exists but cannot be read
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        try:
            with open(filename, "r", encoding="utf-8") as f:
                return parse_record(f.read())
        except FileNotFoundError:
            return None

    def save(self, flag: Flag) -> bool:
        """
        Raise or clear a flag depending on its state.

        Returns:
            True on success, False on any I/O failure or when the flags
            directory is unavailable
        """
        filename = flag.get_filename(self.directory)
        if not filename:
            logger.warning(
                f"Cannot save flag {flag.get_basename()}: the flags directory is not available"
            )
            return False

        if flag.get_state() == FlagState.UP:
            return self._raise(flag, filename)
        return self._clear(filename)

    def _raise(self, flag: Flag, filename: str) -> bool:
        # phase 1: read what the merge needs from the existing record
        try:
            existing = self.read_record(filename)
        except UnicodeDecodeError as e:
            logger.warning(f"Flag record {filename} is not readable text, replacing it: {e}")
            existing = {}
        except OSError as e:
            logger.error(f"Failed to read flag record {filename}: {e}")
            return False

        previous_date = previous_count = None
        if existing:
            previous_date = self._int_field(existing, "date", filename)
            previous_count = self._int_field(existing, "count", filename)

        # phase 2: write the full record
        now = self.clock.now()
        date = previous_date if previous_date is not None else now
        count = previous_count + 1 if previous_count is not None else 1
        hostname = self.host_identity.hostname()
        version = self.version_provider.current_version()

        fields = {
            "unit": flag.get_unit(),
            "section": flag.get_section(),
            "name": flag.get_name(),
            "source_file": flag.get_source_file(),
            "function": flag.get_function(),
            "line": str(flag.get_line()),
            "message": flag.get_message(),
            "priority": str(flag.get_priority()),
            "manual_down": "yes" if flag.get_manual_down() else "no",
            "date": str(date),
            "modified": str(now),
            "tags": ",".join(sorted(flag.get_tags())),
            "hostname": hostname,
            "count": str(count),
            "version": version,
        }

        try:
            self._write_record(filename, format_record(fields), existing is not None)
        except OSError as e:
            logger.error(f"Failed to save flag record {filename}: {e}")
            return False

        flag._set_persisted(date, now, count, hostname, version)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Raised flag {filename} (count={count})")
        return True

    def _write_record(self, filename: str, content: str, backup: bool) -> None:
        """Write a record, keeping the previous content in a ``.bak`` file."""
        tmp_filename = f"{filename}.tmp"
        try:
            with open(tmp_filename, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            if backup:
                shutil.copy2(filename, f"{filename}{BACKUP_EXTENSION}")
            os.replace(tmp_filename, filename)
        except OSError:
            try:
                os.unlink(tmp_filename)
            except OSError:
                pass
            raise

    def _clear(self, filename: str) -> bool:
        try:
            os.unlink(filename)
        except FileNotFoundError:
            # clearing a flag that is not raised always works
            return True
        except OSError as e:
            logger.error(f"Failed to delete flag record {filename}: {e}")
            return False
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Cleared flag {filename}")
        return True

    def load(self, filename: str) -> Flag:
        """
        Load a flag from a record file.

        Optional fields that are missing keep their defaults. Optional
        numeric fields that are not integers, and tags that do not match
        the name grammar, are skipped with a warning.

        Raises:
            InvalidParameter: If ``filename`` is empty, the file cannot be
                read, or one of the mandatory fields is missing
            InvalidName: If the unit, section or name of the record does not
                match the name grammar
        """
        if not filename:
            raise InvalidParameter(
                "the filename must be defined (i.e. not empty) when loading a flag from file"
            )

        try:
            record = self.read_record(filename) or {}
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidParameter(f"could not read flag file {filename}: {e}") from e

        missing = [field for field in MANDATORY_FIELDS if field not in record]
        if missing:
            raise InvalidParameter(
                f"flag file {filename} is missing {', '.join(missing)}; a flag file is expected"
                " to include a unit, section, and name field, along with a message field."
            )

        flag = Flag(record["unit"], record["section"], record["name"])
        flag.set_message(record["message"])
        flag.set_source_file(record.get("source_file", ""))
        flag.set_function(record.get("function", ""))

        line = self._int_field(record, "line", filename)
        if line is not None:
            flag.set_line(line)

        priority = self._int_field(record, "priority", filename)
        if priority is not None:
            flag.set_priority(priority)

        if "manual_down" in record:
            flag.set_manual_down(record["manual_down"] == "yes")

        for tag in record.get("tags", "").split(","):
            tag = tag.strip()
            if not tag:
                continue
            try:
                flag.add_tag(tag)
            except InvalidName as e:
                logger.warning(f"Ignoring invalid tag in flag file {filename}: {e}")

        flag._set_persisted(
            self._int_field(record, "date", filename),
            self._int_field(record, "modified", filename),
            self._int_field(record, "count", filename) or 0,
            record.get("hostname", ""),
            record.get("version", ""),
        )
        flag._bind_filename(filename)
        return flag

    @staticmethod
    def _int_field(record: Dict[str, str], key: str, filename: str) -> Optional[int]:
        if key not in record:
            return None
        try:
            return int(record[key])
        except ValueError:
            logger.warning(f"Ignoring non-numeric {key}={record[key]!r} in flag file {filename}")
            return None


_default_store: Optional[FlagStore] = None


def get_flag_store() -> FlagStore:
    """Get the process-wide flag store, creating it on first use."""
    global _default_store
    if _default_store is None:
        _default_store = FlagStore()
    return _default_store


def set_flag_store(store: FlagStore) -> None:
    global _default_store
    _default_store = store


def reset_flag_store() -> None:
    global _default_store
    _default_store = None
