"""
Persistent health flags.

This package provides the flag registry with separated concerns:
- valid_name: Grammar shared by units, sections, names and tags
- Flag: The flag value object
- FlagStore: Saving and loading one flag record
- FlagRegistry: Loading every raised flag, with an overflow guard
- flag_up / flag_down: Helpers building flags located at the caller
"""

from .name_validator import valid_name, is_valid_name
from .flag import Flag, FlagState
from .flag_directory import (
    FlagsDirectory,
    get_flags_directory,
    set_flags_directory,
    reset_flags_directory,
)
from .flag_store import FlagStore, get_flag_store, set_flag_store, reset_flag_store
from .flag_registry import FlagRegistry, load_flags
from .helpers import flag_up, flag_down

__all__ = [
    "valid_name",
    "is_valid_name",
    "Flag",
    "FlagState",
    "FlagsDirectory",
    "get_flags_directory",
    "set_flags_directory",
    "reset_flags_directory",
    "FlagStore",
    "get_flag_store",
    "set_flag_store",
    "reset_flag_store",
    "FlagRegistry",
    "load_flags",
    "flag_up",
    "flag_down",
]
