"""Package initializer for communicatord.

Exports the flag registry public API.
"""

from .exceptions import FlagError, InvalidName, InvalidParameter
from .flags import Flag, FlagRegistry, FlagState, FlagStore, flag_down, flag_up, load_flags, valid_name

__all__ = [
    "FlagError",
    "InvalidName",
    "InvalidParameter",
    "Flag",
    "FlagRegistry",
    "FlagState",
    "FlagStore",
    "flag_down",
    "flag_up",
    "load_flags",
    "valid_name",
]
