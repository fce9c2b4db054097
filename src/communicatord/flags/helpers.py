"""
Helpers raising and clearing flags from detector code.

They fill in the source file, function and line of the caller so a flag can
be traced back to the check that raised it::

    flag = flag_up("core-plugins", "sendmail", "postfix-missing",
                   "The sendmail backend expects Postfix to be installed.")
    flag.set_priority(60).add_tag("mail").save()

    # once postfix is installed
    flag_down("core-plugins", "sendmail", "postfix-missing").save()

The helpers only build the Flag; nothing is written until ``save()``.
"""

import sys

from .flag import Flag, FlagState


def _caller_location(depth: int):
    frame = sys._getframe(depth + 1)
    code = frame.f_code
    return code.co_filename, code.co_name, frame.f_lineno


def flag_up(unit: str, section: str, name: str, message: str, _depth: int = 1) -> Flag:
    """Build an UP flag with the given message, located at the caller."""
    source_file, function, line = _caller_location(_depth)
    return (
        Flag(unit, section, name)
        .set_state(FlagState.UP)
        .set_message(message)
        .set_source_file(source_file)
        .set_function(function)
        .set_line(line)
    )


def flag_down(unit: str, section: str, name: str, _depth: int = 1) -> Flag:
    """Build a DOWN flag, located at the caller."""
    source_file, function, line = _caller_location(_depth)
    return (
        Flag(unit, section, name)
        .set_state(FlagState.DOWN)
        .set_source_file(source_file)
        .set_function(function)
        .set_line(line)
    )
