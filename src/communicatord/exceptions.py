"""
Exceptions raised by the flag subsystem.

Validation problems are raised at the call that caused them. Persistence
problems are never raised; ``Flag.save()`` reports them by returning False.
"""


class FlagError(Exception):
    """Base class for flag errors."""

    pass


class InvalidName(FlagError, ValueError):
    """A unit, section, name, or tag does not match the flag name grammar."""

    pass


class InvalidParameter(FlagError, ValueError):
    """A flag load request is malformed (empty filename or incomplete record)."""

    pass
