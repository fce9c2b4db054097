"""
Test fixtures for the communicatord test suite.
"""

from .environment import FakeClock, FakeHostIdentity, FakeVersionProvider
from .flag_files import DEFAULT_RECORD, write_numbered_records, write_record

__all__ = [
    "FakeClock",
    "FakeHostIdentity",
    "FakeVersionProvider",
    "DEFAULT_RECORD",
    "write_numbered_records",
    "write_record",
]
