"""
Cache module for messages waiting for their destination.
"""

from .message import Message
from .message_cache import CachedMessage, MessageCache, parse_cache_parameters

__all__ = ["Message", "CachedMessage", "MessageCache", "parse_cache_parameters"]
