"""
Cache of messages waiting for their destination.

When a message arrives for a service that is not connected yet, it is kept
here until the service shows up or the message times out. The sender
controls caching with the ``cache`` parameter of the message, a list of
``name[=value]`` entries separated by ``;``:

- ``cache=no``: drop the message instead of caching it
- ``cache=ttl=300``: keep the message for 300 seconds (default 60)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..constants import DEFAULT_CACHE_TTL
from ..interfaces.environment_interface import IClock, create_clock
from .message import Message

logger = logging.getLogger(__name__)


@dataclass
class CachedMessage:
    timeout_timestamp: int
    message: Message


def parse_cache_parameters(cache_value: str) -> Dict[str, str]:
    """
    Split the ``cache`` parameter of a message.

    An entry without ``=`` is recorded with the value ``"true"``. An entry
    with an empty name is logged and ignored.
    """
    params: Dict[str, str] = {}
    for entry in cache_value.split(";"):
        if not entry:
            continue
        name, sep, value = entry.partition("=")
        if not sep:
            params[entry] = "true"
        elif not name:
            logger.info(
                f'invalid cache parameter "{entry}"; expected "<name>[=<value>]";'
                ' "<name>" is missing, it cannot be empty.'
            )
        else:
            params[name] = value
    return params


class MessageCache:
    """
    Messages kept until delivered or timed out.

    Args:
        clock: Source of the current time
    """

    def __init__(self, clock: Optional[IClock] = None) -> None:
        self.clock = clock or create_clock()
        self._messages: List[CachedMessage] = []

    def __len__(self) -> int:
        return len(self._messages)

    def cache_message(self, msg: Message) -> bool:
        """
        Cache a message unless its ``cache`` parameter says ``no``.

        Returns:
            True if the message was cached
        """
        cache_value = msg.get_parameter("cache") if msg.has_parameter("cache") else ""
        if cache_value == "no":
            return False

        params = parse_cache_parameters(cache_value or "")

        ttl = DEFAULT_CACHE_TTL
        if "ttl" in params:
            try:
                ttl = int(params["ttl"])
            except ValueError:
                logger.error(f"cache TTL parameter is not a valid integer ({params['ttl']}).")

        self._messages.append(CachedMessage(self.clock.now() + ttl, msg))
        return True

    def remove_old_messages(self) -> None:
        """Drop the messages that timed out."""
        now = self.clock.now()
        self._messages = [m for m in self._messages if now <= m.timeout_timestamp]

    def process_messages(self, callback: Callable[[Message], bool]) -> None:
        """
        Offer each cached message to ``callback``.

        A message is removed when ``callback`` returns True (it was
        delivered) or when it timed out. The callback is called for timed
        out messages too.
        """
        now = self.clock.now()
        kept: List[CachedMessage] = []
        for cached in self._messages:
            if callback(cached.message) or now > cached.timeout_timestamp:
                continue
            kept.append(cached)
        self._messages = kept

    def get_messages(self) -> List[Message]:
        return [m.message for m in self._messages]
