"""
Tests for the cache of messages waiting for their destination.
"""

import logging

import pytest

from communicatord.cache import Message, MessageCache, parse_cache_parameters

from tests.fixtures import FakeClock


def make_message(command="PING", **parameters):
    return Message(command, {k: str(v) for k, v in parameters.items()})


class TestParseCacheParameters:
    def test_name_value_pairs(self):
        assert parse_cache_parameters("ttl=30;reply") == {"ttl": "30", "reply": "true"}

    def test_empty_entries_are_skipped(self):
        assert parse_cache_parameters(";;ttl=30;") == {"ttl": "30"}

    def test_missing_name_is_logged(self, caplog):
        with caplog.at_level(logging.INFO):
            assert parse_cache_parameters("=30") == {}

        assert "cannot be empty" in caplog.text


class TestMessageCache:
    def setup_method(self):
        self.clock = FakeClock(start=1000)
        self.cache = MessageCache(clock=self.clock)

    def test_cache_no(self):
        assert self.cache.cache_message(make_message(cache="no")) is False
        assert len(self.cache) == 0

    def test_default_ttl(self):
        self.cache.cache_message(make_message())

        self.clock.advance(60)
        self.cache.remove_old_messages()
        assert len(self.cache) == 1

        self.clock.advance(1)
        self.cache.remove_old_messages()
        assert len(self.cache) == 0

    def test_custom_ttl(self):
        self.cache.cache_message(make_message(cache="ttl=300"))

        self.clock.advance(200)
        self.cache.remove_old_messages()

        assert len(self.cache) == 1

    def test_invalid_ttl_keeps_default(self, caplog):
        with caplog.at_level(logging.ERROR):
            self.cache.cache_message(make_message(cache="ttl=soon"))

        assert "not a valid integer" in caplog.text
        self.clock.advance(61)
        self.cache.remove_old_messages()
        assert len(self.cache) == 0

    @pytest.mark.parametrize("ttl", [5, 100000])
    def test_integer_ttl_is_applied_as_given(self, ttl):
        self.cache.cache_message(make_message(cache=f"ttl={ttl}"))

        self.clock.advance(ttl)
        self.cache.remove_old_messages()
        assert len(self.cache) == 1

    def test_process_messages_removes_delivered(self):
        self.cache.cache_message(make_message("FIRST"))
        self.cache.cache_message(make_message("SECOND"))
        seen = []

        def deliver(msg):
            seen.append(msg.command)
            return msg.command == "FIRST"

        self.cache.process_messages(deliver)

        assert seen == ["FIRST", "SECOND"]
        assert [m.command for m in self.cache.get_messages()] == ["SECOND"]

    def test_process_messages_removes_timed_out(self):
        self.cache.cache_message(make_message("OLD", cache="ttl=10"))
        self.cache.cache_message(make_message("NEW"))
        self.clock.advance(11)

        self.cache.process_messages(lambda msg: False)

        assert [m.command for m in self.cache.get_messages()] == ["NEW"]


class TestMessage:
    def test_parameters(self):
        msg = Message("STATUS").add_parameter("count", 3)

        assert msg.has_parameter("count")
        assert msg.get_parameter("count") == "3"
        assert msg.get_parameter("missing") is None
