"""Tests for Message and Thread."""

from __future__ import annotations

import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from relay import Message, Thread
from tests.strategies import messages


class TestMessage:
    def test_str_renders_role_and_text(self):
        assert str(Message(role="user", text="Hello")) == "user: Hello"

    def test_is_frozen(self):
        message = Message(role="user", text="Hello")
        with pytest.raises(dataclasses.FrozenInstanceError):
            message.text = "changed"  # type: ignore[misc]

    def test_tool_output_role(self):
        message = Message.tool_output("search", "sunny")
        assert message.role == "search_output"
        assert message.text == "sunny"
        assert message.is_tool_output

    def test_conversational_role_is_not_tool_output(self):
        assert not Message(role="assistant", text="hi").is_tool_output


class TestThread:
    def test_empty(self):
        thread = Thread()
        assert len(thread) == 0
        assert not thread
        assert thread.last is None
        assert thread.messages == []

    def test_seeded_messages_keep_order(self):
        seed = [Message("user", "1"), Message("assistant", "2")]
        thread = Thread(seed)
        assert thread.messages == seed

    def test_seed_list_is_copied(self):
        seed = [Message("user", "1")]
        thread = Thread(seed)
        seed.append(Message("user", "2"))
        assert len(thread) == 1

    def test_append_returns_message_and_sets_last(self):
        thread = Thread()
        message = thread.append(Message("user", "hi"))
        assert message == Message("user", "hi")
        assert thread.last is message

    def test_remove_oldest_pops_head(self):
        thread = Thread([Message("user", "1"), Message("assistant", "2")])
        removed = thread.remove_oldest()
        assert removed == Message("user", "1")
        assert thread.messages == [Message("assistant", "2")]

    def test_remove_oldest_empty_raises(self):
        with pytest.raises(IndexError):
            Thread().remove_oldest()

    def test_messages_property_is_a_copy(self):
        thread = Thread([Message("user", "1")])
        snapshot = thread.messages
        snapshot.clear()
        assert len(thread) == 1

    def test_iteration_is_oldest_first(self):
        seed = [Message("user", str(i)) for i in range(5)]
        assert list(Thread(seed)) == seed

    def test_repr(self):
        assert repr(Thread([Message("user", "1")])) == "Thread(messages=1)"

    @given(st.lists(messages, max_size=30))
    def test_append_order_matches_call_order(self, appended):
        thread = Thread()
        for message in appended:
            thread.append(message)
        assert thread.messages == appended
        for stored, original in zip(thread, appended):
            assert stored.role == original.role
            assert stored.text == original.text
