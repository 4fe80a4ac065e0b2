"""
Unit tests for MessageLog: append, undo and clear.
"""

import pytest

from chatdesk.core import ACTION_CLEAR_SESSION
from chatdesk.models.session import ChatTurn


def turns(*contents):
    roles = ["user", "assistant"]
    return [ChatTurn(role=roles[i % 2], content=c) for i, c in enumerate(contents)]


class TestAppend:

    @pytest.mark.asyncio
    async def test_append_replaces_whole_list(self, store, message_log):
        await store.create()
        await message_log.append(turns("A", "B"))
        await message_log.append(turns("A", "B", "C"))
        assert [m.content for m in message_log.messages] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_append_to_named_session(self, store, message_log):
        background = await store.create()
        await store.create()
        assert await message_log.append(turns("X"), session_id=background.id) is True
        assert message_log.messages == []
        assert store.get(background.id).messages[0].content == "X"

    @pytest.mark.asyncio
    async def test_no_active_session_rejected(self, message_log):
        assert await message_log.append(turns("A")) is False
        assert await message_log.truncate_last_exchange() is False
        assert await message_log.clear("anything") is False
        assert message_log.messages == []


class TestTruncateLastExchange:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, 1])
    async def test_noop_below_two(self, store, message_log, count):
        await store.create()
        await message_log.append(turns(*"AB"[:count]))
        assert await message_log.truncate_last_exchange() is False
        assert len(message_log.messages) == count

    @pytest.mark.asyncio
    async def test_removes_last_pair(self, store, message_log):
        await store.create()
        await message_log.append(turns("A", "B", "C", "D"))
        assert await message_log.truncate_last_exchange() is True
        assert [(m.role, m.content) for m in message_log.messages] == [
            ("user", "A"), ("assistant", "B"),
        ]

    @pytest.mark.asyncio
    async def test_odd_length_removes_exactly_two(self, store, message_log):
        await store.create()
        await message_log.append(turns("A", "B", "C"))
        await message_log.truncate_last_exchange()
        assert [m.content for m in message_log.messages] == ["A"]

    @pytest.mark.asyncio
    async def test_undo_keeps_derived_title(self, store, message_log):
        await store.create()
        await message_log.append(turns("hello", "hi"))
        await message_log.truncate_last_exchange()
        assert store.active_session.title == "hello"


class TestClear:

    @pytest.mark.asyncio
    async def test_clear_requires_confirmation(self, store, message_log):
        await store.create()
        await message_log.append(turns("A", "B"))
        assert await message_log.clear(None) is False
        assert len(message_log.messages) == 2

    @pytest.mark.asyncio
    async def test_clear_with_token(self, store, message_log, gate):
        session = await store.create()
        await message_log.append(turns("A", "B"))
        token = gate.request(ACTION_CLEAR_SESSION, session.id).token
        assert await message_log.clear(token) is True
        assert message_log.messages == []
        assert store.active_session.title == "A"

    @pytest.mark.asyncio
    async def test_token_for_other_session_rejected(self, store, message_log, gate):
        other = await store.create()
        await store.create()
        await message_log.append(turns("A", "B"))
        token = gate.request(ACTION_CLEAR_SESSION, other.id).token
        assert await message_log.clear(token) is False
        assert len(message_log.messages) == 2
