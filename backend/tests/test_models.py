"""
Unit tests for session models: title derivation and the persisted format.
"""

import json
import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from chatdesk.models.session import (
    NEW_CHAT_TITLE, ChatSession, ChatTurn, derive_title, dump_sessions, load_sessions,
)


class TestDeriveTitle:
    """Tests for deriving a title from the first message."""

    def test_short_content_kept(self):
        assert derive_title("hi") == "hi"

    def test_exactly_thirty_chars_not_marked(self):
        content = "a" * 30
        assert derive_title(content) == content

    def test_long_content_truncated_with_ellipsis(self):
        content = "abcdefghijklmnopqrstuvwxyz0123456789"
        assert derive_title(content) == "abcdefghijklmnopqrstuvwxyz0123..."


class TestChatSession:
    """Tests for ChatSession.with_messages."""

    def test_defaults(self):
        session = ChatSession(id="s1")
        assert session.title == NEW_CHAT_TITLE
        assert session.messages == []
        assert session.updated_at is None

    def test_first_messages_set_title(self):
        session = ChatSession(id="s1")
        updated = session.with_messages([ChatTurn.user("What is the capital of France?")])
        assert updated.title == "What is the capital of France?"
        assert updated.updated_at is not None
        # Original is untouched
        assert session.title == NEW_CHAT_TITLE
        assert session.messages == []

    def test_title_derived_only_once(self):
        session = ChatSession(id="s1").with_messages([ChatTurn.user("first")])
        later = session.with_messages([ChatTurn.user("something else entirely")])
        assert later.title == "first"

    def test_title_kept_after_clear_and_resend(self):
        session = ChatSession(id="s1").with_messages([ChatTurn.user("first")])
        cleared = session.with_messages([])
        resent = cleared.with_messages([ChatTurn.user("second")])
        assert resent.title == "first"

    def test_sentinel_text_as_first_message_not_rederived(self):
        session = ChatSession(id="s1").with_messages([ChatTurn.user(NEW_CHAT_TITLE)])
        assert session.title == NEW_CHAT_TITLE
        assert session.title_derived is True

        resent = session.with_messages([]).with_messages([ChatTurn.user("second")])
        assert resent.title == NEW_CHAT_TITLE

    def test_derived_flag_survives_reload(self):
        session = ChatSession(id="s1").with_messages([ChatTurn.user(NEW_CHAT_TITLE)])
        restored = load_sessions(dump_sessions([session.with_messages([])]))[0]
        assert restored.title_derived is True
        assert restored.with_messages([ChatTurn.user("second")]).title == NEW_CHAT_TITLE

    def test_clearing_empty_session_keeps_sentinel(self):
        session = ChatSession(id="s1").with_messages([])
        assert session.title == NEW_CHAT_TITLE

    def test_turns_are_immutable(self):
        turn = ChatTurn.user("hi")
        with pytest.raises(ValidationError):
            turn.content = "changed"

    def test_summary(self):
        session = ChatSession(id="s1").with_messages(
            [ChatTurn.user("hi"), ChatTurn.assistant("hello")]
        )
        summary = session.summary()
        assert summary.id == "s1"
        assert summary.title == "hi"
        assert summary.message_count == 2


class TestPersistedFormat:
    """Tests for dump_sessions / load_sessions."""

    def test_round_trip_preserves_structure(self):
        sessions = [
            ChatSession(id="b").with_messages([
                ChatTurn.user("hi"),
                ChatTurn.assistant("Sorry", is_error=True),
            ]),
            ChatSession(id="a"),
        ]
        restored = load_sessions(dump_sessions(sessions))
        assert restored == sessions
        assert [s.id for s in restored] == ["b", "a"]
        assert restored[0].messages[1].is_error is True

    def test_camel_case_keys_and_optional_fields_omitted(self):
        session = ChatSession(id="a").with_messages([ChatTurn.user("hi")])
        data = json.loads(dump_sessions([session, ChatSession(id="b")]))
        assert set(data[0]) == {"id", "title", "messages", "createdAt", "updatedAt", "titleDerived"}
        assert set(data[0]["messages"][0]) == {"role", "content", "timestamp"}
        assert "updatedAt" not in data[1]
        assert "titleDerived" not in data[1]

    def test_loads_browser_style_blob(self):
        raw = json.dumps([{
            "id": "1718000000000",
            "title": "hi",
            "messages": [
                {"role": "user", "content": "hi", "timestamp": "2024-06-10T06:13:20.000Z"},
                {"role": "assistant", "content": "oops", "timestamp": "2024-06-10T06:13:21.000Z",
                 "isError": True},
            ],
            "createdAt": "2024-06-10T06:13:19.000Z",
            "updatedAt": "2024-06-10T06:13:21.000Z",
        }])
        sessions = load_sessions(raw)
        assert sessions[0].id == "1718000000000"
        assert sessions[0].messages[1].is_error is True
        assert sessions[0].created_at == datetime(2024, 6, 10, 6, 13, 19, tzinfo=timezone.utc)

    def test_malformed_blob_raises(self):
        with pytest.raises(ValidationError):
            load_sessions("{not json")
        with pytest.raises(ValidationError):
            load_sessions(json.dumps([{"title": "missing id"}]))
