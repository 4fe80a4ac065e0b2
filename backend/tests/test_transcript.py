"""
Unit tests for transcript rendering.
"""

from chatdesk.core.transcript import render_transcript, split_fragments
from chatdesk.models.session import ChatTurn


class TestSplitFragments:

    def test_plain_text(self):
        fragments = split_fragments("just text")
        assert len(fragments) == 1
        assert fragments[0].kind == "text"
        assert fragments[0].content == "just text"

    def test_code_block_with_language(self):
        fragments = split_fragments("Try this:\n```python\nprint('hi')\n```\nDone.")
        assert [f.kind for f in fragments] == ["text", "code", "text"]
        assert fragments[1].language == "python"
        assert fragments[1].content == "print('hi')\n"
        assert fragments[2].content == "\nDone."

    def test_code_block_without_language(self):
        fragments = split_fragments("```\nls -la\n```")
        assert fragments[1].kind == "code"
        assert fragments[1].language is None
        assert fragments[1].content == "ls -la\n"

    def test_unterminated_fence_is_code(self):
        fragments = split_fragments("before ```js\nlet x = 1;")
        assert [f.kind for f in fragments] == ["text", "code"]
        assert fragments[1].content == "let x = 1;"


class TestRenderTranscript:

    def test_one_rendered_turn_per_turn(self):
        turns = [
            ChatTurn.user("hi"),
            ChatTurn.assistant("Sorry", is_error=True),
        ]
        rendered = render_transcript(turns)
        assert [r.role for r in rendered] == ["user", "assistant"]
        assert rendered[0].is_error is False
        assert rendered[1].is_error is True
        assert rendered[0].timestamp == turns[0].timestamp
