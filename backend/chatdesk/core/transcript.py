"""
Transcript rendering - Splits chat turns into text and fenced-code fragments.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

from ..models.session import ChatTurn

FENCE = "```"


class Fragment(BaseModel):
    kind: Literal["text", "code"]
    content: str
    language: Optional[str] = None


class RenderedTurn(BaseModel):
    role: str
    timestamp: datetime
    is_error: bool = False
    fragments: List[Fragment]


def split_fragments(content: str) -> List[Fragment]:
    """
    Split message text on triple backticks.

    Every odd-numbered part is a code block; its first line is the language
    tag (possibly empty) and the rest is the code.
    """
    fragments = []
    for index, part in enumerate(content.split(FENCE)):
        if index % 2 == 1:
            first_line, _, code = part.partition("\n")
            fragments.append(Fragment(
                kind="code",
                content=code,
                language=first_line.strip() or None,
            ))
        else:
            fragments.append(Fragment(kind="text", content=part))
    return fragments


def render_transcript(turns: List[ChatTurn]) -> List[RenderedTurn]:
    return [
        RenderedTurn(
            role=turn.role,
            timestamp=turn.timestamp,
            is_error=bool(turn.is_error),
            fragments=split_fragments(turn.content),
        )
        for turn in turns
    ]
