"""
Shared test fixtures and configuration.
"""

import pytest
import os
from itertools import count
from unittest.mock import AsyncMock

# Set test environment variables before importing app modules
os.environ.setdefault("STORAGE_TYPE", "memory")
os.environ.setdefault("LOCAL_STORAGE_PATH", "/tmp/chatdesk_test_data")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_API_REQUESTS", "false")

from chatdesk.core import ConfirmationGate, SessionStore, MessageLog, CompletionOrchestrator  # noqa: E402
from chatdesk.llm.base import LLMProvider, LLMResponse  # noqa: E402
from chatdesk.storage import MemoryStorage  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def gate():
    return ConfirmationGate(ttl_seconds=60)


@pytest.fixture
def store(storage, gate):
    ids = count(1)
    return SessionStore(storage, gate, id_factory=lambda: f"chat-{next(ids)}")


@pytest.fixture
def message_log(store, gate):
    return MessageLog(store, gate)


@pytest.fixture
def provider():
    mock_provider = AsyncMock(spec=LLMProvider)
    mock_provider.chat_completion.return_value = LLMResponse(content="hello", model="test")
    return mock_provider


@pytest.fixture
def orchestrator(store, message_log, provider):
    return CompletionOrchestrator(store, message_log, llm_provider=provider, max_tokens=1000)
