"""
Shared fixtures for request_agent tests.
"""
import threading
from typing import Any, List, Optional

import httpx
import pytest

from request_agent.config import AgentConfig
from request_agent.transport import HttpxTransport


class CallbackRecorder:
    """Completion callback that records every invocation."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.threads: List[threading.Thread] = []

    def __call__(self, response, data, error) -> None:
        self.calls.append((response, data, error))
        self.threads.append(threading.current_thread())

    @property
    def last(self) -> Optional[tuple]:
        return self.calls[-1] if self.calls else None


@pytest.fixture
def recorder():
    """Fresh callback recorder."""
    return CallbackRecorder()


@pytest.fixture
def sent_requests():
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def make_config(sent_requests):
    """Build an AgentConfig whose transport answers with handler."""
    clients = []

    def _make(handler, **kwargs: Any) -> AgentConfig:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(recording_handler))
        clients.append(client)
        kwargs.setdefault("verbose", False)
        return AgentConfig(transport=HttpxTransport(client=client), **kwargs)

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def json_config(make_config):
    """Config answering every request with {"a": 1} as application/json."""
    return make_config(lambda request: httpx.Response(200, json={"a": 1}))
