"""Shared fixtures: a fresh transcript and a scripted agent for every test."""

from typing import List, Optional, Sequence

import pytest
from fastapi.testclient import TestClient

from interviewer.config import INTERVIEWER_PROMPT
from interviewer.main import app
from interviewer.schemas import Message
from interviewer.services.agent_gateway import GatewayError
from interviewer.services.conversation_store import ConversationStore
from interviewer.services.interview_service import InterviewService, get_interview_service


class FakeGateway:
    """Stands in for the hosted model. Replies are consumed in order."""

    def __init__(self, replies: Optional[List[Optional[str]]] = None, error: Optional[Exception] = None):
        self.replies = list(replies or [])
        self.error = error
        self.calls: List[Sequence[Message]] = []
        self.provider = "fake"
        self.enabled = True

    async def invoke(self, messages: Sequence[Message]) -> Optional[str]:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return f"Follow-up question #{len(self.calls)}"


@pytest.fixture
def store():
    return ConversationStore(INTERVIEWER_PROMPT)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def failing_gateway():
    return FakeGateway(error=GatewayError("upstream unavailable"))


@pytest.fixture
def service(store, gateway):
    return InterviewService(store, gateway)


@pytest.fixture
def client(service):
    """API client wired to a private service instance."""
    app.dependency_overrides[get_interview_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_interview_service, None)
