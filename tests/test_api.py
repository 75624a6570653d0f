"""
Endpoint tests for /ask, /feedback, /reset and /health.
"""

from interviewer.main import app
from interviewer.services.interview_service import CANNED_REPLY, InterviewService, get_interview_service
from fastapi.testclient import TestClient
from interviewer.utils.audit import JsonlAuditor


def test_ask_success(client):
    response = client.post("/ask", json={"message": "I built a compiler in school"})
    assert response.status_code == 200
    data = response.json()
    assert data["reply"] == "Follow-up question #1"
    assert [m["role"] for m in data["history"]] == ["system", "user", "assistant"]


def test_ask_unrelated_returns_canned_reply(client):
    response = client.post("/ask", json={"message": "Let's chat instead"})
    assert response.status_code == 200
    assert response.json()["reply"] == CANNED_REPLY
    assert len(response.json()["history"]) == 1


def test_ask_without_message(client):
    for kwargs in ({"json": {}}, {"json": {"message": ""}}, {}):
        response = client.post("/ask", **kwargs)
        assert response.status_code == 200
        assert response.json()["reply"] == CANNED_REPLY


def test_ask_gateway_failure_is_500_without_detail(store, failing_gateway):
    service = InterviewService(store, failing_gateway)
    app.dependency_overrides[get_interview_service] = lambda: service
    try:
        response = TestClient(app).post("/ask", json={"message": "I know Kubernetes"})
    finally:
        app.dependency_overrides.pop(get_interview_service, None)
    assert response.status_code == 500
    assert response.json() == {"reply": "Error processing your request."}
    assert [m.role for m in store.snapshot()] == ["system", "user"]


def test_feedback_never_contains_system(client):
    assert client.get("/feedback").json() == {"history": []}
    client.post("/ask", json={"message": "I mentor juniors"})
    history = client.get("/feedback").json()["history"]
    assert [m["role"] for m in history] == ["user", "assistant"]
    assert history[0]["content"] == "I mentor juniors"


def test_reset(client, store):
    client.post("/ask", json={"message": "I mentor juniors"})
    response = client.post("/reset")
    assert response.status_code == 200
    assert response.json() == {"message": "Interview reset successfully."}
    assert len(store) == 1


def test_reset_then_unrelated_message_leaves_empty_feedback(client):
    client.post("/ask", json={"message": "I mentor juniors"})
    client.post("/reset")
    response = client.post("/ask", json={"message": "game time"})
    assert response.json()["reply"] == CANNED_REPLY
    assert client.get("/feedback").json() == {"history": []}


def test_health(client):
    data = client.get("/health").json()
    assert data["status"] == "ok"
    assert set(data["llm"]) == {"provider", "enabled"}


def test_ask_succeeds_when_audit_log_is_unwritable(store, gateway, tmp_path):
    service = InterviewService(store, gateway, audit=JsonlAuditor(str(tmp_path)))
    app.dependency_overrides[get_interview_service] = lambda: service
    try:
        response = TestClient(app).post("/ask", json={"message": "I know Kubernetes"})
    finally:
        app.dependency_overrides.pop(get_interview_service, None)
    assert response.status_code == 200
    assert response.json()["reply"] == "Follow-up question #1"
    assert [m.role for m in store.snapshot()] == ["system", "user", "assistant"]
