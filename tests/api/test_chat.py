# tests/api/test_chat.py
import pytest

from api.routers import chat as chat_router
from api.services.chat import ChatUpstreamError


@pytest.fixture
def calls(monkeypatch):
    seen = []

    def fake_generate(message):
        seen.append(message)
        return "Tigers are the largest living cats."

    monkeypatch.setattr(chat_router, "generate_response", fake_generate)
    return seen


@pytest.mark.parametrize("body", [{"message": ""}, {"message": "   \n\t"}, {}, {"message": 5}, [1, 2]])
def test_blank_or_missing_message_is_400_without_upstream_call(client, calls, body):
    r = client.post("/api/chat", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Message is required."}
    assert calls == []


def test_invalid_json_is_400(client, calls):
    r = client.post(
        "/api/chat", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON body."}
    assert calls == []


def test_reply_relayed(client, calls):
    r = client.post("/api/chat", json={"message": "  How big do tigers get?  "})
    assert r.status_code == 200
    assert r.json() == {"response": "Tigers are the largest living cats."}
    assert calls == ["How big do tigers get?"]


def test_upstream_failure_is_502_without_detail(client, monkeypatch):
    def boom(message):
        raise ChatUpstreamError("401 invalid api key sk-secret")

    monkeypatch.setattr(chat_router, "generate_response", boom)
    r = client.post("/api/chat", json={"message": "Do owls migrate?"})
    assert r.status_code == 502
    assert r.json() == {"error": "Upstream provider error."}
    assert "sk-secret" not in r.text
