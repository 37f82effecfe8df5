import dataclasses

import pytest
from fastapi.testclient import TestClient

from conftest import text_response
from nexus_mentor import main
from nexus_mentor.prompts import CHAT_FAILURE_TEXT, SIMULATION_RAG
from nexus_mentor.router import MentorRouter


@pytest.fixture
def client(monkeypatch, test_settings, backend):
    monkeypatch.setattr(main, "settings", test_settings)
    monkeypatch.setattr(main, "router", MentorRouter(test_settings, backend_factory=backend.factory))
    return TestClient(main.app)


def test_health_reports_simulation_mode(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "mode": "simulation"}


def test_chat_without_key_simulates(client, backend):
    r = client.post("/chat", json={"message": "Tell me about RAG and search"})
    assert r.status_code == 200
    assert r.json() == {"text": SIMULATION_RAG, "grounding_chunks": None}
    assert backend.requests == []


def test_chat_header_key_goes_live(client, backend):
    backend.script.append(text_response("live answer"))
    r = client.post("/chat", json={"message": "hi", "use_search": True}, headers={"x-goog-api-key": "abc"})
    assert r.status_code == 200
    assert r.json()["text"] == "live answer"
    assert backend.credentials == ["abc"]
    assert backend.requests[0].model == "text-flash"


def test_chat_configured_key_is_used(monkeypatch, client, test_settings, backend):
    monkeypatch.setattr(main, "settings", dataclasses.replace(test_settings, gemini_api_key="server-key"))
    backend.script.append(RuntimeError("quota"))
    r = client.post("/chat", json={"message": "hi"})
    assert r.status_code == 200
    assert r.json()["text"] == CHAT_FAILURE_TEXT
    assert backend.credentials == ["server-key"]


def test_chat_rejects_empty_request(client):
    r = client.post("/chat", json={"message": ""})
    assert r.status_code == 422


def test_phase_image_placeholder(client):
    r = client.post("/images/phase", json={"phase_title": "MVP", "goal": "ship", "aspect_ratio": "1:1"})
    assert r.status_code == 200
    assert r.json()["image"].startswith("https://placehold.co/800x450/")


def test_edit_without_key_is_absent(client):
    r = client.post("/images/edit", json={"image": "aGk=", "edit_prompt": "brighter"})
    assert r.status_code == 200
    assert r.json() == {"image": None}


def test_metrics_exposes_router_counters(client):
    client.post("/chat", json={"message": "hello"})
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "nexus_mentor_router_calls_total" in r.text


def test_chat_accepts_long_messages(client):
    r = client.post("/chat", json={"message": "hello " * 5000})
    assert r.status_code == 200
