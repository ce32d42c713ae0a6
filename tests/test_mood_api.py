from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from src.mood import MoodSummarizer
from src.server.app import create_app
from src.server.dependencies import get_ledger_service

ALICE = {"X-User-Id": "alice"}


def create_test_client(tmp_path, monkeypatch, ollama_client) -> TestClient:
    monkeypatch.setenv("DAYLOG_DB_PATH", str(tmp_path / "api_mood.db"))
    get_ledger_service.cache_clear()
    summarizer = MoodSummarizer(ollama_client=ollama_client)
    monkeypatch.setattr("src.server.routes.mood.get_mood_summarizer", lambda: summarizer)
    return TestClient(create_app())


def test_mood_returns_summarizer_text(tmp_path, monkeypatch):
    ollama_client = MagicMock()
    ollama_client.chat.return_value = "You're off to a great start!"
    client = create_test_client(tmp_path, monkeypatch, ollama_client)

    resp = client.post(
        "/api/mood",
        json={"activities": [{"id": 7, "name": "Run", "category": "Health", "duration": 30, "date": "2024-01-01"}]},
        headers=ALICE,
    )

    assert resp.status_code == 200
    assert resp.json() == {"mood": "You're off to a great start!"}
    messages = ollama_client.chat.call_args.args[0]
    assert "Run (30 mins, Health)" in messages[1]["content"]
    assert "1410 minutes remaining" in messages[1]["content"]


def test_mood_requires_activities(tmp_path, monkeypatch):
    ollama_client = MagicMock()
    client = create_test_client(tmp_path, monkeypatch, ollama_client)

    resp = client.post("/api/mood", json={"activities": []}, headers=ALICE)

    assert resp.status_code == 400
    ollama_client.chat.assert_not_called()


def test_mood_rejects_unknown_category(tmp_path, monkeypatch):
    client = create_test_client(tmp_path, monkeypatch, MagicMock())
    resp = client.post(
        "/api/mood",
        json={"activities": [{"name": "Run", "category": "Cardio", "duration": 30}]},
        headers=ALICE,
    )
    assert resp.status_code == 400


def test_mood_summarizer_failure_is_502(tmp_path, monkeypatch):
    ollama_client = MagicMock()
    ollama_client.chat.side_effect = ConnectionError("refused")
    client = create_test_client(tmp_path, monkeypatch, ollama_client)

    resp = client.post(
        "/api/mood",
        json={"activities": [{"name": "Run", "category": "Health", "duration": 30}]},
        headers=ALICE,
    )

    assert resp.status_code == 502
    assert resp.json()["detail"] == "Could not analyze your day."


def test_mood_for_stored_date(tmp_path, monkeypatch):
    ollama_client = MagicMock()
    ollama_client.chat.return_value = "Balanced!"
    client = create_test_client(tmp_path, monkeypatch, ollama_client)
    client.post(
        "/api/activities",
        json={"name": "Sleep", "category": "Sleep", "duration": 480, "date": "2024-01-01"},
        headers=ALICE,
    )
    client.post(
        "/api/activities",
        json={"name": "Work", "category": "Work", "duration": 960, "date": "2024-01-01"},
        headers=ALICE,
    )

    resp = client.get("/api/mood", params={"date": "2024-01-01"}, headers=ALICE)

    assert resp.json() == {"mood": "Balanced!"}
    prompt = ollama_client.chat.call_args.args[0][1]["content"]
    assert prompt.startswith("My completed day activities: Sleep (480 mins, Sleep), Work (960 mins, Work).")
