from __future__ import annotations

from fastapi.testclient import TestClient

from backend.app.main import app
from backend.app.status import ExtractionStatusStore, extraction_status_store

client = TestClient(app)

INBOX = (
    '<div role="main"><table class="F"><tbody>'
    '<tr class="zA zE" jsaction="mouseenter:a">'
    '<td><span class="yP" email="alice@example.com">Alice</span></td>'
    '<td><span class="bog">Standup</span><span class="y2"> - Notes from today. More later…</span></td>'
    '<td class="xW"><span>9:00 AM</span></td>'
    "</tr></tbody></table></div>"
)


def test_today_endpoint_returns_result_and_digest() -> None:
    resp = client.post("/api/today", json={"html": INBOX, "now": "2025-09-06T14:00:00"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["result"]["unread_count"] == 1
    assert body["result"]["messages"][0]["sender"] == "alice@example.com"
    assert body["digest"][0]["summary"] == ["Notes from today.", "More later"]

    status = client.get("/api/today/status").json()["status"]
    assert status["state"] == "done"
    assert status["summary"]["messages"] == 1


def test_today_endpoint_reports_unready_page() -> None:
    resp = client.post("/api/today", json={"html": "<p>Loading</p>"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is False
    assert body["result"]["messages"] == []
    assert client.get("/api/today/status").json()["status"]["state"] == "error"


def test_today_endpoint_rejects_empty_snapshot() -> None:
    assert client.post("/api/today", json={"html": "   "}).status_code == 400


def test_today_endpoint_refuses_parallel_scans() -> None:
    extraction_status_store.update(state="running")
    try:
        assert client.post("/api/today", json={"html": INBOX}).status_code == 409
    finally:
        extraction_status_store.update(state="idle")


def test_status_store_try_start_is_exclusive() -> None:
    store = ExtractionStatusStore()
    assert store.try_start("first") is True
    assert store.try_start("second") is False
    assert store.snapshot()["detail"] == "first"
