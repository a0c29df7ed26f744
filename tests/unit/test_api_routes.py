from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.interview_routes import router
from storage.results import recent_fit_results

CREATOR_PATH = ["create-something", "creative-work", "solo-creative", "made-something", "innovative"]


def _client() -> TestClient:
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


def test_questions_and_categories_catalog():
    client = _client()
    questions = client.get("/api/fit-interview/questions").json()
    assert [q["id"] for q in questions] == ["hobby", "content", "work-style", "achievement", "describes-you"]
    categories = client.get("/api/fit-interview/categories").json()
    assert list(categories) == ["creator", "explorer", "helper", "analyzer", "socializer"]


def test_score_endpoint_is_pure():
    client = _client()
    payload = client.post("/api/fit-interview/score", json={"answers": CREATOR_PATH}).json()
    assert payload["top_category"] == "creator"
    assert payload["category_scores"]["creator"] == 25
    assert payload["top_category_info"]["title"] == "The Creator"
    assert recent_fit_results() == []


def test_session_cycle_records_result():
    client = _client()
    state = client.post("/api/fit-interview/sessions").json()
    session_id = state["session_id"]
    assert state["phase"] == "asking"
    assert state["question"]["id"] == "hobby"
    assert state["can_go_back"] is False
    assert state["transition_delay_ms"] == 300

    for option_id in CREATOR_PATH:
        state = client.post(
            f"/api/fit-interview/sessions/{session_id}/select", json={"option_id": option_id}
        ).json()
        assert state["accepted"] is True

    assert state["phase"] == "results"
    assert state["question"] is None
    assert state["result"]["top_category"] == "creator"

    rows = recent_fit_results()
    assert len(rows) == 1
    assert rows[0]["session_id"] == session_id
    assert rows[0]["answers"] == CREATOR_PATH

    again = client.get(f"/api/fit-interview/sessions/{session_id}").json()
    assert again["phase"] == "results"


def test_back_and_restart():
    client = _client()
    session_id = client.post("/api/fit-interview/sessions").json()["session_id"]
    base = f"/api/fit-interview/sessions/{session_id}"

    noop = client.post(f"{base}/back").json()
    assert noop["accepted"] is False

    client.post(f"{base}/select", json={"option_id": "learn-new"})
    state = client.post(f"{base}/back").json()
    assert state["accepted"] is True
    assert state["answers"] == []
    assert state["question_index"] == 0

    client.post(f"{base}/select", json={"option_id": "hang-out"})
    state = client.post(f"{base}/restart").json()
    assert state["answers"] == []
    assert state["question_index"] == 0


def test_invalid_option_and_unknown_session():
    client = _client()
    session_id = client.post("/api/fit-interview/sessions").json()["session_id"]
    resp = client.post(f"/api/fit-interview/sessions/{session_id}/select", json={"option_id": "friendly"})
    assert resp.status_code == 422

    assert client.get("/api/fit-interview/sessions/not-a-session").status_code == 404
    assert client.get("/api/fit-interview/sessions/00000000-0000-0000-0000-000000000000").status_code == 404
