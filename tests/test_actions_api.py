import pytest
from starlette.testclient import TestClient

from app.main import app


ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}


@pytest.fixture
def client(server_db):
    return TestClient(app)


def test_actions_require_identity(client):
    response = client.post("/actions/createTopic", json={"name": "Space"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


def test_topic_round_trip_over_rest(client):
    created = client.post(
        "/actions/createTopic",
        json={"name": "Space", "isActive": True},
        headers=ALICE,
    )
    assert created.status_code == 200
    topic_id = created.json()["topic"]["id"]

    forbidden = client.post(
        "/actions/updateTopic",
        json={"id": topic_id, "name": "Astronomy"},
        headers=BOB,
    )
    assert forbidden.status_code == 404
    assert forbidden.json()["error"] == {
        "code": "NOT_FOUND",
        "message": "Topic not found.",
        "field": "id",
    }

    updated = client.post(
        "/actions/updateTopic",
        json={"id": topic_id, "description": "Stars"},
        headers=ALICE,
    )
    assert updated.json()["topic"]["name"] == "Space"
    assert updated.json()["topic"]["description"] == "Stars"

    listed = client.post("/actions/listTopics", headers=ALICE)
    assert listed.status_code == 200
    assert listed.json()["count"] == 1


def test_fact_and_state_over_rest(client):
    missing_topic = client.post(
        "/actions/createFact",
        json={"content": "The sun is a star", "topicId": 999},
        headers=ALICE,
    )
    assert missing_topic.status_code == 404

    created = client.post(
        "/actions/createFact",
        json={"content": "The sun is a star", "isActive": False},
        headers=ALICE,
    )
    fact_id = created.json()["fact"]["id"]

    active_only = client.post("/actions/listFacts", json={"includeInactive": False}, headers=ALICE)
    assert active_only.json()["facts"] == []

    with_inactive = client.post("/actions/listFacts", json={"includeInactive": True}, headers=ALICE)
    assert [fact["id"] for fact in with_inactive.json()["facts"]] == [fact_id]

    client.post(
        "/actions/updateUserFactState",
        json={"factId": fact_id, "seen": True, "seenAt": "2026-01-02T03:04:05Z"},
        headers=ALICE,
    )
    favorite = client.post(
        "/actions/updateUserFactState",
        json={"factId": fact_id, "isFavorite": True},
        headers=ALICE,
    )
    state = favorite.json()["state"]
    assert state["seen"] is True
    assert state["isFavorite"] is True

    favorites = client.post("/actions/listUserFactState", json={"onlyFavorites": True}, headers=ALICE)
    assert favorites.json()["count"] == 1


def test_create_request_over_rest(client):
    response = client.post(
        "/actions/createRequest",
        json={"prompt": "Five facts", "status": "failed", "output": {"error": "timeout"}},
        headers=ALICE,
    )

    assert response.status_code == 200
    assert response.json()["request"]["status"] == "failed"


def test_validation_errors_map_to_400(client):
    response = client.post(
        "/actions/createFact",
        json={"content": "x", "difficulty": "expert"},
        headers=ALICE,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert response.json()["error"]["field"] == "difficulty"


def test_unknown_body_fields_are_rejected(client):
    response = client.post(
        "/actions/createTopic",
        json={"name": "Space", "color": "blue"},
        headers=ALICE,
    )

    assert response.status_code == 422


def test_health_reports_tables(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"]["missing_tables"] == []


def test_seen_at_offset_over_rest_is_stored_as_utc(client):
    created = client.post("/actions/createFact", json={"content": "Offset fact"}, headers=ALICE)
    fact_id = created.json()["fact"]["id"]

    response = client.post(
        "/actions/updateUserFactState",
        json={"factId": fact_id, "seenAt": "2026-01-02T03:04:05+05:00"},
        headers=ALICE,
    )

    assert response.status_code == 200
    assert response.json()["state"]["seenAt"] == "2026-01-01T22:04:05"
