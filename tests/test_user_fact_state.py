from datetime import datetime, timedelta, timezone

from core.models import UserFactState
from core.services import fact_service


def _fact_id(context, content="The sun is a star"):
    return fact_service.create_fact(content=content, context=context)["fact"]["id"]


def test_first_update_inserts_with_defaults(server_db, alice):
    fact_id = _fact_id(alice)

    result = fact_service.update_user_fact_state(fact_id=fact_id, context=alice)

    assert result["status"] == "ok"
    state = result["state"]
    assert state["userId"] == "alice"
    assert state["factId"] == fact_id
    assert state["seen"] is False
    assert state["seenAt"] is None
    assert state["isFavorite"] is False
    assert state["reaction"] == "none"


def test_sequential_updates_merge(server_db, db_session, alice):
    fact_id = _fact_id(alice)

    first = fact_service.update_user_fact_state(fact_id=fact_id, seen=True, context=alice)
    second = fact_service.update_user_fact_state(fact_id=fact_id, is_favorite=True, context=alice)

    state = second["state"]
    assert state["seen"] is True
    assert state["isFavorite"] is True
    assert state["id"] == first["state"]["id"]
    assert state["createdAt"] == first["state"]["createdAt"]
    assert db_session.query(UserFactState).count() == 1


def test_identical_updates_are_idempotent(server_db, db_session, alice):
    fact_id = _fact_id(alice)
    kwargs = {
        "fact_id": fact_id,
        "seen": True,
        "seen_at": "2026-01-02T03:04:05",
        "reaction": "mind_blown",
    }

    fact_service.update_user_fact_state(**kwargs, context=alice)
    second = fact_service.update_user_fact_state(**kwargs, context=alice)

    assert db_session.query(UserFactState).count() == 1
    state = second["state"]
    assert state["seen"] is True
    assert state["seenAt"].startswith("2026-01-02T03:04:05")
    assert state["reaction"] == "mind_blown"
    assert state["isFavorite"] is False


def test_explicit_false_overrides_stored_value(server_db, alice):
    fact_id = _fact_id(alice)
    fact_service.update_user_fact_state(fact_id=fact_id, is_favorite=True, reaction="love", context=alice)

    result = fact_service.update_user_fact_state(fact_id=fact_id, is_favorite=False, context=alice)

    assert result["state"]["isFavorite"] is False
    assert result["state"]["reaction"] == "love"


def test_states_are_per_user(server_db, db_session, alice, bob):
    fact_id = _fact_id(alice)

    fact_service.update_user_fact_state(fact_id=fact_id, seen=True, context=alice)
    bob_state = fact_service.update_user_fact_state(fact_id=fact_id, context=bob)

    assert bob_state["state"]["seen"] is False
    assert db_session.query(UserFactState).count() == 2


def test_missing_fact_is_not_found(server_db, db_session, alice):
    result = fact_service.update_user_fact_state(fact_id=999, seen=True, context=alice)

    assert result["error_code"] == "NOT_FOUND"
    assert result["message"] == "Fact not found."
    assert db_session.query(UserFactState).count() == 0


def test_invalid_reaction_and_seen_at(server_db, alice):
    fact_id = _fact_id(alice)

    bad_reaction = fact_service.update_user_fact_state(fact_id=fact_id, reaction="wow", context=alice)
    assert bad_reaction["error_code"] == "VALIDATION_ERROR"
    assert bad_reaction["field"] == "reaction"

    bad_seen_at = fact_service.update_user_fact_state(fact_id=fact_id, seen_at="yesterday", context=alice)
    assert bad_seen_at["field"] == "seenAt"


def test_seen_at_accepts_datetime(server_db, alice):
    fact_id = _fact_id(alice)
    seen_at = datetime(2026, 3, 4, 5, 6, 7)

    result = fact_service.update_user_fact_state(fact_id=fact_id, seen=True, seen_at=seen_at, context=alice)

    assert result["state"]["seenAt"] == seen_at.isoformat()


def test_list_user_fact_state(server_db, alice, bob):
    first = _fact_id(alice, "one")
    second = _fact_id(alice, "two")
    fact_service.update_user_fact_state(fact_id=first, seen=True, context=alice)
    fact_service.update_user_fact_state(fact_id=second, is_favorite=True, context=alice)
    fact_service.update_user_fact_state(fact_id=first, is_favorite=True, context=bob)

    everything = fact_service.list_user_fact_state(context=alice)
    assert everything["count"] == 2
    assert all(state["userId"] == "alice" for state in everything["states"])

    favorites = fact_service.list_user_fact_state(only_favorites=True, context=alice)
    assert [state["factId"] for state in favorites["states"]] == [second]


def test_seen_at_with_offset_is_stored_as_utc(server_db, alice):
    fact_id = _fact_id(alice)

    result = fact_service.update_user_fact_state(
        fact_id=fact_id,
        seen=True,
        seen_at="2026-01-02T03:04:05+05:00",
        context=alice,
    )

    assert result["state"]["seenAt"] == "2026-01-01T22:04:05"


def test_aware_datetime_seen_at_is_stored_as_utc(server_db, alice):
    fact_id = _fact_id(alice)
    seen_at = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=-3)))

    result = fact_service.update_user_fact_state(fact_id=fact_id, seen_at=seen_at, context=alice)

    assert result["state"]["seenAt"] == "2026-01-02T06:04:05"
