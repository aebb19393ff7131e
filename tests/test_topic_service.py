from core.context import ANONYMOUS_CONTEXT
from core.models import FactTopic
from core.services import fact_service


def test_create_topic_defaults(server_db, alice):
    result = fact_service.create_topic(name="Space", context=alice)

    assert result["status"] == "created"
    topic = result["topic"]
    assert topic["ownerId"] == "alice"
    assert topic["name"] == "Space"
    assert topic["isActive"] is True
    assert topic["description"] is None
    assert topic["createdAt"] == topic["updatedAt"]


def test_create_topic_requires_auth(server_db, db_session):
    result = fact_service.create_topic(name="Space", context=ANONYMOUS_CONTEXT)

    assert result["status"] == "error"
    assert result["error_code"] == "UNAUTHORIZED"
    assert db_session.query(FactTopic).count() == 0


def test_create_topic_rejects_blank_name(server_db, alice):
    result = fact_service.create_topic(name="  ", context=alice)

    assert result["error_code"] == "VALIDATION_ERROR"
    assert result["field"] == "name"


def test_update_topic_by_other_user_is_not_found(server_db, alice, bob):
    created = fact_service.create_topic(name="Space", context=alice)
    topic_id = created["topic"]["id"]

    result = fact_service.update_topic(id=topic_id, name="Astronomy", context=bob)

    assert result["status"] == "error"
    assert result["error_code"] == "NOT_FOUND"
    assert result["message"] == "Topic not found."

    listed = fact_service.list_topics(context=alice)
    assert listed["topics"][0]["name"] == "Space"


def test_update_topic_missing_id_is_not_found(server_db, alice):
    result = fact_service.update_topic(id=404, name="Nope", context=alice)

    assert result["error_code"] == "NOT_FOUND"


def test_update_topic_partial_keeps_other_fields(server_db, alice):
    created = fact_service.create_topic(
        name="Space",
        description="Stars and planets",
        slug="space",
        context=alice,
    )
    topic_id = created["topic"]["id"]

    result = fact_service.update_topic(id=topic_id, name="Astronomy", context=alice)

    assert result["status"] == "updated"
    topic = result["topic"]
    assert topic["name"] == "Astronomy"
    assert topic["description"] == "Stars and planets"
    assert topic["slug"] == "space"
    assert topic["isActive"] is True


def test_update_topic_without_fields_is_unchanged(server_db, alice):
    created = fact_service.create_topic(name="Space", context=alice)

    result = fact_service.update_topic(id=created["topic"]["id"], context=alice)

    assert result["status"] == "unchanged"
    assert result["topic"] == created["topic"]


def test_update_topic_can_deactivate(server_db, alice):
    created = fact_service.create_topic(name="Space", context=alice)

    result = fact_service.update_topic(
        id=created["topic"]["id"],
        is_active=False,
        context=alice,
    )

    assert result["status"] == "updated"
    assert result["topic"]["isActive"] is False


def test_list_topics_visibility(server_db, db_session, alice, bob):
    db_session.add(FactTopic(name="Shared", owner_id=None))
    db_session.commit()
    fact_service.create_topic(name="Alice topic", context=alice)
    fact_service.create_topic(name="Alice hidden", is_active=False, context=alice)
    fact_service.create_topic(name="Bob topic", context=bob)

    names = {topic["name"] for topic in fact_service.list_topics(context=alice)["topics"]}
    assert names == {"Shared", "Alice topic"}

    names = {
        topic["name"]
        for topic in fact_service.list_topics(include_inactive=True, context=alice)["topics"]
    }
    assert names == {"Shared", "Alice topic", "Alice hidden"}

    bob_topics = fact_service.list_topics(include_inactive=True, context=bob)["topics"]
    assert all(topic["ownerId"] in (None, "bob") for topic in bob_topics)


def test_shared_topic_is_not_mutable(server_db, db_session, alice):
    shared = FactTopic(name="Shared", owner_id=None)
    db_session.add(shared)
    db_session.commit()

    result = fact_service.update_topic(id=shared.id, name="Mine now", context=alice)

    assert result["error_code"] == "NOT_FOUND"
