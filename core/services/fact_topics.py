"""
Topic services.

Topics group facts ("Space", "History", ...). A topic without an owner is
shared with every user; owned topics are visible to and mutable by their
owner only.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import or_

from core.auth import require_user
from core.context import RequestContext
from core.db import open_session
from core.errors import NotFound
from core.models import FactTopic
from core.services.fact_shared import (
    _provided_fields,
    _serialize_topic,
    _validate_id,
    _validate_optional_bool,
    _validate_optional_text,
    _validate_required_text,
    MAX_SHORT_TEXT_LENGTH,
    MAX_TEXT_LENGTH,
    logger,
    service_tool,
)


def _visible_to(user_id: str):
    return or_(FactTopic.owner_id.is_(None), FactTopic.owner_id == user_id)


@service_tool
def create_topic(
    name: str,
    description: Optional[str] = None,
    slug: Optional[str] = None,
    is_active: Optional[bool] = None,
    context: Optional[RequestContext] = None,
) -> dict:
    """Create a topic owned by the caller."""
    user_id = require_user(context)
    _validate_required_text(name, "name", MAX_SHORT_TEXT_LENGTH)
    _validate_optional_text(description, "description", MAX_TEXT_LENGTH)
    _validate_optional_text(slug, "slug", MAX_SHORT_TEXT_LENGTH)
    _validate_optional_bool(is_active, "isActive")

    db = open_session()
    try:
        now = datetime.utcnow()
        topic = FactTopic(
            owner_id=user_id,
            name=name,
            description=description,
            slug=slug,
            is_active=True if is_active is None else is_active,
            created_at=now,
            updated_at=now,
        )
        db.add(topic)
        db.commit()
        db.refresh(topic)
        logger.info("topic_created", extra={"topic_id": topic.id, "owner_id": user_id})
        return {"status": "created", "topic": _serialize_topic(topic)}
    finally:
        db.close()


@service_tool
def update_topic(
    id: int,
    name: Optional[str] = None,
    description: Optional[str] = None,
    slug: Optional[str] = None,
    is_active: Optional[bool] = None,
    context: Optional[RequestContext] = None,
) -> dict:
    """
    Apply a partial update to one of the caller's topics.

    Omitted fields keep their stored values. Topics owned by someone else
    (or shared topics) are reported as not found.
    """
    user_id = require_user(context)
    _validate_id(id, "id")
    if name is not None:
        _validate_required_text(name, "name", MAX_SHORT_TEXT_LENGTH)
    _validate_optional_text(description, "description", MAX_TEXT_LENGTH)
    _validate_optional_text(slug, "slug", MAX_SHORT_TEXT_LENGTH)
    _validate_optional_bool(is_active, "isActive")

    db = open_session()
    try:
        topic = (
            db.query(FactTopic)
            .filter(FactTopic.id == id)
            .filter(FactTopic.owner_id == user_id)
            .first()
        )
        if not topic:
            raise NotFound("Topic not found.")

        changes = _provided_fields(
            name=name,
            description=description,
            slug=slug,
            is_active=is_active,
        )
        if not changes:
            return {"status": "unchanged", "topic": _serialize_topic(topic)}

        for key, value in changes.items():
            setattr(topic, key, value)
        topic.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(topic)
        logger.info(
            "topic_updated",
            extra={"topic_id": topic.id, "fields": sorted(changes)},
        )
        return {"status": "updated", "topic": _serialize_topic(topic)}
    finally:
        db.close()


@service_tool
def list_topics(
    include_inactive: bool = False,
    context: Optional[RequestContext] = None,
) -> dict:
    """List shared topics plus the caller's own."""
    user_id = require_user(context)
    _validate_optional_bool(include_inactive, "includeInactive")

    db = open_session()
    try:
        query = db.query(FactTopic).filter(_visible_to(user_id))
        if not include_inactive:
            query = query.filter(FactTopic.is_active.is_(True))
        topics = query.order_by(FactTopic.id).all()
        return {
            "status": "ok",
            "count": len(topics),
            "topics": [_serialize_topic(topic) for topic in topics],
        }
    finally:
        db.close()
