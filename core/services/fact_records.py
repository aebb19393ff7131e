"""
Fact services.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import or_

from core.auth import require_user
from core.context import RequestContext
from core.db import open_session
from core.errors import NotFound
from core.models import Difficulty, Fact, FactOrigin
from core.services.fact_shared import (
    _provided_fields,
    _require_topic_exists,
    _serialize_fact,
    _validate_choice,
    _validate_id,
    _validate_metadata,
    _validate_optional_bool,
    _validate_optional_id,
    _validate_optional_text,
    _validate_required_text,
    MAX_TEXT_LENGTH,
    MAX_URL_LENGTH,
    logger,
    service_tool,
)


@service_tool
def create_fact(
    content: str,
    topic_id: Optional[int] = None,
    difficulty: Optional[str] = None,
    source: Optional[str] = None,
    source_meta: Optional[Any] = None,
    origin: Optional[str] = None,
    is_active: Optional[bool] = None,
    context: Optional[RequestContext] = None,
) -> dict:
    """
    Store a fact owned by the caller.

    Args:
        content: Fact text (required, non-empty)
        topic_id: Optional topic reference; the topic must exist
        difficulty: basic|intermediate|advanced (default basic)
        source: Optional source string (URL, book, ...)
        source_meta: Optional JSON-serializable source metadata
        origin: ai|user|curated (default ai)
        is_active: Default True

    Returns:
        The created fact
    """
    user_id = require_user(context)
    _validate_required_text(content, "content", MAX_TEXT_LENGTH)
    _validate_optional_id(topic_id, "topicId")
    difficulty_value = _validate_choice(difficulty, "difficulty", Difficulty)
    origin_value = _validate_choice(origin, "origin", FactOrigin)
    _validate_optional_text(source, "source", MAX_URL_LENGTH)
    _validate_metadata(source_meta, "sourceMeta")
    _validate_optional_bool(is_active, "isActive")

    db = open_session()
    try:
        if topic_id is not None:
            _require_topic_exists(db, topic_id)

        now = datetime.utcnow()
        fact = Fact(
            topic_id=topic_id,
            content=content,
            difficulty=difficulty_value or Difficulty.basic,
            source=source,
            source_meta=source_meta,
            origin=origin_value or FactOrigin.ai,
            owner_id=user_id,
            is_active=True if is_active is None else is_active,
            created_at=now,
            updated_at=now,
        )
        db.add(fact)
        db.commit()
        db.refresh(fact)
        logger.info(
            "fact_created",
            extra={"fact_id": fact.id, "topic_id": topic_id, "owner_id": user_id},
        )
        return {"status": "created", "fact": _serialize_fact(fact)}
    finally:
        db.close()


@service_tool
def update_fact(
    id: int,
    topic_id: Optional[int] = None,
    content: Optional[str] = None,
    difficulty: Optional[str] = None,
    source: Optional[str] = None,
    source_meta: Optional[Any] = None,
    origin: Optional[str] = None,
    is_active: Optional[bool] = None,
    context: Optional[RequestContext] = None,
) -> dict:
    """Apply a partial update to one of the caller's facts."""
    user_id = require_user(context)
    _validate_id(id, "id")
    _validate_optional_id(topic_id, "topicId")
    if content is not None:
        _validate_required_text(content, "content", MAX_TEXT_LENGTH)
    difficulty_value = _validate_choice(difficulty, "difficulty", Difficulty)
    origin_value = _validate_choice(origin, "origin", FactOrigin)
    _validate_optional_text(source, "source", MAX_URL_LENGTH)
    _validate_metadata(source_meta, "sourceMeta")
    _validate_optional_bool(is_active, "isActive")

    db = open_session()
    try:
        fact = (
            db.query(Fact)
            .filter(Fact.id == id)
            .filter(Fact.owner_id == user_id)
            .first()
        )
        if not fact:
            raise NotFound("Fact not found.")

        if topic_id is not None:
            _require_topic_exists(db, topic_id)

        changes = _provided_fields(
            topic_id=topic_id,
            content=content,
            difficulty=difficulty_value,
            source=source,
            source_meta=source_meta,
            origin=origin_value,
            is_active=is_active,
        )
        if not changes:
            return {"status": "unchanged", "fact": _serialize_fact(fact)}

        for key, value in changes.items():
            setattr(fact, key, value)
        fact.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(fact)
        logger.info(
            "fact_updated",
            extra={"fact_id": fact.id, "fields": sorted(changes)},
        )
        return {"status": "updated", "fact": _serialize_fact(fact)}
    finally:
        db.close()


@service_tool
def list_facts(
    topic_id: Optional[int] = None,
    include_inactive: bool = False,
    context: Optional[RequestContext] = None,
) -> dict:
    """List shared facts plus the caller's own, optionally for one topic."""
    user_id = require_user(context)
    _validate_optional_id(topic_id, "topicId")
    _validate_optional_bool(include_inactive, "includeInactive")

    db = open_session()
    try:
        query = db.query(Fact).filter(
            or_(Fact.owner_id.is_(None), Fact.owner_id == user_id)
        )
        if topic_id is not None:
            query = query.filter(Fact.topic_id == topic_id)
        if not include_inactive:
            query = query.filter(Fact.is_active.is_(True))
        facts = query.order_by(Fact.id).all()
        return {
            "status": "ok",
            "count": len(facts),
            "facts": [_serialize_fact(fact) for fact in facts],
        }
    finally:
        db.close()
