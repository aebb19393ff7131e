"""
Shared helpers and configuration for fact services.
"""

from __future__ import annotations

from datetime import datetime
from functools import wraps
from typing import Any, Callable, Optional

import core.config as config
from core.errors import (
    ERROR_NOT_FOUND,
    ERROR_UNAUTHORIZED,
    ServiceIssue,
    NotFound,
    ValidationIssue,
)
from core.models import Fact, FactRequest, FactTopic, UserFactState
from core.validators import (
    validate_required_text as _validate_required_text,
    validate_optional_text as _validate_optional_text,
    validate_id as _validate_id,
    validate_optional_id as _validate_optional_id,
    validate_optional_bool as _validate_optional_bool,
    validate_choice as _validate_choice,
    validate_metadata as _validate_metadata,
    parse_optional_datetime as _parse_optional_datetime,
)

# =============================================================================
# Configuration
# =============================================================================

logger = config.logger

MAX_TEXT_LENGTH = config.MAX_TEXT_LENGTH
MAX_SHORT_TEXT_LENGTH = config.MAX_SHORT_TEXT_LENGTH
MAX_URL_LENGTH = 1000


# =============================================================================
# Error handling
# =============================================================================

_ISSUE_LOG_EVENTS = {
    ERROR_NOT_FOUND: "tool_not_found",
    ERROR_UNAUTHORIZED: "tool_unauthorized",
}


def _tool_error_payload(tool_name: str, exc: ServiceIssue) -> dict:
    return {
        "status": "error",
        "error_code": exc.error_code,
        "error_type": exc.error_type,
        "tool": tool_name,
        "field": exc.field,
        "message": str(exc),
    }


def _log_service_issue(tool_name: str, exc: ServiceIssue, warn: bool = False) -> None:
    payload = {
        "tool": tool_name,
        "field": exc.field,
        "error_code": exc.error_code,
        "error_type": exc.error_type,
        "detail": str(exc),
    }
    event = _ISSUE_LOG_EVENTS.get(exc.error_code, "tool_validation_error")
    if warn:
        logger.warning(event, extra=payload)
    else:
        logger.info(event, extra=payload)


def _tool_error_handler(fn: Callable[..., dict]) -> Callable[..., dict]:
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except ServiceIssue as exc:
            _log_service_issue(fn.__name__, exc, warn=False)
            return _tool_error_payload(fn.__name__, exc)
        except ValueError as exc:
            issue = ValidationIssue(str(exc), field="unknown", error_type="value_error")
            _log_service_issue(fn.__name__, issue, warn=True)
            return _tool_error_payload(fn.__name__, issue)
    return wrapper


def service_tool(fn: Callable[..., dict]) -> Callable[..., dict]:
    return _tool_error_handler(fn)


# =============================================================================
# Lookups
# =============================================================================

def _require_topic_exists(db, topic_id: int) -> FactTopic:
    """Existence check only; topics are referenced regardless of owner."""
    topic = db.query(FactTopic).filter(FactTopic.id == topic_id).first()
    if not topic:
        raise NotFound("Topic not found.", field="topicId")
    return topic


def _require_fact_exists(db, fact_id: int) -> Fact:
    fact = db.query(Fact).filter(Fact.id == fact_id).first()
    if not fact:
        raise NotFound("Fact not found.", field="factId")
    return fact


def _provided_fields(**fields: Any) -> dict:
    """Drop omitted (None) fields so partial updates keep prior values."""
    return {key: value for key, value in fields.items() if value is not None}


# =============================================================================
# Serialization
# =============================================================================

def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _enum_value(value):
    return getattr(value, "value", value)


def _serialize_topic(topic: FactTopic) -> dict:
    return {
        "id": topic.id,
        "ownerId": topic.owner_id,
        "name": topic.name,
        "description": topic.description,
        "slug": topic.slug,
        "isActive": topic.is_active,
        "createdAt": _iso(topic.created_at),
        "updatedAt": _iso(topic.updated_at),
    }


def _serialize_fact(fact: Fact) -> dict:
    return {
        "id": fact.id,
        "topicId": fact.topic_id,
        "content": fact.content,
        "difficulty": _enum_value(fact.difficulty),
        "source": fact.source,
        "sourceMeta": fact.source_meta,
        "origin": _enum_value(fact.origin),
        "ownerId": fact.owner_id,
        "isActive": fact.is_active,
        "createdAt": _iso(fact.created_at),
        "updatedAt": _iso(fact.updated_at),
    }


def _serialize_request(request: FactRequest) -> dict:
    return {
        "id": request.id,
        "userId": request.user_id,
        "topicId": request.topic_id,
        "prompt": request.prompt,
        "input": request.input,
        "output": request.output,
        "status": _enum_value(request.status),
        "createdAt": _iso(request.created_at),
    }


def _serialize_state(state: UserFactState) -> dict:
    return {
        "id": state.id,
        "userId": state.user_id,
        "factId": state.fact_id,
        "seen": state.seen,
        "seenAt": _iso(state.seen_at),
        "isFavorite": state.is_favorite,
        "reaction": _enum_value(state.reaction),
        "createdAt": _iso(state.created_at),
        "updatedAt": _iso(state.updated_at),
    }


__all__ = [
    "logger",
    "service_tool",
    "MAX_TEXT_LENGTH",
    "MAX_SHORT_TEXT_LENGTH",
    "MAX_URL_LENGTH",
    "_validate_required_text",
    "_validate_optional_text",
    "_validate_id",
    "_validate_optional_id",
    "_validate_optional_bool",
    "_validate_choice",
    "_validate_metadata",
    "_parse_optional_datetime",
    "_require_topic_exists",
    "_require_fact_exists",
    "_provided_fields",
    "_serialize_topic",
    "_serialize_fact",
    "_serialize_request",
    "_serialize_state",
]
