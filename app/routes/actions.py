"""
Named remote procedures: POST /actions/<operation>.

Bodies use camelCase field names; results are the service payloads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.context import RequestContext
from core.errors import ERROR_NOT_FOUND, ERROR_UNAUTHORIZED, ERROR_VALIDATION
from core.services import fact_service
from app.deps import get_request_context


router = APIRouter(prefix="/actions", tags=["actions"])

ERROR_STATUS_CODES = {
    ERROR_UNAUTHORIZED: 401,
    ERROR_NOT_FOUND: 404,
    ERROR_VALIDATION: 400,
}


class ActionInput(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class CreateTopicInput(ActionInput):
    name: str
    description: Optional[str] = None
    slug: Optional[str] = None
    is_active: Optional[bool] = None


class UpdateTopicInput(ActionInput):
    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    slug: Optional[str] = None
    is_active: Optional[bool] = None


class ListTopicsInput(ActionInput):
    include_inactive: bool = False


class CreateFactInput(ActionInput):
    content: str
    topic_id: Optional[int] = None
    difficulty: Optional[str] = None
    source: Optional[str] = None
    source_meta: Optional[Any] = None
    origin: Optional[str] = None
    is_active: Optional[bool] = None


class UpdateFactInput(ActionInput):
    id: int
    topic_id: Optional[int] = None
    content: Optional[str] = None
    difficulty: Optional[str] = None
    source: Optional[str] = None
    source_meta: Optional[Any] = None
    origin: Optional[str] = None
    is_active: Optional[bool] = None


class ListFactsInput(ActionInput):
    topic_id: Optional[int] = None
    include_inactive: bool = False


class CreateRequestInput(ActionInput):
    topic_id: Optional[int] = None
    prompt: Optional[str] = None
    input: Optional[Any] = None
    output: Optional[Any] = None
    status: Optional[str] = None


class UpdateUserFactStateInput(ActionInput):
    fact_id: int
    seen: Optional[bool] = None
    seen_at: Optional[datetime] = None
    is_favorite: Optional[bool] = None
    reaction: Optional[str] = None


class ListUserFactStateInput(ActionInput):
    only_favorites: bool = False


def _respond(result: dict):
    if result.get("status") != "error":
        return result
    return JSONResponse(
        status_code=ERROR_STATUS_CODES.get(result.get("error_code"), 400),
        content={
            "error": {
                "code": result.get("error_code"),
                "message": result.get("message"),
                "field": result.get("field"),
            }
        },
    )


def _call(operation: Callable[..., dict], body: Optional[ActionInput], context: RequestContext):
    fields = body.model_dump() if body is not None else {}
    return _respond(operation(**fields, context=context))


@router.post("/createTopic")
def create_topic(body: CreateTopicInput, context: RequestContext = Depends(get_request_context)):
    return _call(fact_service.create_topic, body, context)


@router.post("/updateTopic")
def update_topic(body: UpdateTopicInput, context: RequestContext = Depends(get_request_context)):
    return _call(fact_service.update_topic, body, context)


@router.post("/listTopics")
def list_topics(
    body: Optional[ListTopicsInput] = None,
    context: RequestContext = Depends(get_request_context),
):
    return _call(fact_service.list_topics, body, context)


@router.post("/createFact")
def create_fact(body: CreateFactInput, context: RequestContext = Depends(get_request_context)):
    return _call(fact_service.create_fact, body, context)


@router.post("/updateFact")
def update_fact(body: UpdateFactInput, context: RequestContext = Depends(get_request_context)):
    return _call(fact_service.update_fact, body, context)


@router.post("/listFacts")
def list_facts(
    body: Optional[ListFactsInput] = None,
    context: RequestContext = Depends(get_request_context),
):
    return _call(fact_service.list_facts, body, context)


@router.post("/createRequest")
def create_request(
    body: Optional[CreateRequestInput] = None,
    context: RequestContext = Depends(get_request_context),
):
    return _call(fact_service.create_request, body, context)


@router.post("/updateUserFactState")
def update_user_fact_state(
    body: UpdateUserFactStateInput,
    context: RequestContext = Depends(get_request_context),
):
    return _call(fact_service.update_user_fact_state, body, context)


@router.post("/listUserFactState")
def list_user_fact_state(
    body: Optional[ListUserFactStateInput] = None,
    context: RequestContext = Depends(get_request_context),
):
    return _call(fact_service.list_user_fact_state, body, context)
