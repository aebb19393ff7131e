"""
Generation request log.

Each row records one "generate facts" job: what was asked, the payloads
exchanged with the generator, and how it ended. Nothing here runs the job.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from core.auth import require_user
from core.context import RequestContext
from core.db import open_session
from core.models import FactRequest, RequestStatus
from core.services.fact_shared import (
    _require_topic_exists,
    _serialize_request,
    _validate_choice,
    _validate_metadata,
    _validate_optional_id,
    _validate_optional_text,
    MAX_TEXT_LENGTH,
    logger,
    service_tool,
)


@service_tool
def create_request(
    topic_id: Optional[int] = None,
    prompt: Optional[str] = None,
    input: Optional[Any] = None,
    output: Optional[Any] = None,
    status: Optional[str] = None,
    context: Optional[RequestContext] = None,
) -> dict:
    """Append a generation request for the caller (status defaults to pending)."""
    user_id = require_user(context)
    _validate_optional_id(topic_id, "topicId")
    _validate_optional_text(prompt, "prompt", MAX_TEXT_LENGTH)
    _validate_metadata(input, "input")
    _validate_metadata(output, "output")
    status_value = _validate_choice(status, "status", RequestStatus)

    db = open_session()
    try:
        if topic_id is not None:
            _require_topic_exists(db, topic_id)

        request = FactRequest(
            user_id=user_id,
            topic_id=topic_id,
            prompt=prompt,
            input=input,
            output=output,
            status=status_value or RequestStatus.pending,
            created_at=datetime.utcnow(),
        )
        db.add(request)
        db.commit()
        db.refresh(request)
        logger.info(
            "fact_request_logged",
            extra={"request_id": request.id, "request_status": request.status.value},
        )
        return {"status": "created", "request": _serialize_request(request)}
    finally:
        db.close()
