"""
Shared validation helpers for FactGate services.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Type

from core.config import MAX_METADATA_BYTES
from core.errors import ValidationIssue


def validate_required_text(value: str, field: str, max_len: int) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationIssue(f"{field} must be a non-empty string", field=field, error_type="required")
    if len(value) > max_len:
        raise ValidationIssue(f"{field} exceeds max length {max_len}", field=field, error_type="max_length")


def validate_optional_text(value: Optional[str], field: str, max_len: int) -> None:
    if value is None:
        return
    if not isinstance(value, str):
        raise ValidationIssue(f"{field} must be a string", field=field, error_type="invalid_type")
    if len(value) > max_len:
        raise ValidationIssue(f"{field} exceeds max length {max_len}", field=field, error_type="max_length")


def validate_id(value: Any, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationIssue(f"{field} must be an integer", field=field, error_type="invalid_type")
    if value <= 0:
        raise ValidationIssue(f"{field} must be a positive integer", field=field, error_type="invalid_id")


def validate_optional_id(value: Any, field: str) -> None:
    if value is None:
        return
    validate_id(value, field)


def validate_optional_bool(value: Any, field: str) -> None:
    if value is None:
        return
    if not isinstance(value, bool):
        raise ValidationIssue(f"{field} must be a boolean", field=field, error_type="invalid_type")


def validate_choice(value: Any, field: str, enum_cls: Type[Enum]) -> Optional[Enum]:
    """Coerce ``value`` into ``enum_cls``; None passes through."""
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return value
    allowed = [member.value for member in enum_cls]
    if isinstance(value, str) and value in allowed:
        return enum_cls(value)
    raise ValidationIssue(
        f"{field} must be one of: {'|'.join(allowed)}",
        field=field,
        error_type="invalid_value",
    )


def validate_metadata(metadata: Any, field: str) -> None:
    if metadata is None:
        return
    try:
        size = len(json.dumps(metadata))
    except (TypeError, ValueError) as exc:
        raise ValidationIssue(f"{field} must be JSON-serializable", field=field, error_type="invalid_type") from exc
    if size > MAX_METADATA_BYTES:
        raise ValidationIssue(
            f"{field} exceeds max size {MAX_METADATA_BYTES} bytes",
            field=field,
            error_type="max_bytes",
        )


def _as_naive_utc(value: datetime) -> datetime:
    # Stored timestamps are naive UTC, like datetime.utcnow().
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_optional_datetime(value: Any, field: str) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_naive_utc(value)
    if isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValidationIssue(
                f"{field} must be an ISO-8601 datetime",
                field=field,
                error_type="invalid_datetime",
            ) from exc
        return _as_naive_utc(parsed)
    raise ValidationIssue(f"{field} must be a datetime", field=field, error_type="invalid_type")
