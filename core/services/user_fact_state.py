"""
Per-user fact state services (seen / favorite / reaction).

State rows are keyed by (user_id, fact_id). Writes go through a single
INSERT ... ON CONFLICT DO UPDATE so concurrent calls for the same pair can
never produce a second row.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from core.auth import require_user
from core.context import RequestContext
from core.db import open_session
from core.models import Reaction, UserFactState
from core.services.fact_shared import (
    _parse_optional_datetime,
    _provided_fields,
    _require_fact_exists,
    _serialize_state,
    _validate_choice,
    _validate_id,
    _validate_optional_bool,
    logger,
    service_tool,
)


_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _dialect_insert(db):
    dialect_name = db.get_bind().dialect.name
    insert_fn = _DIALECT_INSERTS.get(dialect_name)
    if insert_fn is None:
        raise RuntimeError(f"Upsert not supported for dialect '{dialect_name}'")
    return insert_fn


def _upsert_state(db, user_id: str, fact_id: int, changes: dict, now: datetime) -> None:
    insert_values = {
        "user_id": user_id,
        "fact_id": fact_id,
        "seen": False,
        "seen_at": None,
        "is_favorite": False,
        "reaction": Reaction.none,
        "created_at": now,
        "updated_at": now,
    }
    insert_values.update(changes)

    insert_fn = _dialect_insert(db)
    stmt = insert_fn(UserFactState).values(**insert_values)
    # Only provided fields overwrite an existing row; created_at is kept.
    update_set = {key: getattr(stmt.excluded, key) for key in changes}
    update_set["updated_at"] = stmt.excluded.updated_at
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "fact_id"],
        set_=update_set,
    )
    db.execute(stmt)


@service_tool
def update_user_fact_state(
    fact_id: int,
    seen: Optional[bool] = None,
    seen_at: Optional[Union[datetime, str]] = None,
    is_favorite: Optional[bool] = None,
    reaction: Optional[str] = None,
    context: Optional[RequestContext] = None,
) -> dict:
    """
    Record the caller's state for a fact.

    Each field takes the provided value, else the stored value, else its
    default (seen=False, is_favorite=False, reaction="none", seen_at unset).

    Args:
        fact_id: Fact the state belongs to (must exist)
        seen: Whether the fact was shown to the user
        seen_at: When it was seen (datetime or ISO-8601 string)
        is_favorite: Starred / saved
        reaction: none|like|love|mind_blown|meh

    Returns:
        The stored state row
    """
    user_id = require_user(context)
    _validate_id(fact_id, "factId")
    _validate_optional_bool(seen, "seen")
    seen_at_value = _parse_optional_datetime(seen_at, "seenAt")
    _validate_optional_bool(is_favorite, "isFavorite")
    reaction_value = _validate_choice(reaction, "reaction", Reaction)

    db = open_session()
    try:
        _require_fact_exists(db, fact_id)

        changes = _provided_fields(
            seen=seen,
            seen_at=seen_at_value,
            is_favorite=is_favorite,
            reaction=reaction_value,
        )
        _upsert_state(db, user_id, fact_id, changes, datetime.utcnow())
        db.commit()

        state = (
            db.query(UserFactState)
            .filter(UserFactState.user_id == user_id)
            .filter(UserFactState.fact_id == fact_id)
            .one()
        )
        logger.info(
            "user_fact_state_upserted",
            extra={"fact_id": fact_id, "fields": sorted(changes)},
        )
        return {"status": "ok", "state": _serialize_state(state)}
    finally:
        db.close()


@service_tool
def list_user_fact_state(
    only_favorites: bool = False,
    context: Optional[RequestContext] = None,
) -> dict:
    """List the caller's fact states, optionally favorites only."""
    user_id = require_user(context)
    _validate_optional_bool(only_favorites, "onlyFavorites")

    db = open_session()
    try:
        query = db.query(UserFactState).filter(UserFactState.user_id == user_id)
        if only_favorites:
            query = query.filter(UserFactState.is_favorite.is_(True))
        states = query.order_by(UserFactState.id).all()
        return {
            "status": "ok",
            "count": len(states),
            "states": [_serialize_state(state) for state in states],
        }
    finally:
        db.close()
