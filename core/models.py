"""
FactGate Database Models
PostgreSQL or SQLite schema
"""

from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import (
    Column, Integer, String, Text, Boolean,
    DateTime, ForeignKey, Index, UniqueConstraint, Enum, JSON
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base

import core.config as config

DB_BACKEND_EFFECTIVE = config.DB_BACKEND_EFFECTIVE

JSON_TYPE = JSONB if DB_BACKEND_EFFECTIVE == "postgres" else JSON

Base = declarative_base()

# =============================================================================
# Enums
# =============================================================================

class Difficulty(str, PyEnum):
    basic = "basic"
    intermediate = "intermediate"
    advanced = "advanced"


class FactOrigin(str, PyEnum):
    ai = "ai"
    user = "user"
    curated = "curated"


class RequestStatus(str, PyEnum):
    pending = "pending"
    completed = "completed"
    failed = "failed"


class Reaction(str, PyEnum):
    none = "none"
    like = "like"
    love = "love"
    mind_blown = "mind_blown"
    meh = "meh"


# =============================================================================
# Topics
# =============================================================================

class FactTopic(Base):
    __tablename__ = "fact_topics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(String(255))  # unset = shared topic
    name = Column(String(255), nullable=False)
    description = Column(Text)
    slug = Column(String(255))
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_fact_topics_owner_active", "owner_id", "is_active"),
    )


# =============================================================================
# Facts
# =============================================================================

class Fact(Base):
    __tablename__ = "facts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    topic_id = Column(Integer, ForeignKey("fact_topics.id"))
    content = Column(Text, nullable=False)
    difficulty = Column(
        Enum(Difficulty, name="fact_difficulty", native_enum=False),
        default=Difficulty.basic,
        nullable=False,
    )
    source = Column(String(1000))
    source_meta = Column(JSON_TYPE)
    origin = Column(
        Enum(FactOrigin, name="fact_origin", native_enum=False),
        default=FactOrigin.ai,
        nullable=False,
    )
    owner_id = Column(String(255))
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_facts_topic_id", "topic_id"),
        Index("ix_facts_owner_active", "owner_id", "is_active"),
    )


# =============================================================================
# Generation request log
# =============================================================================

class FactRequest(Base):
    __tablename__ = "fact_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255))
    topic_id = Column(Integer, ForeignKey("fact_topics.id"))
    prompt = Column(Text)
    input = Column(JSON_TYPE)
    output = Column(JSON_TYPE)
    status = Column(
        Enum(RequestStatus, name="fact_request_status", native_enum=False),
        default=RequestStatus.completed,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("ix_fact_requests_user_id", "user_id"),
    )


# =============================================================================
# Per-user engagement state
# =============================================================================

class UserFactState(Base):
    __tablename__ = "user_fact_state"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), nullable=False)
    fact_id = Column(Integer, ForeignKey("facts.id"), nullable=False)
    seen = Column(Boolean, default=False, nullable=False)
    seen_at = Column(DateTime(timezone=True))
    is_favorite = Column(Boolean, default=False, nullable=False)
    reaction = Column(
        Enum(Reaction, name="fact_reaction", native_enum=False),
        default=Reaction.none,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "fact_id", name="uq_user_fact_state_user_fact"),
    )
