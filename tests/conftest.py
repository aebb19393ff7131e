import os

os.environ.setdefault("DB_BACKEND", "sqlite")
os.environ.setdefault("REQUIRE_MCP_AUTH", "true")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.context import RequestContext
from core.db import DB
from core.models import Base


@pytest.fixture
def server_db(tmp_path):
    db_path = tmp_path / "factgate.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    previous_engine = DB.engine
    previous_session = DB.SessionLocal
    DB.engine = engine
    DB.SessionLocal = SessionLocal
    try:
        yield engine
    finally:
        DB.engine = previous_engine
        DB.SessionLocal = previous_session
        engine.dispose()


@pytest.fixture
def db_session(server_db):
    session = DB.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def alice():
    return RequestContext.for_user("alice")


@pytest.fixture
def bob():
    return RequestContext.for_user("bob")
