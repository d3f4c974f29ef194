from __future__ import annotations

import os

# Keep the import-time default engine off PostgreSQL during tests.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
import sqlalchemy as sa
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


class ScriptedStream:
    """Stream that replays a fixed list of values and fails when exhausted."""

    def __init__(self, values):
        self.values = list(values)
        self.used = 0

    def next(self) -> float:
        if self.used >= len(self.values):
            raise AssertionError(f"stream exhausted after {self.used} draws")
        value = self.values[self.used]
        self.used += 1
        return value


@pytest.fixture
def sqlite_bind(monkeypatch):
    """Point profileforge.db at a shared in-memory SQLite database with the schema created."""
    import profileforge.db as db
    import profileforge.models as models

    engine = sa.create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    # Replace get_engine to return our test engine
    monkeypatch.setattr(db, "get_engine", lambda echo=None: engine, raising=True)

    # Rebind SessionLocal
    TestSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)
    monkeypatch.setattr(db, "SessionLocal", TestSessionLocal, raising=True)

    models.Base.metadata.create_all(engine)
    yield TestSessionLocal
    engine.dispose()
