"""
Database engine, session management, and base model.

The ledger is held in an in-memory SQLite database. All sessions
share one connection (StaticPool) so every request sees the same
registries for the lifetime of the process.
"""

import asyncio
import weakref

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool

from banking_ledger.config import get_settings

settings = get_settings()


def make_engine(url: str):
    """
    Build an engine for the given URL.

    In-memory SQLite databases disappear when their connection
    closes, so they are pinned to a single shared connection.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


# --- Engine ---
engine = make_engine(settings.DATABASE_URL)

# --- Session Factory ---
# autocommit=False: the caller decides when a unit of work is
# committed. autoflush=False: SQL is only sent on explicit flush.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)

# One caller at a time. The shared in-memory connection has no
# isolation between sessions, so requests are serialized. Waiters
# queue on the event loop, not in the threadpool that runs the
# sync endpoints, so a full queue cannot starve the lock holder.
# An asyncio.Lock belongs to one event loop, hence one per loop.
_session_locks = weakref.WeakKeyDictionary()


def _session_lock() -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    lock = _session_locks.get(loop)
    if lock is None:
        lock = _session_locks[loop] = asyncio.Lock()
    return lock


# --- Base Model Class ---
class Base(DeclarativeBase):
    pass


def init_db() -> None:
    """Create all tables. Idempotent."""
    # Import models so they register on Base.metadata
    import banking_ledger.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


# --- Dependency for FastAPI ---
async def get_db():
    """
    Provide a database session for a single request.

    The session is always closed, and the global lock released,
    even if the endpoint raises.
    """
    async with _session_lock():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()
