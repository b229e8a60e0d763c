"""
Database configuration and connection management.

Engine and session factory are built once from settings.DATABASE_URL.
"""

import logging
import time
from typing import Any, Dict, Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings
from .models import Base

logger = logging.getLogger(__name__)


def get_safe_url(db_url: str) -> str:
    """Database URL with credentials removed, for logging."""
    if "@" in db_url:
        scheme = db_url.split("://", 1)[0]
        return f"{scheme}://...@{db_url.split('@', 1)[1]}"
    return db_url


def get_engine_kwargs(db_url: str) -> Dict[str, Any]:
    """
    Get database-specific engine arguments.

    SQLite gets a single shared connection; everything else gets a sized pool.

    Args:
        db_url: Database connection URL

    Returns:
        Keyword arguments for create_engine
    """
    if db_url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
    }


@event.listens_for(Engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Track query start time."""
    conn.info.setdefault("query_start_time", []).append(time.time())


@event.listens_for(Engine, "after_cursor_execute")
def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log slow queries."""
    total_time_ms = (time.time() - conn.info["query_start_time"].pop()) * 1000

    if total_time_ms > settings.QUERY_LOG_THRESHOLD_MS:
        logger.warning(
            f"Slow query detected: {total_time_ms:.2f}ms",
            extra={"query_time_ms": total_time_ms, "statement": statement[:200]},
        )


logger.info(f"Using database: {get_safe_url(settings.DATABASE_URL)}")
engine = create_engine(settings.DATABASE_URL, echo=False, **get_engine_kwargs(settings.DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """
    Initialize database tables.

    Creates all tables on application startup; existing tables are kept.
    """
    logger.info("Initializing database tables...")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database initialized successfully")


def get_db() -> Generator[Session, None, None]:
    """
    Get database session for dependency injection.

    Yields:
        SQLAlchemy database session, closed when the request ends
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection(db: Session) -> bool:
    """True when a trivial query succeeds on the given session."""
    try:
        return db.execute(text("SELECT 1")).scalar() == 1
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
