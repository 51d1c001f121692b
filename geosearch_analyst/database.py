"""SQLite persistence for search history.

One process-wide engine and session factory, created on first use.  The
URL comes from the caller, then ``DATABASE_URL``, then
``DEFAULT_DATABASE_URL``.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///data/geosearch.db"

SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL;",
    "PRAGMA synchronous=NORMAL;",
    "PRAGMA busy_timeout=5000;",
)


class Base(DeclarativeBase):
    pass


_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def _apply_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    for pragma in SQLITE_PRAGMAS:
        cursor.execute(pragma)
    cursor.close()


def get_engine(database_url: str | None = None, echo: bool = False) -> Engine:
    """Return the shared engine, creating it on the first call.

    File-backed SQLite databases get their parent directory created and
    run in WAL mode; in-memory databases are left alone.
    """
    global _engine
    if _engine is not None:
        return _engine

    url = make_url(database_url or os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL)
    is_sqlite = url.get_backend_name() == "sqlite"
    db_file = url.database if is_sqlite and url.database not in (None, "", ":memory:") else None
    if db_file:
        Path(db_file).parent.mkdir(parents=True, exist_ok=True)

    _engine = create_engine(
        url,
        echo=echo,
        connect_args={"check_same_thread": False} if is_sqlite else {},
        pool_pre_ping=True,
    )
    if db_file:
        event.listen(_engine, "connect", _apply_sqlite_pragmas)
    logger.info("Database engine created: %s", url.render_as_string(hide_password=True))
    return _engine


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Transactional session: commits on success, rolls back on error.

    Usage::

        with get_session() as session:
            session.add(item)
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    session = _session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(database_url: str | None = None, echo: bool = False) -> None:
    """Create missing tables."""
    engine = get_engine(database_url=database_url, echo=echo)
    import geosearch_analyst.models  # noqa: F401  (registers tables on Base.metadata)
    Base.metadata.create_all(bind=engine)
    logger.info("History tables created / verified.")


def reset_engine() -> None:
    """Dispose of the shared engine and forget the session factory."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
