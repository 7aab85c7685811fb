import os
import time
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.exc import InvalidRequestError
from sqlalchemy.orm import sessionmaker, Session
from dotenv import load_dotenv

load_dotenv()

_engine = None
_SessionLocal = None
_sql_logger = logging.getLogger("cinema.db.sql")

# Queries slower than this are logged at WARNING instead of DEBUG.
_SLOW_QUERY_MS = float(os.getenv("SLOW_QUERY_MS", "250"))


def _summarise(statement: str, max_length: int = 100) -> str:
    condensed = " ".join(statement.split())
    if len(condensed) <= max_length:
        return condensed
    return condensed[: max_length - 1] + "…"


def _mark_start(conn, cursor, statement, parameters, context, executemany):
    context._cinema_started = time.perf_counter()


def _log_duration(conn, cursor, statement, parameters, context, executemany):
    started = getattr(context, "_cinema_started", None)
    if started is None:
        return
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    level = logging.WARNING if elapsed_ms >= _SLOW_QUERY_MS else logging.DEBUG
    if _sql_logger.isEnabledFor(level):
        _sql_logger.log(
            level, "%.1f ms | %s", elapsed_ms, _summarise(statement)
        )


def _watch_queries(engine) -> None:
    try:
        event.listen(engine, "before_cursor_execute", _mark_start)
        event.listen(engine, "after_cursor_execute", _log_duration)
    except InvalidRequestError:
        # Stubbed engines in tests do not accept listeners.
        return


def init_engine():
    global _engine, _SessionLocal
    db_url = os.getenv(
        "DATABASE_URL", "postgresql+psycopg2://cinema:cinema@db:5432/cinema"
    )
    _engine = create_engine(db_url, pool_pre_ping=True, future=True)
    _watch_queries(_engine)
    _SessionLocal = sessionmaker(
        bind=_engine, autoflush=False, autocommit=False, future=True
    )


def get_engine():
    if _engine is None:
        init_engine()
    return _engine


def get_sessionmaker():
    if _SessionLocal is None:
        init_engine()
    return _SessionLocal


def get_db() -> Session:
    SessionLocal = get_sessionmaker()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
