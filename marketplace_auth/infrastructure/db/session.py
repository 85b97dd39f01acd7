# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from marketplace_auth.shared.config import load_config
from marketplace_auth.shared.logging import logger

_db = load_config().database

_SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL;",
    "PRAGMA synchronous=NORMAL;",
    "PRAGMA foreign_keys=ON;",
    "PRAGMA busy_timeout=30000;",
)


class Base(DeclarativeBase):
    pass


def _engine_options() -> dict[str, Any]:
    if _db.is_sqlite:
        return {"connect_args": {"check_same_thread": False, "timeout": int(_db.pool_timeout)}}
    return {
        "pool_size": _db.pool_size,
        "max_overflow": _db.max_overflow,
        "pool_timeout": _db.pool_timeout,
    }


ENGINE: Engine = create_engine(_db.url, pool_pre_ping=True, **_engine_options())


if _db.is_sqlite:

    @event.listens_for(ENGINE, "connect")
    def _apply_sqlite_pragmas(dbapi_conn, _record) -> None:
        cursor = dbapi_conn.cursor()
        try:
            for pragma in _SQLITE_PRAGMAS:
                cursor.execute(pragma)
        finally:
            cursor.close()


SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, expire_on_commit=False)
)


@contextmanager
def session_scope() -> Iterator[Session]:
    """One unit of work: commit on clean exit, roll back and re-raise otherwise."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception as exc:
        logger.warning(f"db: rolling back after {type(exc).__name__}")
        session.rollback()
        raise
    finally:
        SessionLocal.remove()


def init_db() -> None:
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=ENGINE)
    logger.info(f"db: schema ready ({', '.join(sorted(Base.metadata.tables))})")
