import logging
import sqlite3
from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from bookshelf.core.exceptions import BookshelfError, TransientFailure
from bookshelf.core.settings import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url:
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {"pool_pre_ping": True}


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    **_engine_kwargs(settings.DATABASE_URL),
)


@event.listens_for(Engine, "connect")
def enable_sqlite_fks(dbapi_connection, connection_record):
    """Enable foreign key constraints in SQLite so deletes cascade."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Run a multi-step mutation as one unit of work.

    Commits once on success. Any failure rolls back everything issued inside
    the block; database-level errors are reported as TransientFailure, while
    domain errors and integrity errors propagate unchanged for the caller to
    classify.
    """
    try:
        yield db
        db.commit()
    except BookshelfError:
        db.rollback()
        raise
    except IntegrityError:
        db.rollback()
        raise
    except (DBAPIError, SQLAlchemyError) as e:
        db.rollback()
        logger.error(f"Database error, transaction rolled back: {e}")
        raise TransientFailure("The data store is temporarily unavailable") from e
    except Exception:
        db.rollback()
        raise
