import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings
from .errors import DatabaseError

logger = logging.getLogger(__name__)


def create_db_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    """
    Create an engine. SQLite connections get foreign key enforcement, and
    every SQLite transaction takes the database write lock up front
    (BEGIN IMMEDIATE), so a capacity check and the insert that follows it
    cannot interleave with another writer.
    """
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    engine = create_engine(url, echo=echo, **kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            # pysqlite's own deferred BEGIN is disabled; the "begin" hook issues it
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine, "begin")
        def begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


settings = get_settings()
engine = create_db_engine(settings.sqlalchemy_url, echo=settings.database_echo)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
Base = declarative_base()


def init_db(bind: Engine = engine) -> None:
    """Create all tables (idempotent). Makes the db/ directory for file-backed SQLite."""
    from . import models  # noqa: F401

    database = bind.url.database
    if bind.url.get_backend_name() == "sqlite" and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Connecting to database '{bind.url.render_as_string(hide_password=True)}'")
    Base.metadata.create_all(bind=bind)


def get_db() -> Iterator[Session]:
    """FastAPI dependency for database sessions."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Commit on success, roll back on any exception.
    SQLAlchemy failures are re-raised as DatabaseError; everything else
    (validation, not found) propagates unchanged after the rollback.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"DB integrity error: {e}")
        raise DatabaseError("Integrity constraint violated", "commit") from e
    except OperationalError as e:
        db.rollback()
        logger.error(f"DB operational error: {e}")
        raise DatabaseError("Connection or operational error", "execute") from e
    except DBAPIError as e:
        db.rollback()
        logger.error(f"DB driver error: {e}")
        raise DatabaseError("Database driver error", "query") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"SQLAlchemy error: {e}")
        raise DatabaseError("Database operation failed", "unknown") from e
    except Exception:
        db.rollback()
        raise
