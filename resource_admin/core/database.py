# ================================
# DATABASE CONNECTION (core/database.py)
# ================================

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager
from typing import Iterator

from resource_admin.config import Settings


def create_db_engine(settings: Settings) -> Engine:
    """Engine for the configured DATABASE_URL"""
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        # One shared connection, usable from the threadpool
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )

    return create_engine(
        url,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_factory(settings: Settings, engine: Engine = None) -> sessionmaker:
    """Session factory bound to the given (or a fresh) engine"""
    engine = engine or create_db_engine(settings)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Database session with automatic cleanup"""
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
