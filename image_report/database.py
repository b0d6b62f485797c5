"""Database plumbing for the ``fileupload`` table.

One lazily created engine per process; ``get_db`` hands each request its own
session for inserting and listing upload records.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from image_report.config import get_settings


class Base(DeclarativeBase):
    pass


def _make_engine():
    settings = get_settings()
    return create_engine(settings.DATABASE_URL, pool_pre_ping=True)


class _LazyEngine:
    """Lazily creates the SQLAlchemy engine on first access."""

    def __init__(self):
        self._engine = None

    def _get(self):
        if self._engine is None:
            self._engine = _make_engine()
        return self._engine

    def connect(self):
        return self._get().connect()

    def dispose(self):
        if self._engine:
            self._engine.dispose()
            self._engine = None

    # Expose for Alembic / direct use
    def __getattr__(self, name):
        return getattr(self._get(), name)


engine = _LazyEngine()


def _get_session_factory():
    return sessionmaker(autocommit=False, autoflush=False, bind=engine._get())


def get_db():
    db = _get_session_factory()()
    try:
        yield db
    finally:
        db.close()
