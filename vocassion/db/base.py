"""
Engine, session factory and declarative base.

`get_db` is the FastAPI dependency; one session per request, always closed.
`atomic` wraps one user action so all of its rows land in a single commit.
"""
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from vocassion.core.config import settings


def _normalize_url(url: str) -> str:
    # Hosted Postgres providers still hand out the legacy scheme.
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


DATABASE_URL = _normalize_url(settings.DATABASE_URL)

_engine_args: dict = {"pool_pre_ping": True}
if DATABASE_URL.startswith("sqlite"):
    _engine_args = {"connect_args": {"check_same_thread": False}}

engine = create_engine(DATABASE_URL, **_engine_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session):
    """Commit once if the block succeeds; roll back everything it wrote otherwise."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
