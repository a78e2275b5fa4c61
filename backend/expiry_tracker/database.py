import uuid
from datetime import datetime, timezone

from sqlalchemy import create_engine, Column, DateTime, Uuid
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool

from expiry_tracker.config import get_settings

settings = get_settings()


def normalize_database_url(url: str) -> str:
    """Force the psycopg v3 driver for bare postgres URLs."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    return url


CLOUD_HOST_MARKERS = ("supabase", "neon.tech", "pooler")


def resolve_database_url(url: str) -> str:
    """Driver-normalized URL; cloud Postgres hosts (Supabase, Neon) get sslmode=require."""
    url = normalize_database_url(url)
    if url.startswith("postgresql") and any(m in url for m in CLOUD_HOST_MARKERS) and "sslmode" not in url:
        url += ("&" if "?" in url else "?") + "sslmode=require"
    return url


def make_engine(url: str):
    url = resolve_database_url(url)
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection across threads
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    return create_engine(url, pool_pre_ping=True)


engine = make_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


class BaseMixin:
    """Adds UUID primary key and timestamps to all models."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
