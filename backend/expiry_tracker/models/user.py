from sqlalchemy import Column, String, DateTime, ForeignKey, Text, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from expiry_tracker.database import Base, BaseMixin


class User(BaseMixin, Base):
    __tablename__ = "users"

    name = Column(String)
    email = Column(String, unique=True, index=True)
    email_verified = Column(DateTime(timezone=True))
    image = Column(String)

    accounts = relationship("Account", back_populates="user", cascade="all, delete-orphan")
    sessions = relationship("Session", back_populates="user", cascade="all, delete-orphan")
    groceries = relationship("Grocery", back_populates="user", cascade="all, delete-orphan")


class Account(BaseMixin, Base):
    """A linked identity-provider account (one user may sign in with several)."""

    __tablename__ = "accounts"
    __table_args__ = (UniqueConstraint("provider", "provider_account_id"),)

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String, nullable=False, default="oauth")
    provider = Column(String, nullable=False)
    provider_account_id = Column(String, nullable=False)
    refresh_token = Column(Text)
    access_token = Column(Text)
    expires_at = Column(Integer)
    token_type = Column(String)
    scope = Column(String)
    id_token = Column(Text)

    user = relationship("User", back_populates="accounts")


class Session(BaseMixin, Base):
    __tablename__ = "sessions"

    session_token = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="sessions")
