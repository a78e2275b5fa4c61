"""
Identity Service - users, linked provider accounts and database sessions.

The OAuth handshake itself runs in the identity provider's adapter; once it
has a verified profile it calls :func:`sign_in_with_profile`, which upserts
the user and account rows and opens a session. Every later request is
authenticated by looking up the opaque session token.
"""

import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from expiry_tracker.config import get_settings
from expiry_tracker.models.grocery import Grocery
from expiry_tracker.models.user import Account, User, Session as UserSession

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def sign_in_with_profile(
    db: Session,
    provider: str,
    provider_account_id: str,
    email: str | None,
    name: str | None = None,
    image: str | None = None,
    access_token: str | None = None,
    refresh_token: str | None = None,
    id_token: str | None = None,
) -> UserSession:
    """Link a verified provider profile to a user and open a new session."""
    account = db.query(Account).filter(
        Account.provider == provider,
        Account.provider_account_id == provider_account_id,
    ).first()

    if account:
        user = account.user
        account.access_token = access_token or account.access_token
        account.refresh_token = refresh_token or account.refresh_token
        account.id_token = id_token or account.id_token
    else:
        user = db.query(User).filter(User.email == email).first() if email else None
        if user is None:
            user = User(name=name, email=email, image=image, email_verified=_utcnow())
            db.add(user)
            db.flush()
            logger.info(f"Created user {user.id} via {provider}")
        db.add(Account(
            user_id=user.id,
            type="oauth",
            provider=provider,
            provider_account_id=provider_account_id,
            access_token=access_token,
            refresh_token=refresh_token,
            id_token=id_token,
        ))

    if name and not user.name:
        user.name = name
    if image and not user.image:
        user.image = image

    session = UserSession(
        user_id=user.id,
        session_token=secrets.token_urlsafe(32),
        expires=_utcnow() + timedelta(days=get_settings().SESSION_MAX_AGE_DAYS),
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def get_session_user(db: Session, session_token: str | None) -> tuple[User, UserSession] | None:
    """Resolve a session token to its user. Expired sessions are removed."""
    if not session_token:
        return None
    session = db.query(UserSession).filter(UserSession.session_token == session_token).first()
    if not session:
        return None
    if _as_utc(session.expires) <= _utcnow():
        logger.info(f"Session for user {session.user_id} expired")
        db.delete(session)
        db.commit()
        return None
    return session.user, session


def end_session(db: Session, session_token: str | None) -> bool:
    if not session_token:
        return False
    deleted = db.query(UserSession).filter(UserSession.session_token == session_token).delete()
    db.commit()
    return deleted > 0


def _count_for_user(model):
    return (
        select(func.count(model.id))
        .where(model.user_id == User.id)
        .correlate(User)
        .scalar_subquery()
    )


def list_users_with_counts(db: Session) -> list[dict]:
    """All users, newest first, with their groceries/sessions/accounts counts."""
    rows = db.query(
        User,
        _count_for_user(Grocery),
        _count_for_user(UserSession),
        _count_for_user(Account),
    ).order_by(User.created_at.desc()).all()

    return [
        {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "image": user.image,
            "created_at": user.created_at,
            "updated_at": user.updated_at,
            "counts": {"groceries": groceries, "sessions": sessions, "accounts": accounts},
        }
        for user, groceries, sessions, accounts in rows
    ]


def delete_user(db: Session, user_id: uuid.UUID) -> bool:
    """Delete a user and everything hanging off it. Returns False if unknown."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return False
    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {user_id}")
    return True
