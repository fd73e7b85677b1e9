"""Credential store: user identities and their live session tokens.

A user's sessions are the rows of ``user_token``. Login appends a row,
logout deletes one. A token whose row is gone no longer authenticates, even
though its signature still verifies.
"""

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from todo_service.database import store_errors
from todo_service.models.user import User, UserToken
from todo_service.schemas.user import UserCreate
from todo_service.services.auth import hash_password, issue_token, verify_password, verify_token
from todo_service.services.errors import (
    DuplicateEmail,
    InvalidCredentials,
    NotFound,
    StoreError,
    ValidationError,
)
from todo_service.utils.constants import ACCESS_AUTH

logger = logging.getLogger(__name__)


def get_user_by_email(session: Session, email: str) -> User | None:
    with store_errors(session):
        return session.exec(select(User).where(User.email == email)).first()


_dummy_hash: str | None = None


def _get_dummy_hash() -> str:
    """bcrypt hash checked for unknown emails so both login failures cost the same."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("not-a-real-password")
    return _dummy_hash


def _new_user(session: Session, email: str, password: str) -> User:
    try:
        data = UserCreate(email=email, password=password)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e

    if get_user_by_email(session, data.email) is not None:
        raise DuplicateEmail()

    user = User(email=data.email, hashed_password=hash_password(data.password))
    session.add(user)
    return user


def _commit_new_user(session: Session, user: User) -> None:
    try:
        session.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same email
        session.rollback()
        raise DuplicateEmail() from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to create user: {e}")
        raise StoreError() from e
    with store_errors(session):
        session.refresh(user)
    logger.info(f"User created: {user.id}")


def create_user(session: Session, email: str, password: str) -> User:
    """Validate and persist a new user. The password is stored only as a bcrypt hash."""
    user = _new_user(session, email, password)
    _commit_new_user(session, user)
    return user


def _new_token(session: Session, user: User) -> str:
    token = issue_token(user.id)
    session.add(UserToken(user_id=user.id, access=ACCESS_AUTH, token=token))
    return token


def _add_token(session: Session, user: User) -> str:
    with store_errors(session):
        token = _new_token(session, user)
        session.commit()
        session.refresh(user)
    return token


def register(session: Session, email: str, password: str) -> tuple[User, str]:
    """Create a user and open their first session in a single commit."""
    user = _new_user(session, email, password)
    token = _new_token(session, user)
    _commit_new_user(session, user)
    return user, token


def authenticate(session: Session, email: str, password: str) -> tuple[User, str]:
    """Check email/password and open a new session.

    Unknown email and wrong password raise the same InvalidCredentials, and
    neither touches the user's tokens. Both paths run one bcrypt check.
    """
    user = get_user_by_email(session, email)
    hashed = user.hashed_password if user is not None else _get_dummy_hash()
    if not verify_password(password, hashed) or user is None:
        logger.info(f"Login failed for {email}")
        raise InvalidCredentials()

    token = _add_token(session, user)
    logger.info(f"User logged in: {user.id}")
    return user, token


def find_by_verified_token(session: Session, token: str) -> User:
    """Resolve a token to its user, requiring the session to still be live.

    Raises InvalidToken if the token does not verify, NotFound if it verifies
    but is not (or no longer) in the user's token collection.
    """
    claims = verify_token(token)
    with store_errors(session):
        user = session.get(User, claims.user_id)
        live = session.exec(
            select(UserToken).where(
                UserToken.user_id == claims.user_id,
                UserToken.token == token,
                UserToken.access == claims.access,
            )
        ).first()
    if user is None or live is None:
        raise NotFound("Session not found")
    return user


def list_tokens(session: Session, user_id: str) -> list[UserToken]:
    """Live tokens of a user, oldest first."""
    with store_errors(session):
        stmt = select(UserToken).where(UserToken.user_id == user_id).order_by(UserToken.id)
        return list(session.exec(stmt).all())


def revoke_token(session: Session, user_id: str, token: str) -> None:
    """Remove one session. A token that is already gone is not an error."""
    with store_errors(session):
        rows = session.exec(
            select(UserToken).where(UserToken.user_id == user_id, UserToken.token == token)
        ).all()
        for row in rows:
            session.delete(row)
        session.commit()
    if rows:
        logger.info(f"Token revoked for user {user_id}")


def revoke_all_tokens(session: Session, user_id: str) -> int:
    """Remove every live session of a user. Returns how many were removed."""
    with store_errors(session):
        rows = session.exec(select(UserToken).where(UserToken.user_id == user_id)).all()
        for row in rows:
            session.delete(row)
        session.commit()
    logger.info(f"Revoked {len(rows)} token(s) for user {user_id}")
    return len(rows)
