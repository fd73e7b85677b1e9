"""Shared API dependencies."""

from fastapi import Depends, Header
from sqlmodel import Session

from todo_service.database import get_session, store_errors
from todo_service.models.user import User
from todo_service.services.auth_guard import AuthenticatedIdentity, authenticate_token
from todo_service.services.errors import Unauthorized


def get_current_identity(
    x_auth: str | None = Header(default=None),
    session: Session = Depends(get_session),
) -> AuthenticatedIdentity:
    """Validate the x-auth session token and return the caller's identity."""
    return authenticate_token(session, x_auth)


def get_current_user(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    session: Session = Depends(get_session),
) -> User:
    with store_errors(session):
        user = session.get(User, identity.user_id)
    if user is None:
        raise Unauthorized()
    return user
