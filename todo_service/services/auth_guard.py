"""Request-boundary authentication.

Every protected operation obtains its acting identity here, and only here.
The identity comes from the verified token, never from a client-supplied id.
"""

from dataclasses import dataclass

from sqlmodel import Session

from todo_service.services import credential_store
from todo_service.services.errors import InvalidToken, NotFound, Unauthorized


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Scoping key for the rest of the request."""

    user_id: str
    token: str


def authenticate_token(session: Session, token: str | None) -> AuthenticatedIdentity:
    if token is None or not token.strip():
        raise Unauthorized()

    try:
        user = credential_store.find_by_verified_token(session, token)
    except (InvalidToken, NotFound) as e:
        raise Unauthorized("Invalid or revoked token") from e

    return AuthenticatedIdentity(user_id=user.id, token=token)
