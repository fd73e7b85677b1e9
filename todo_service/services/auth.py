"""Authentication utilities: password hashing and session tokens.

Session tokens are HS256 JWTs carrying the user id and the access tag. They
have no expiry claim: a token stays valid until its row is removed from the
user's token collection (see ``credential_store``). This module only checks
the cryptographic part.
"""

import secrets
from dataclasses import dataclass

import bcrypt
from jose import JWTError, jwt

from todo_service.config import settings
from todo_service.services.errors import InvalidToken
from todo_service.utils.constants import ACCESS_AUTH
from todo_service.utils.ids import is_valid_id


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    access: str


def hash_password(password: str) -> str:
    pw = password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    pw = plain.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw, hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def issue_token(user_id: str) -> str:
    """Sign a new session token for user_id.

    The random jti keeps every issued token string unique, even for two
    logins of the same user within the same second.
    """
    payload = {"sub": user_id, "access": ACCESS_AUTH, "jti": secrets.token_hex(8)}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> TokenClaims:
    """Decode a session token. Raises InvalidToken on any failure."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise InvalidToken(f"Invalid token: {e}") from e

    user_id = payload.get("sub")
    access = payload.get("access")
    if not is_valid_id(user_id):
        raise InvalidToken("Invalid token: malformed subject")
    if access != ACCESS_AUTH:
        raise InvalidToken("Invalid token: wrong access level")
    return TokenClaims(user_id=user_id, access=access)
