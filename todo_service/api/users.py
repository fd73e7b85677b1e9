"""User API — registration, login, current user, logout."""

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from todo_service.database import get_session
from todo_service.models.user import User
from todo_service.schemas.user import UserCreate, UserEnvelope, UserLogin, UserRead
from todo_service.services import credential_store
from todo_service.services.auth_guard import AuthenticatedIdentity
from todo_service.api.deps import get_current_identity, get_current_user
from todo_service.utils.constants import AUTH_HEADER

router = APIRouter(prefix="/api/users", tags=["users"])


def _with_token(response: Response, user: User, token: str) -> UserEnvelope:
    response.headers[AUTH_HEADER] = token
    return UserEnvelope(user=UserRead.model_validate(user))


@router.post("", response_model=UserEnvelope)
def register(body: UserCreate, response: Response, session: Session = Depends(get_session)):
    user, token = credential_store.register(session, body.email, body.password)
    return _with_token(response, user, token)


@router.post("/login", response_model=UserEnvelope)
def login(body: UserLogin, response: Response, session: Session = Depends(get_session)):
    user, token = credential_store.authenticate(session, body.email, body.password)
    return _with_token(response, user, token)


@router.get("/me", response_model=UserEnvelope)
def me(user: User = Depends(get_current_user)):
    return UserEnvelope(user=UserRead.model_validate(user))


@router.delete("/me/token", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    session: Session = Depends(get_session),
):
    credential_store.revoke_token(session, identity.user_id, identity.token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
