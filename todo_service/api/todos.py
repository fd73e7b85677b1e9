"""Todo API. Every route is scoped to the authenticated caller."""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from todo_service.database import get_session
from todo_service.schemas.todo import (
    TodoCreate,
    TodoDeleted,
    TodoEnvelope,
    TodoList,
    TodoRead,
    TodoUpdate,
)
from todo_service.services import todo_store
from todo_service.services.auth_guard import AuthenticatedIdentity
from todo_service.api.deps import get_current_identity

router = APIRouter(prefix="/api/todos", tags=["todos"])


@router.get("", response_model=TodoList, response_model_exclude_none=True)
def list_todos(
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    session: Session = Depends(get_session),
):
    todos = todo_store.list_todos(session, identity)
    return TodoList(data=[TodoRead.model_validate(t) for t in todos])


@router.post("", response_model=TodoRead, status_code=201, response_model_exclude_none=True)
def create_todo(
    data: TodoCreate,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    session: Session = Depends(get_session),
):
    return todo_store.create_todo(session, identity, data.text)


@router.get("/{todo_id}", response_model=TodoEnvelope, response_model_exclude_none=True)
def get_todo(
    todo_id: str,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    session: Session = Depends(get_session),
):
    todo = todo_store.get_todo(session, identity, todo_id)
    return TodoEnvelope(todo=TodoRead.model_validate(todo))


@router.delete("/{todo_id}", response_model=TodoDeleted, response_model_exclude_none=True)
def delete_todo(
    todo_id: str,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    session: Session = Depends(get_session),
):
    todo = todo_store.delete_todo(session, identity, todo_id)
    return TodoDeleted(todo=TodoRead.model_validate(todo))


@router.patch("/{todo_id}", response_model=TodoEnvelope, response_model_exclude_none=True)
def update_todo(
    todo_id: str,
    data: TodoUpdate,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
    session: Session = Depends(get_session),
):
    todo = todo_store.update_todo(session, identity, todo_id, data)
    return TodoEnvelope(todo=TodoRead.model_validate(todo))
