"""Ownership-scoped todo store.

Every function takes the caller's AuthenticatedIdentity and every query
filters on ``owner_id``. A todo owned by someone else is reported exactly
like a missing one (NotFound), so callers cannot probe for other users'
records. A structurally invalid id is reported as InvalidId before any
query runs.
"""

import logging
import time
from collections.abc import Mapping

from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session, select

from todo_service.database import store_errors
from todo_service.models.todo import Todo
from todo_service.schemas.todo import TodoCreate, TodoUpdate
from todo_service.services.auth_guard import AuthenticatedIdentity
from todo_service.services.errors import InvalidId, NotFound, ValidationError
from todo_service.utils.ids import is_valid_id, normalize_id

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def _check_id(todo_id: str) -> str:
    if not is_valid_id(todo_id):
        raise InvalidId(f"Invalid todo id: {todo_id!r}")
    return normalize_id(todo_id)


def _get_owned(session: Session, identity: AuthenticatedIdentity, todo_id: str) -> Todo:
    with store_errors(session):
        todo = session.exec(
            select(Todo).where(Todo.id == todo_id, Todo.owner_id == identity.user_id)
        ).first()
    if todo is None:
        raise NotFound("Todo not found")
    return todo


def list_todos(session: Session, identity: AuthenticatedIdentity) -> list[Todo]:
    with store_errors(session):
        return list(session.exec(select(Todo).where(Todo.owner_id == identity.user_id)).all())


def create_todo(session: Session, identity: AuthenticatedIdentity, text: str) -> Todo:
    try:
        data = TodoCreate(text=text)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e

    todo = Todo(text=data.text, owner_id=identity.user_id)
    with store_errors(session):
        session.add(todo)
        session.commit()
        session.refresh(todo)
    logger.info(f"Todo {todo.id} created by {identity.user_id}")
    return todo


def get_todo(session: Session, identity: AuthenticatedIdentity, todo_id: str) -> Todo:
    return _get_owned(session, identity, _check_id(todo_id))


def delete_todo(session: Session, identity: AuthenticatedIdentity, todo_id: str) -> Todo:
    """Delete an owned todo and return it as it was."""
    todo = _get_owned(session, identity, _check_id(todo_id))
    removed = Todo.model_validate(todo.model_dump())
    with store_errors(session):
        session.delete(todo)
        session.commit()
    logger.info(f"Todo {removed.id} deleted by {identity.user_id}")
    return removed


def _apply_patch(todo: Todo, changes: dict) -> None:
    if "text" in changes:
        todo.text = changes["text"]

    if "completed" in changes:
        if changes["completed"]:
            if changes.get("completed_at") is not None:
                todo.completed_at = changes["completed_at"]
            elif not todo.completed or todo.completed_at is None:
                todo.completed_at = now_ms()
            todo.completed = True
        else:
            todo.completed = False
            todo.completed_at = None
    elif changes.get("completed_at") is not None and todo.completed:
        todo.completed_at = changes["completed_at"]


def update_todo(
    session: Session,
    identity: AuthenticatedIdentity,
    todo_id: str,
    patch: TodoUpdate | Mapping,
) -> Todo:
    """Apply a partial update to an owned todo.

    Completion rules:
    - completed -> true stamps completed_at with the current time unless a
      timestamp is supplied; an already-complete todo keeps its timestamp.
    - completed -> false always clears completed_at.
    - without ``completed``, completion state is left alone.
    """
    todo_id = _check_id(todo_id)

    if not isinstance(patch, TodoUpdate):
        try:
            patch = TodoUpdate.model_validate(patch)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e) from e

    changes = patch.model_dump(exclude_unset=True)
    for field in ("text", "completed"):
        if field in changes and changes[field] is None:
            raise ValidationError(
                f"Invalid input: {field}",
                errors=[{"field": field, "message": "must not be null", "type": "null"}],
            )

    todo = _get_owned(session, identity, todo_id)
    _apply_patch(todo, changes)
    with store_errors(session):
        session.add(todo)
        session.commit()
        session.refresh(todo)
    logger.info(f"Todo {todo.id} updated by {identity.user_id}")
    return todo
