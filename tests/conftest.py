"""Test fixtures — in-memory SQLite shared by the test and the app.

Each test gets a fresh database seeded with two users (one live token each)
and three todos: two owned by the first user, one by the second.
"""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from todo_service.database import create_db_and_tables, get_session
from todo_service.main import app
from todo_service.models import Todo, User, UserToken
from todo_service.services.auth import hash_password, issue_token
from todo_service.services.auth_guard import AuthenticatedIdentity
from todo_service.utils.constants import ACCESS_AUTH, AUTH_HEADER
from todo_service.utils.ids import new_id


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


def _seed_user(session: Session, email: str, password: str) -> SimpleNamespace:
    user_id = new_id()
    token = issue_token(user_id)
    session.add(User(id=user_id, email=email, hashed_password=hash_password(password)))
    session.add(UserToken(user_id=user_id, access=ACCESS_AUTH, token=token))
    return SimpleNamespace(id=user_id, email=email, password=password, token=token)


@pytest.fixture()
def seed(session):
    """Seed users and todos; returns plain values so tests never touch detached rows."""
    users = [
        _seed_user(session, "first@example.com", "userOnePass"),
        _seed_user(session, "second@example.com", "userTwoPass"),
    ]
    session.commit()

    todos = [
        Todo(id=new_id(), text="First test todo", owner_id=users[0].id),
        Todo(id=new_id(), text="Second test todo", completed=True, completed_at=333, owner_id=users[0].id),
        Todo(id=new_id(), text="Third test todo", owner_id=users[1].id),
    ]
    for todo in todos:
        session.add(todo)
    session.commit()
    for todo in todos:
        session.refresh(todo)

    return SimpleNamespace(
        users=users,
        todos=[SimpleNamespace(**t.model_dump()) for t in todos],
    )


@pytest.fixture()
def identities(seed):
    return [AuthenticatedIdentity(user_id=u.id, token=u.token) for u in seed.users]


@pytest.fixture()
def client(session):
    """HTTP client with the app's get_session overridden to the test session."""

    def override_get_session():
        return session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def headers(seed):
    """x-auth headers for the seeded users, in seed order."""
    return [{AUTH_HEADER: u.token} for u in seed.users]
