"""HTTP tests for the todo routes."""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from todo_service.api.deps import get_current_identity
from todo_service.database import get_session
from todo_service.main import app
from todo_service.models.todo import Todo
from todo_service.utils.ids import new_id


# ---------------------------------------------------------------------------
# GET /api/todos
# ---------------------------------------------------------------------------

def test_list_todos(client, headers):
    r = client.get("/api/todos", headers=headers[0])
    assert r.status_code == 200
    assert len(r.json()["data"]) == 2


def test_list_todos_requires_token(client, seed):
    assert client.get("/api/todos").status_code == 401


def test_list_omits_absent_completed_at(client, seed, headers):
    data = {t["id"]: t for t in client.get("/api/todos", headers=headers[0]).json()["data"]}
    assert "completedAt" not in data[seed.todos[0].id]
    assert data[seed.todos[1].id]["completedAt"] == 333


# ---------------------------------------------------------------------------
# POST /api/todos
# ---------------------------------------------------------------------------

def test_create_todo(client, seed, headers):
    r = client.post("/api/todos", json={"text": "make a test suite"}, headers=headers[0])
    assert r.status_code == 201
    body = r.json()
    assert body["text"] == "make a test suite"
    assert body["completed"] is False
    assert body["owner_id"] == seed.users[0].id
    assert "completedAt" not in body


def test_create_todo_ignores_client_owner(client, seed, headers):
    r = client.post(
        "/api/todos",
        json={"text": "sneaky", "owner_id": seed.users[1].id},
        headers=headers[0],
    )
    assert r.status_code == 201
    assert r.json()["owner_id"] == seed.users[0].id


def test_create_todo_invalid_data(client, session, seed, headers):
    r = client.post("/api/todos", json={}, headers=headers[0])
    assert r.status_code == 400
    r = client.post("/api/todos", json={"text": "  "}, headers=headers[0])
    assert r.status_code == 400
    assert len(client.get("/api/todos", headers=headers[0]).json()["data"]) == 2


# ---------------------------------------------------------------------------
# GET /api/todos/{id}
# ---------------------------------------------------------------------------

def test_get_todo(client, seed, headers):
    r = client.get(f"/api/todos/{seed.todos[0].id}", headers=headers[0])
    assert r.status_code == 200
    assert r.json()["todo"]["text"] == seed.todos[0].text


def test_get_todo_of_other_user(client, seed, headers):
    r = client.get(f"/api/todos/{seed.todos[2].id}", headers=headers[0])
    assert r.status_code == 404


def test_get_todo_not_found(client, seed, headers):
    r = client.get(f"/api/todos/{new_id()}", headers=headers[0])
    assert r.status_code == 404
    assert r.json()["status"] == 404


def test_get_todo_invalid_id(client, seed, headers):
    r = client.get(f"/api/todos/{seed.todos[0].id}21ab", headers=headers[0])
    assert r.status_code == 400
    assert r.json()["status"] == 400


# ---------------------------------------------------------------------------
# DELETE /api/todos/{id}
# ---------------------------------------------------------------------------

def test_delete_todo(client, session, seed, headers):
    todo_id = seed.todos[0].id
    r = client.delete(f"/api/todos/{todo_id}", headers=headers[0])
    assert r.status_code == 200
    assert r.json()["todo"]["id"] == todo_id
    assert r.json()["status"] == 200
    assert session.get(Todo, todo_id) is None


def test_delete_todo_of_other_user(client, session, seed, headers):
    todo_id = seed.todos[2].id
    r = client.delete(f"/api/todos/{todo_id}", headers=headers[0])
    assert r.status_code == 404
    assert session.get(Todo, todo_id) is not None


def test_delete_todo_invalid_id(client, seed, headers):
    r = client.delete(f"/api/todos/{new_id()}45", headers=headers[0])
    assert r.status_code == 400


def test_delete_todo_not_found(client, seed, headers):
    r = client.delete(f"/api/todos/{new_id()}", headers=headers[0])
    assert r.status_code == 404


# ---------------------------------------------------------------------------
# PATCH /api/todos/{id}
# ---------------------------------------------------------------------------

def test_complete_todo(client, seed, headers):
    text = "This should be the new text"
    r = client.patch(
        f"/api/todos/{seed.todos[0].id}",
        json={"text": text, "completed": True},
        headers=headers[0],
    )
    assert r.status_code == 200
    todo = r.json()["todo"]
    assert todo["text"] == text
    assert todo["completed"] is True
    assert isinstance(todo["completedAt"], int)


def test_complete_todo_of_other_user(client, seed, headers):
    r = client.patch(
        f"/api/todos/{seed.todos[2].id}",
        json={"text": "hijacked", "completed": True},
        headers=headers[0],
    )
    assert r.status_code == 404
    r = client.get(f"/api/todos/{seed.todos[2].id}", headers=headers[1])
    assert r.json()["todo"]["text"] == "Third test todo"


def test_rename_clears_completed_at(client, seed, headers):
    text = "Renamed to a new task"
    r = client.patch(
        f"/api/todos/{seed.todos[1].id}",
        json={"completed": False, "completedAt": None, "text": text},
        headers=headers[0],
    )
    assert r.status_code == 200
    todo = r.json()["todo"]
    assert todo["completed"] is False
    assert todo["text"] == text
    assert "completedAt" not in todo


def test_patch_invalid_id(client, seed, headers):
    r = client.patch(f"/api/todos/{seed.todos[0].id}21ab", json={"text": "x"}, headers=headers[0])
    assert r.status_code == 400


def test_patch_null_text(client, seed, headers):
    r = client.patch(f"/api/todos/{seed.todos[0].id}", json={"text": None}, headers=headers[0])
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "text"


# ---------------------------------------------------------------------------
# Store faults
# ---------------------------------------------------------------------------

def test_store_fault_is_opaque_500(identities):
    broken = MagicMock()
    broken.exec.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
    app.dependency_overrides[get_session] = lambda: broken
    app.dependency_overrides[get_current_identity] = lambda: identities[0]
    try:
        r = TestClient(app).get("/api/todos")
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.json() == {"status": 500, "detail": "Internal server error"}


def test_health(client):
    assert client.get("/api/system/health").json() == {"status": "ok"}
