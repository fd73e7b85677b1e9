"""Todo model — a task owned by exactly one user."""

from sqlmodel import SQLModel, Field

from todo_service.utils.constants import ID_LENGTH
from todo_service.utils.ids import new_id


class Todo(SQLModel, table=True):
    __tablename__ = "todo"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=ID_LENGTH)
    text: str
    completed: bool = False
    completed_at: int | None = None  # epoch milliseconds, set only while completed
    owner_id: str = Field(foreign_key="user.id", index=True, max_length=ID_LENGTH)
