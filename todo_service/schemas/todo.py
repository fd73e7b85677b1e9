"""Pydantic schemas for the todo API."""

from pydantic import BaseModel, Field, field_validator


def _required_text(value: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError("must not be empty")
    return text


class TodoCreate(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def _trim_text(cls, value: str) -> str:
        return _required_text(value)


class TodoUpdate(BaseModel):
    """Partial update. Only fields the client actually sent are applied."""

    text: str | None = None
    completed: bool | None = None
    completed_at: int | None = Field(default=None, alias="completedAt")

    model_config = {"populate_by_name": True}

    @field_validator("text")
    @classmethod
    def _trim_optional_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _required_text(value)


class TodoRead(BaseModel):
    id: str
    text: str
    completed: bool
    completed_at: int | None = Field(default=None, alias="completedAt")
    owner_id: str

    model_config = {"from_attributes": True, "populate_by_name": True}


class TodoList(BaseModel):
    data: list[TodoRead]


class TodoEnvelope(BaseModel):
    todo: TodoRead


class TodoDeleted(BaseModel):
    todo: TodoRead
    status: int = 200
