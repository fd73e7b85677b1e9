"""User and session-token models."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field

from todo_service.utils.constants import ACCESS_AUTH, ID_LENGTH
from todo_service.utils.ids import new_id


class User(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True, max_length=ID_LENGTH)
    email: str = Field(unique=True, index=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class UserToken(SQLModel, table=True):
    """One live session of a user. Removing the row revokes the session."""

    __tablename__ = "user_token"

    id: int | None = Field(default=None, primary_key=True)  # insertion order
    user_id: str = Field(foreign_key="user.id", index=True, max_length=ID_LENGTH)
    access: str = ACCESS_AUTH
    token: str = Field(unique=True)
