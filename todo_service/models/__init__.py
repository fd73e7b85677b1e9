"""Database models."""

from todo_service.models.user import User, UserToken
from todo_service.models.todo import Todo

__all__ = [
    "User",
    "UserToken",
    "Todo",
]
