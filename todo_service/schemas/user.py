"""Pydantic schemas for the user/session API."""

from pydantic import BaseModel, EmailStr, TypeAdapter, ValidationError, field_validator

from todo_service.config import settings

_email_adapter = TypeAdapter(EmailStr)


class UserCreate(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        # Shape check only; the address is stored exactly as submitted so
        # login can match it byte for byte.
        try:
            _email_adapter.validate_python(value)
        except ValidationError as e:
            raise ValueError("value is not a valid email address") from e
        return value

    @field_validator("password")
    @classmethod
    def _validate_password(cls, value: str) -> str:
        if len(value) < settings.password_min_length:
            raise ValueError(f"must be at least {settings.password_min_length} characters")
        return value


class UserLogin(BaseModel):
    email: str
    password: str


class UserRead(BaseModel):
    id: str
    email: str
    # hashed_password and tokens are NEVER exposed

    model_config = {"from_attributes": True}


class UserEnvelope(BaseModel):
    user: UserRead
