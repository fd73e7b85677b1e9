"""Error taxonomy raised by the service layer.

Every failure the core can produce is one of these classes. The API layer
maps them to HTTP statuses in one place (``todo_service.api.errors``).
"""


class ServiceError(Exception):
    """Base class for all service-layer failures."""

    kind = "ServiceError"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    default_message = "Service error"

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(ServiceError):
    """Malformed or missing input fields."""

    kind = "ValidationError"
    default_message = "Invalid input"

    def __init__(self, message: str | None = None, errors: list[dict] | None = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        """Build from a pydantic ValidationError, keeping field-level detail."""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ())),
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]
        fields = ", ".join(e["field"] for e in errors if e["field"])
        message = f"Invalid input: {fields}" if fields else cls.default_message
        return cls(message, errors=errors)


class DuplicateEmail(ServiceError):
    kind = "DuplicateEmail"
    default_message = "Email is already registered"


class InvalidCredentials(ServiceError):
    kind = "InvalidCredentials"
    default_message = "Invalid email or password"


class InvalidToken(ServiceError):
    """Token signature or structure did not verify."""

    kind = "InvalidToken"
    default_message = "Invalid token"


class Unauthorized(ServiceError):
    kind = "Unauthorized"
    default_message = "Authentication required"


class InvalidId(ServiceError):
    """Identifier is not structurally valid; checked before any lookup."""

    kind = "InvalidId"
    default_message = "Invalid id"


class NotFound(ServiceError):
    """No matching record owned by the caller."""

    kind = "NotFound"
    default_message = "Not found"


class StoreError(ServiceError):
    """Persistence-layer fault not otherwise classified."""

    kind = "StoreError"
    default_message = "Storage failure"
