"""Record identifiers: fixed-length lowercase hex strings."""

import re
import secrets

from todo_service.utils.constants import ID_BYTES, ID_LENGTH

_ID_RE = re.compile(rf"^[0-9a-fA-F]{{{ID_LENGTH}}}$")


def new_id() -> str:
    return secrets.token_hex(ID_BYTES)


def is_valid_id(value) -> bool:
    """True if value has the structural shape of a record id."""
    return isinstance(value, str) and _ID_RE.fullmatch(value) is not None


def normalize_id(value: str) -> str:
    return value.lower()
