"""Shared constants."""

# Header carrying the session token on requests and on register/login responses
AUTH_HEADER = "x-auth"

# The only access level a session token is issued with
ACCESS_AUTH = "auth"

# Record identifiers are 12 random bytes rendered as hex
ID_BYTES = 12
ID_LENGTH = ID_BYTES * 2
