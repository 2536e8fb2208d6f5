"""Authentication module for the archive API.

- Single-editor credential check
- JWT issuance and verification
- Failure logging
"""

from .middleware import (
    AuthError,
    authenticate_editor,
    create_access_token,
    get_current_editor,
    verify_token,
)
from .schemas import AuthUser, LoginRequest, LoginResponse, TokenPayload

__all__ = [
    "AuthError",
    "authenticate_editor",
    "create_access_token",
    "get_current_editor",
    "verify_token",
    "TokenPayload",
    "AuthUser",
    "LoginRequest",
    "LoginResponse",
]
