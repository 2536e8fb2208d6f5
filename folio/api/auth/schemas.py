"""Authentication schemas."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str = Field(..., description="Subject (editor username)")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    type: str = Field(default="access", description="Token type")
    roles: list[str] = Field(default_factory=list, description="Editor roles")


class AuthUser(BaseModel):
    """Authenticated editor."""

    user_id: str = Field(..., description="Editor username")
    roles: list[str] = Field(default_factory=list, description="Editor roles")


class LoginRequest(BaseModel):
    """Login request."""

    username: str = Field(..., min_length=1, description="Editor username")
    password: str = Field(..., min_length=1, description="Editor password")


class LoginResponse(BaseModel):
    """Login response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token expiry in seconds")
    user: AuthUser


class AuthFailureLog(BaseModel):
    """Authentication failure record."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    reason: str
    token_fragment: str | None = None  # first 10 characters only
    ip_address: str | None = None
    user_agent: str | None = None
