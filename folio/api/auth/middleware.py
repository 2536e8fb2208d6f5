"""Authentication middleware for FastAPI.

The archive has a single editor whose credentials come from the
environment. Editorial endpoints require a bearer JWT issued by
``/me.authenticate``; public reads need no token.
"""

import hmac
import logging
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from .schemas import AuthFailureLog, AuthUser, TokenPayload

# Load the .env at the project root
_project_root = Path(__file__).resolve().parents[3]
load_dotenv(_project_root / ".env")

logger = logging.getLogger(__name__)

# JWT settings
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-secret-key-change-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Editor credentials
EDITOR_USERNAME = os.getenv("EDITOR_USERNAME", "editor")
EDITOR_PASSWORD = os.getenv("EDITOR_PASSWORD", "")
EDITOR_ROLES = ["editor"]

# Development mode skips authentication
ENVIRONMENT = os.getenv("ENVIRONMENT", "production")
SKIP_AUTH = ENVIRONMENT == "development"

# HTTPBearer scheme
security = HTTPBearer(auto_error=False)


class AuthError(Exception):
    """Authentication error."""

    def __init__(self, message: str, reason: str = "unknown"):
        self.message = message
        self.reason = reason
        super().__init__(message)


def authenticate_editor(username: str, password: str) -> AuthUser:
    """Check editor credentials.

    Raises:
        AuthError: Unknown username, wrong password, or no password configured
    """
    if not EDITOR_PASSWORD:
        raise AuthError("Editor login is disabled", reason="login_disabled")

    username_ok = hmac.compare_digest(username.encode("utf-8"), EDITOR_USERNAME.encode("utf-8"))
    password_ok = hmac.compare_digest(password.encode("utf-8"), EDITOR_PASSWORD.encode("utf-8"))
    if not (username_ok and password_ok):
        raise AuthError("Invalid username or password", reason="invalid_credentials")

    return AuthUser(user_id=EDITOR_USERNAME, roles=EDITOR_ROLES)


def create_access_token(
    user_id: str,
    roles: list[str] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue an access token."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(timezone.utc)
    expire = now + expires_delta

    payload = TokenPayload(
        sub=user_id,
        exp=int(expire.timestamp()),
        iat=int(now.timestamp()),
        type="access",
        roles=roles or [],
    )

    return str(jwt.encode(payload.model_dump(), JWT_SECRET_KEY, algorithm=JWT_ALGORITHM))


def verify_token(token: str, expected_type: str = "access") -> TokenPayload:
    """Verify a JWT.

    Args:
        token: Encoded JWT
        expected_type: Expected token type

    Returns:
        TokenPayload: Verified payload

    Raises:
        AuthError: On any verification failure
    """
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
        token_data = TokenPayload(**payload)

        if token_data.type != expected_type:
            raise AuthError(
                f"Invalid token type: expected {expected_type}, got {token_data.type}",
                reason="invalid_token_type",
            )

        # jose checks exp already; keep the explicit check for clock-skewed payloads
        if datetime.now(timezone.utc).timestamp() > token_data.exp:
            raise AuthError("Token has expired", reason="token_expired")

        if token_data.sub != EDITOR_USERNAME:
            raise AuthError("Token subject is not the editor", reason="unknown_subject")

        return token_data

    except JWTError as e:
        raise AuthError(f"Token validation failed: {e}", reason="invalid_token") from e


async def log_auth_failure(
    request: Request,
    reason: str,
    token_fragment: str | None = None,
) -> None:
    """Record an authentication failure."""
    log_entry = AuthFailureLog(
        reason=reason,
        token_fragment=token_fragment[:10] if token_fragment else None,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )

    logger.warning(
        f"Auth failure: {reason}",
        extra={
            "extra_data": log_entry.model_dump(mode="json"),
        },
    )


async def get_current_editor(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AuthUser:
    """Resolve the editor behind the bearer token.

    NOTE: development mode skips authentication and returns the editor.
    """
    if SKIP_AUTH:
        return AuthUser(user_id=EDITOR_USERNAME, roles=EDITOR_ROLES)

    if credentials is None:
        await log_auth_failure(request, "missing_credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        token_data = verify_token(credentials.credentials)
        return AuthUser(user_id=token_data.sub, roles=token_data.roles)

    except AuthError as e:
        await log_auth_failure(
            request,
            e.reason,
            credentials.credentials[:10] if credentials.credentials else None,
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
