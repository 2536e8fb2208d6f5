"""Authentication router.

Issues editor access tokens.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from folio.api.auth import get_current_editor
from folio.api.auth.middleware import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    AuthError,
    authenticate_editor,
    create_access_token,
    log_auth_failure,
)
from folio.api.auth.schemas import AuthUser, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/me.authenticate", response_model=LoginResponse)
async def authenticate(request: LoginRequest, http_request: Request) -> LoginResponse:
    """Exchange editor credentials for an access token."""
    try:
        user = authenticate_editor(request.username, request.password)
    except AuthError as e:
        await log_auth_failure(http_request, e.reason)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    access_token = create_access_token(user.user_id, user.roles)
    logger.info(f"Editor authenticated: {user.user_id}")
    return LoginResponse(
        access_token=access_token,
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=user,
    )


@router.get("/me.whoami", response_model=AuthUser)
async def whoami(user: AuthUser = Depends(get_current_editor)) -> AuthUser:
    """Return the editor behind the current token."""
    return user
