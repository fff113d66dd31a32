"""Authentication endpoints for the demo login."""

import asyncio
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from components.core.config import get_settings
from components.core.schemas import AuthUser, LoginRequest, LoginResponse, MessageResponse
from components.core.security import (
    create_access_token,
    demo_user,
    verify_credentials,
    verify_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthUser:
    """Get current user from the session token."""
    user = verify_token(credentials.credentials) if credentials else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": MessageResponse, "description": "Invalid credentials"}},
)
async def login(credentials: LoginRequest) -> Any:
    """Check the demo credentials after a simulated network delay."""
    delay_ms = get_settings().LOGIN_DELAY_MS
    if delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000)

    if not verify_credentials(credentials.email, credentials.password):
        logger.warning("Rejected login for %s", credentials.email)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": "Identifiants invalides"},
        )

    user = demo_user()
    logger.info("User %s logged in", user.email)
    return LoginResponse(token=create_access_token(user.email), user=user)
