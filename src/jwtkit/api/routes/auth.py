from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from jwtkit.api.dependencies import get_auth_service, require_api_user, require_bearer_user
from jwtkit.models import AuthTokenRequest, AuthTokenResponse, TokenClaimsResponse
from jwtkit.services import AuthService
from jwtkit.services.auth_service import AuthUser

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Authentication"])


@router.post(
    "/api/auth/token",
    response_model=AuthTokenResponse,
    summary="Issue JWT access token",
    description="Authenticates API user credentials and returns a signed bearer token.",
    responses={401: {"description": "Invalid credentials."}},
)
def issue_access_token(
    payload: AuthTokenRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthTokenResponse:
    try:
        token = auth_service.issue_access_token(payload.username, payload.password)
    except PermissionError as exc:
        logger.warning("Authentication failed for username=%s", payload.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        ) from exc

    logger.info("Issued access token for username=%s", payload.username)
    return AuthTokenResponse(
        accessToken=token,
        tokenType="bearer",
        expiresInSeconds=auth_service.token_ttl_seconds,
    )


@router.post(
    "/api/auth/refresh",
    response_model=AuthTokenResponse,
    summary="Refresh JWT access token",
    description="Issues a new token with a fresh expiry and identifier for a still-valid bearer token.",
    responses={401: {"description": "Invalid or expired bearer token."}},
)
def refresh_access_token(
    auth_user: AuthUser = Depends(require_bearer_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthTokenResponse:
    try:
        token = auth_service.issue_access_token_for_subject(auth_user.username)
    except PermissionError as exc:
        logger.warning("Token refresh denied for username=%s", auth_user.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc
    logger.info("Refreshed access token for username=%s", auth_user.username)
    return AuthTokenResponse(
        accessToken=token,
        tokenType="bearer",
        expiresInSeconds=auth_service.token_ttl_seconds,
    )


@router.get(
    "/api/auth/me",
    response_model=TokenClaimsResponse,
    summary="Describe the current bearer token",
    responses={401: {"description": "Invalid or expired bearer token."}},
)
def current_user(auth_user: AuthUser = Depends(require_api_user)) -> TokenClaimsResponse:
    return TokenClaimsResponse(subject=auth_user.username, claims=auth_user.claims)
