from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jwtkit.core.config import Settings, get_settings
from jwtkit.services import AuthService
from jwtkit.services.auth_service import AuthUser

http_bearer = HTTPBearer(auto_error=False)


@lru_cache(maxsize=1)
def _cached_auth_service(settings: Settings) -> AuthService:
    return AuthService(settings=settings)


def get_auth_service(settings: Settings = Depends(get_settings)) -> AuthService:
    return _cached_auth_service(settings)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_bearer_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthUser:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Missing bearer token.")
    try:
        return auth_service.validate_access_token(credentials.credentials)
    except PermissionError as exc:
        raise _unauthorized(str(exc)) from exc


def require_api_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthUser:
    if not auth_service.auth_enabled:
        return AuthUser(username="anonymous")
    return require_bearer_user(credentials, auth_service)


def clear_dependency_caches() -> None:
    _cached_auth_service.cache_clear()
