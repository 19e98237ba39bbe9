from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from jwtkit.api.dependencies import get_auth_service
from jwtkit.models import IntrospectionRequest, IntrospectionResponse
from jwtkit.services import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Tokens"])


@router.post(
    "/api/tokens/introspect",
    response_model=IntrospectionResponse,
    summary="Introspect a token",
    description="Runs the full verification pipeline and reports whether the token is currently active.",
)
def introspect_token(
    payload: IntrospectionRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> IntrospectionResponse:
    result = auth_service.introspect(payload.token)
    if result.error is not None:
        logger.info("Introspected inactive token reason=%s", result.reason)
        return IntrospectionResponse(active=False, reason=result.reason, detail=result.error.message)
    return IntrospectionResponse(active=True, claims=result.claims)
