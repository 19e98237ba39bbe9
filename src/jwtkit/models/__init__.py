from jwtkit.models.auth import (
    AuthTokenRequest,
    AuthTokenResponse,
    IntrospectionRequest,
    IntrospectionResponse,
    TokenClaimsResponse,
)

__all__ = [
    "AuthTokenRequest",
    "AuthTokenResponse",
    "IntrospectionRequest",
    "IntrospectionResponse",
    "TokenClaimsResponse",
]
