from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AuthTokenRequest(BaseModel):
    username: str
    password: str


class AuthTokenResponse(BaseModel):
    access_token: str = Field(alias="accessToken")
    token_type: str = Field(default="bearer", alias="tokenType")
    expires_in_seconds: int = Field(alias="expiresInSeconds")


class TokenClaimsResponse(BaseModel):
    subject: str
    claims: dict[str, Any] = Field(default_factory=dict)


class IntrospectionRequest(BaseModel):
    token: str = Field(min_length=1)


class IntrospectionResponse(BaseModel):
    active: bool
    claims: dict[str, Any] | None = None
    reason: str | None = None
    detail: str | None = None
