from __future__ import annotations

from typing import Any


class ConfigurationError(ValueError):
    """Raised when a generator or service is built with unusable settings."""


class TokenError(ValueError):
    """Raised when a token cannot be produced or accepted."""

    reason = "token_error"

    def __init__(self, message: str, *, reason: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        if reason is not None:
            self.reason = reason
        self.details = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        return {"reason": self.reason, "message": self.message, "details": dict(self.details)}


class MalformedTokenError(TokenError):
    reason = "malformed"


class UnsupportedAlgorithmError(TokenError):
    reason = "unsupported_algorithm"


class NotYetValidError(TokenError):
    reason = "not_yet_valid"


class ExpiredTokenError(TokenError):
    reason = "expired"


class InvalidSignatureError(TokenError):
    reason = "invalid_signature"


class IssuerNotAllowedError(TokenError):
    reason = "issuer_not_allowed"


class InvalidKeyError(TokenError):
    """Raised when key material does not fit the requested algorithm."""

    reason = "invalid_key"


class EncodingError(TokenError):
    """Raised on base64url or JSON serialization failures."""

    reason = "encoding"
