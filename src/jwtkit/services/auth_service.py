from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jwtkit.core.clock import Clock
from jwtkit.core.config import Settings
from jwtkit.core.exceptions import ConfigurationError, TokenError
from jwtkit.core.verifier import VerificationResult
from jwtkit.services.generator import TokenGenerator


@dataclass(frozen=True)
class AuthUser:
    username: str
    claims: dict[str, Any] = field(default_factory=dict, compare=False)


def _read_key_file(path: str, label: str) -> bytes:
    try:
        return Path(path).expanduser().read_bytes()
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {label} from {path}: {exc}") from exc


def build_token_generator(settings: Settings, clock: Clock | None = None) -> TokenGenerator:
    algorithm = settings.jwt_algorithm
    if algorithm.startswith("HS"):
        signing_key: Any = settings.jwt_secret_key
        verification_key: Any = None
    else:
        if not settings.jwt_private_key_path:
            raise ConfigurationError(f"JWT_PRIVATE_KEY_PATH is required for {algorithm} tokens.")
        signing_key = _read_key_file(settings.jwt_private_key_path, "private key")
        verification_key = None
        if settings.jwt_public_key_path:
            verification_key = _read_key_file(settings.jwt_public_key_path, "public key")

    return TokenGenerator(
        signing_key,
        iss=settings.jwt_issuer or None,
        max_age=settings.jwt_max_age_seconds,
        algorithm=algorithm,
        verification_key=verification_key,
        allowed_issuers=settings.jwt_allowed_issuers or None,
        clock=clock,
    )


def _same_secret(provided: str, expected: str) -> bool:
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


class AuthService:
    def __init__(self, settings: Settings, generator: TokenGenerator | None = None) -> None:
        self._settings = settings
        self._generator = generator or build_token_generator(settings)

    @property
    def auth_enabled(self) -> bool:
        return self._settings.api_auth_enabled

    @property
    def token_ttl_seconds(self) -> int:
        return self._generator.max_age

    @property
    def generator(self) -> TokenGenerator:
        return self._generator

    def issue_access_token(self, username: str, password: str) -> str:
        valid_username = _same_secret(username, self._settings.api_auth_username)
        valid_password = _same_secret(password, self._settings.api_auth_password)
        if not (valid_username and valid_password):
            raise PermissionError("Invalid username or password.")
        return self.issue_access_token_for_subject(self._settings.api_auth_username)

    def issue_access_token_for_subject(self, subject: str) -> str:
        expected_username = self._settings.api_auth_username
        if not _same_secret(subject, expected_username):
            raise PermissionError("Invalid token subject.")
        return self._generator.generate({"sub": expected_username})

    def validate_access_token(self, token: str) -> AuthUser:
        try:
            claims = self._generator.verify(token)
        except TokenError as exc:
            raise PermissionError(str(exc)) from exc
        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise PermissionError("Token is missing subject.")
        return AuthUser(username=subject, claims=claims)

    def introspect(self, token: str) -> VerificationResult:
        return self._generator.check(token)
