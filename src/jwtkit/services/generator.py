from __future__ import annotations

from typing import Any, Iterable, Mapping
from uuid import uuid4

from jwtkit.core.algorithms import AlgorithmRegistry, KeyMaterial, get_default_registry
from jwtkit.core.clock import Clock, system_clock
from jwtkit.core.exceptions import ConfigurationError
from jwtkit.core.token import (
    DEFAULT_ALGORITHM,
    DEFAULT_MAX_AGE_SECONDS,
    UnsignedToken,
    build_token,
    create_token,
    standard_claims,
)
from jwtkit.core.verifier import TokenVerifier, VerificationResult


def new_token_id() -> str:
    return uuid4().hex


class TokenGenerator:
    """Issues and verifies tokens for one key, issuer and lifetime.

    Configuration is fixed at construction time; instances hold no mutable
    state and can be shared between threads.
    """

    def __init__(
        self,
        secret_key: KeyMaterial,
        *,
        iss: str | None = None,
        max_age: int = DEFAULT_MAX_AGE_SECONDS,
        algorithm: str = DEFAULT_ALGORITHM,
        verification_key: KeyMaterial | None = None,
        allowed_issuers: Iterable[str] | None = None,
        clock: Clock | None = None,
        registry: AlgorithmRegistry | None = None,
    ) -> None:
        if secret_key is None or (isinstance(secret_key, (str, bytes)) and not secret_key):
            raise ConfigurationError("Cannot instantiate TokenGenerator without secret key.")
        self._registry = registry or get_default_registry()
        if algorithm not in self._registry:
            raise ConfigurationError(
                f"Unsupported algorithm {algorithm}; expected one of {', '.join(self._registry.supported())}."
            )
        if isinstance(max_age, bool) or not isinstance(max_age, int) or max_age <= 0:
            raise ConfigurationError("max_age must be a positive number of seconds.")

        self._secret_key = secret_key
        self._verification_key = verification_key if verification_key is not None else secret_key
        self._iss = iss
        self._max_age = max_age
        self._algorithm = algorithm
        self._clock = clock or system_clock
        self._allowed_issuers = frozenset(allowed_issuers) if allowed_issuers else None
        self._verifier = TokenVerifier(registry=self._registry, clock=self._clock)

    @property
    def iss(self) -> str | None:
        return self._iss

    @property
    def max_age(self) -> int:
        return self._max_age

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def _resolve_algorithm(self, alg: str | None) -> str:
        alg = alg or self._algorithm
        if alg not in self._registry:
            raise ConfigurationError(
                f"Unsupported algorithm {alg}; expected one of {', '.join(self._registry.supported())}."
            )
        return alg

    def claims(self, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
        payload = dict(payload or {})
        iat = int(self._clock())
        claims = standard_claims(iat, max_age=self._max_age, exp=payload.get("exp"), iss=self._iss)
        claims["jti"] = new_token_id()
        # payload can overwrite any pre-computed claim
        claims.update(payload)
        return claims

    def generate(
        self,
        payload: Mapping[str, Any] | None = None,
        header: Mapping[str, Any] | None = None,
        alg: str | None = None,
    ) -> str:
        return self.create(self.claims(payload), header=header, alg=alg)

    def build(
        self,
        payload: Mapping[str, Any] | None = None,
        header: Mapping[str, Any] | None = None,
        alg: str | None = None,
    ) -> UnsignedToken:
        return build_token(header, self.claims(payload), self._resolve_algorithm(alg))

    def create(
        self,
        payload: Mapping[str, Any] | None = None,
        header: Mapping[str, Any] | None = None,
        alg: str | None = None,
    ) -> str:
        return create_token(
            payload,
            self._secret_key,
            self._resolve_algorithm(alg),
            header=header,
            registry=self._registry,
        )

    def _issuer_policy(self, allowed_issuers: Iterable[str] | None) -> frozenset[str] | None:
        if isinstance(allowed_issuers, str):
            return frozenset({allowed_issuers})
        if allowed_issuers is not None:
            return frozenset(allowed_issuers)
        if self._allowed_issuers is not None:
            return self._allowed_issuers
        if self._iss is not None:
            return frozenset({self._iss})
        return None

    def verify(self, token: str, allowed_issuers: Iterable[str] | None = None) -> dict[str, Any]:
        return self._verifier.verify(
            token,
            self._verification_key,
            allowed_issuers=self._issuer_policy(allowed_issuers),
        )

    def check(self, token: str, allowed_issuers: Iterable[str] | None = None) -> VerificationResult:
        return self._verifier.check(
            token,
            self._verification_key,
            allowed_issuers=self._issuer_policy(allowed_issuers),
        )
