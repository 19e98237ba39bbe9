"""Ordered token verification.

The pipeline runs these steps in order and stops at the first failure:

1. structural parse of the compact token
2. ``nbf`` (not-before)
3. ``exp`` (expiration)
4. ``alg`` resolution against the registry
5. signature over the original encoded segments
6. issuer allowlist, when one is given

Temporal checks run before any key is touched, and no signature call is made for
an algorithm the registry does not know.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Collection, Iterable

from jwtkit.core import b64url
from jwtkit.core.algorithms import AlgorithmRegistry, KeyMaterial, SignatureAlgorithm, get_default_registry
from jwtkit.core.clock import Clock, system_clock
from jwtkit.core.exceptions import (
    EncodingError,
    ExpiredTokenError,
    InvalidSignatureError,
    IssuerNotAllowedError,
    MalformedTokenError,
    NotYetValidError,
    TokenError,
    UnsupportedAlgorithmError,
)
from jwtkit.core.token import ParsedToken, parse_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    claims: dict[str, Any] | None = None
    error: TokenError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> str | None:
        return None if self.error is None else self.error.reason


@dataclass
class _Verification:
    parsed: ParsedToken
    key: KeyMaterial
    now: float
    allowed_issuers: frozenset[str] | None
    algorithms: frozenset[str] | None
    algorithm: SignatureAlgorithm | None = field(default=None)


def _numeric_claim(payload: dict[str, Any], name: str) -> float | None:
    value = payload.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedTokenError(f"Token: {name} must be a number", details={name: value})
    if isinstance(value, float) and not math.isfinite(value):
        raise MalformedTokenError(f"Token: {name} must be finite", details={name: str(value)})
    return value


def _issuer_set(issuers: str | Iterable[str] | None) -> frozenset[str] | None:
    if issuers is None:
        return None
    if isinstance(issuers, str):
        return frozenset({issuers})
    return frozenset(issuers)


class TokenVerifier:
    def __init__(self, registry: AlgorithmRegistry | None = None, clock: Clock | None = None) -> None:
        self._registry = registry or get_default_registry()
        self._clock = clock or system_clock
        self._checks: tuple[Callable[[_Verification], None], ...] = (
            self._check_not_before,
            self._check_expiration,
            self._resolve_algorithm,
            self._check_signature,
            self._check_issuer,
        )

    @property
    def registry(self) -> AlgorithmRegistry:
        return self._registry

    def verify(
        self,
        token: str,
        key: KeyMaterial,
        *,
        allowed_issuers: str | Iterable[str] | None = None,
        algorithms: Collection[str] | None = None,
    ) -> dict[str, Any]:
        try:
            state = _Verification(
                parsed=parse_token(token),
                key=key,
                now=self._clock(),
                allowed_issuers=_issuer_set(allowed_issuers),
                algorithms=None if algorithms is None else frozenset(algorithms),
            )
            for check in self._checks:
                check(state)
        except TokenError as exc:
            logger.debug("Token rejected: reason=%s", exc.reason)
            raise
        return dict(state.parsed.payload)

    def check(
        self,
        token: str,
        key: KeyMaterial,
        *,
        allowed_issuers: str | Iterable[str] | None = None,
        algorithms: Collection[str] | None = None,
    ) -> VerificationResult:
        try:
            claims = self.verify(token, key, allowed_issuers=allowed_issuers, algorithms=algorithms)
        except TokenError as exc:
            return VerificationResult(error=exc)
        return VerificationResult(claims=claims)

    def _check_not_before(self, state: _Verification) -> None:
        nbf = _numeric_claim(state.parsed.payload, "nbf")
        if nbf is not None and nbf > state.now:
            raise NotYetValidError("Token: invalid nbf", details={"nbf": nbf, "now": state.now})

    def _check_expiration(self, state: _Verification) -> None:
        exp = _numeric_claim(state.parsed.payload, "exp")
        if exp is not None and exp < state.now:
            raise ExpiredTokenError("Token: expired token", details={"exp": exp, "now": state.now})

    def _resolve_algorithm(self, state: _Verification) -> None:
        alg = state.parsed.alg
        if state.algorithms is not None and alg not in state.algorithms:
            raise UnsupportedAlgorithmError(
                f"Token: unsupported algorithm {alg}",
                details={"alg": alg, "supported": sorted(state.algorithms)},
            )
        state.algorithm = self._registry.get(alg)

    def _check_signature(self, state: _Verification) -> None:
        parsed = state.parsed
        try:
            signature = b64url.decode(parsed.signature_segment)
        except EncodingError as exc:
            raise InvalidSignatureError("Token: invalid signature") from exc
        # only the canonical spelling of the signature bytes is accepted
        if b64url.encode(signature) != parsed.signature_segment:
            raise InvalidSignatureError("Token: invalid signature")
        algorithm = state.algorithm or self._registry.get(parsed.alg)
        if not algorithm.verify(parsed.signing_input.encode("ascii"), state.key, signature):
            raise InvalidSignatureError("Token: invalid signature")

    def _check_issuer(self, state: _Verification) -> None:
        if state.allowed_issuers is None:
            return
        iss = state.parsed.payload.get("iss")
        if not isinstance(iss, str) or iss not in state.allowed_issuers:
            raise IssuerNotAllowedError(
                "Token: iss not allowed",
                details={"iss": iss, "allowed_issuers": sorted(state.allowed_issuers)},
            )


def verify_token(
    token: str,
    key: KeyMaterial,
    *,
    allowed_issuers: str | Iterable[str] | None = None,
    algorithms: Collection[str] | None = None,
    clock: Clock | None = None,
    registry: AlgorithmRegistry | None = None,
) -> dict[str, Any]:
    verifier = TokenVerifier(registry=registry, clock=clock)
    return verifier.verify(token, key, allowed_issuers=allowed_issuers, algorithms=algorithms)
