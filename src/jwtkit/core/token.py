from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from jwtkit.core import b64url
from jwtkit.core.algorithms import AlgorithmRegistry, KeyMaterial, get_default_registry
from jwtkit.core.clock import Clock, system_clock
from jwtkit.core.exceptions import EncodingError, MalformedTokenError

TOKEN_TYPE = "JWT"
DEFAULT_ALGORITHM = "HS256"
DEFAULT_MAX_AGE_SECONDS = 3600 * 24


@dataclass(frozen=True)
class UnsignedToken:
    header: dict[str, Any]
    payload: dict[str, Any]
    header_segment: str
    payload_segment: str

    @property
    def signing_input(self) -> str:
        return f"{self.header_segment}.{self.payload_segment}"


@dataclass(frozen=True)
class ParsedToken:
    header: dict[str, Any]
    payload: dict[str, Any]
    header_segment: str
    payload_segment: str
    signature_segment: str

    @property
    def signing_input(self) -> str:
        return f"{self.header_segment}.{self.payload_segment}"

    @property
    def alg(self) -> Any:
        return self.header.get("alg")


def _json_compact(data: Mapping[str, Any]) -> bytes:
    try:
        text = json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Token content is not JSON serializable: {exc}") from exc
    return text.encode("utf-8")


def _reject_constant(value: str) -> Any:
    raise ValueError(f"Unsupported JSON constant {value}")


def _json_segment(segment: str, name: str) -> dict[str, Any]:
    try:
        text = b64url.decode_text(segment)
    except EncodingError as exc:
        raise MalformedTokenError(f"Token: invalid {name} encoding", details={"segment": name}) from exc
    # ValueError also covers oversized integer literals and NaN/Infinity
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise MalformedTokenError(f"Token: invalid {name} JSON", details={"segment": name}) from exc
    if not isinstance(value, dict):
        raise MalformedTokenError(f"Token: {name} is not a JSON object", details={"segment": name})
    return value


def build_header(alg: str, header_extra: Mapping[str, Any] | None = None) -> dict[str, Any]:
    header: dict[str, Any] = {"alg": alg, "typ": TOKEN_TYPE}
    if header_extra:
        header.update(header_extra)
    # alg always follows the key that signs the token
    header["alg"] = alg
    return header


def build_token(
    header_extra: Mapping[str, Any] | None,
    payload: Mapping[str, Any] | None,
    alg: str = DEFAULT_ALGORITHM,
) -> UnsignedToken:
    header = build_header(alg, header_extra)
    body = dict(payload or {})
    return UnsignedToken(
        header=header,
        payload=body,
        header_segment=b64url.encode(_json_compact(header)),
        payload_segment=b64url.encode(_json_compact(body)),
    )


def create_token(
    payload: Mapping[str, Any] | None,
    key: KeyMaterial,
    alg: str = DEFAULT_ALGORITHM,
    header: Mapping[str, Any] | None = None,
    registry: AlgorithmRegistry | None = None,
) -> str:
    algorithm = (registry or get_default_registry()).get(alg)
    unsigned = build_token(header, payload, alg)
    signature = algorithm.sign(unsigned.signing_input.encode("ascii"), key)
    return f"{unsigned.signing_input}.{b64url.encode(signature)}"


def parse_token(token: str) -> ParsedToken:
    if not isinstance(token, str):
        raise MalformedTokenError("Token: token must be a string")
    fragments = token.split(".")
    if len(fragments) != 3:
        raise MalformedTokenError(
            "Token: invalid number of fragments",
            details={"fragments": len(fragments)},
        )
    if not all(fragments):
        raise MalformedTokenError("Token: empty fragment")

    header_segment, payload_segment, signature_segment = fragments
    return ParsedToken(
        header=_json_segment(header_segment, "header"),
        payload=_json_segment(payload_segment, "payload"),
        header_segment=header_segment,
        payload_segment=payload_segment,
        signature_segment=signature_segment,
    )


def standard_claims(
    iat: int,
    *,
    max_age: int = DEFAULT_MAX_AGE_SECONDS,
    exp: int | None = None,
    iss: str | None = None,
) -> dict[str, Any]:
    claims: dict[str, Any] = {
        "iat": iat,
        "exp": exp if exp is not None else iat + max_age,
    }
    if iss is not None:
        claims["iss"] = iss
    return claims


def generate_token(
    payload: Mapping[str, Any] | None,
    key: KeyMaterial,
    *,
    alg: str = DEFAULT_ALGORITHM,
    header: Mapping[str, Any] | None = None,
    iss: str | None = None,
    max_age: int = DEFAULT_MAX_AGE_SECONDS,
    exp: int | None = None,
    clock: Clock | None = None,
    registry: AlgorithmRegistry | None = None,
) -> str:
    iat = int((clock or system_clock)())
    claims = standard_claims(iat, max_age=max_age, exp=exp, iss=iss)
    # caller claims overwrite the computed ones
    claims.update(payload or {})
    return create_token(claims, key, alg, header=header, registry=registry)
