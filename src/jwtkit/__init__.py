"""Compact signed tokens (JWS/JWT): creation, parsing and ordered verification."""

from jwtkit.core import b64url
from jwtkit.core.algorithms import (
    AlgorithmRegistry,
    ECAlgorithm,
    HMACAlgorithm,
    RSAAlgorithm,
    SignatureAlgorithm,
    default_registry,
    get_default_registry,
)
from jwtkit.core.clock import FixedClock, system_clock
from jwtkit.core.exceptions import (
    ConfigurationError,
    EncodingError,
    ExpiredTokenError,
    InvalidKeyError,
    InvalidSignatureError,
    IssuerNotAllowedError,
    MalformedTokenError,
    NotYetValidError,
    TokenError,
    UnsupportedAlgorithmError,
)
from jwtkit.core.token import ParsedToken, UnsignedToken, build_token, create_token, generate_token, parse_token
from jwtkit.core.verifier import TokenVerifier, VerificationResult, verify_token
from jwtkit.services.generator import TokenGenerator

__version__ = "1.0.0"

__all__ = [
    "b64url",
    "AlgorithmRegistry",
    "ECAlgorithm",
    "HMACAlgorithm",
    "RSAAlgorithm",
    "SignatureAlgorithm",
    "default_registry",
    "get_default_registry",
    "FixedClock",
    "system_clock",
    "ConfigurationError",
    "EncodingError",
    "ExpiredTokenError",
    "InvalidKeyError",
    "InvalidSignatureError",
    "IssuerNotAllowedError",
    "MalformedTokenError",
    "NotYetValidError",
    "TokenError",
    "UnsupportedAlgorithmError",
    "ParsedToken",
    "UnsignedToken",
    "build_token",
    "create_token",
    "generate_token",
    "parse_token",
    "TokenVerifier",
    "VerificationResult",
    "verify_token",
    "TokenGenerator",
]
