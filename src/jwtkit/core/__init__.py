from jwtkit.core.algorithms import AlgorithmRegistry, SignatureAlgorithm, default_registry, get_default_registry
from jwtkit.core.clock import FixedClock, system_clock
from jwtkit.core.config import Settings, get_settings
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
from jwtkit.core.logging import configure_logging
from jwtkit.core.token import ParsedToken, UnsignedToken, build_token, create_token, generate_token, parse_token
from jwtkit.core.verifier import TokenVerifier, VerificationResult, verify_token

__all__ = [
    "AlgorithmRegistry",
    "SignatureAlgorithm",
    "default_registry",
    "get_default_registry",
    "FixedClock",
    "system_clock",
    "Settings",
    "get_settings",
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
    "configure_logging",
    "ParsedToken",
    "UnsignedToken",
    "build_token",
    "create_token",
    "generate_token",
    "parse_token",
    "TokenVerifier",
    "VerificationResult",
    "verify_token",
]
