"""Signature algorithms addressable by their JOSE ``alg`` identifier.

Every algorithm implements the same two-call contract:

* ``sign(message, key) -> bytes`` returns the raw signature bytes (base64url
  encoding is the token codec's job).
* ``verify(message, key, signature) -> bool`` returns ``False`` on a mismatch and
  only raises :class:`InvalidKeyError` when the key itself is unusable.

New identifiers are added with :meth:`AlgorithmRegistry.register`; nothing else
has to change for the codec or the verifier to pick them up.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Any, Callable

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature, encode_dss_signature
from cryptography.hazmat.primitives.serialization import load_pem_private_key, load_pem_public_key

from jwtkit.core.exceptions import InvalidKeyError, UnsupportedAlgorithmError

KeyMaterial = Any

_PEM_PREFIXES = (b"-----BEGIN ", b"ssh-rsa ", b"ssh-ed25519 ", b"ecdsa-sha2-")


def _as_bytes(key: KeyMaterial) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise InvalidKeyError(
        f"Unsupported key type: {type(key).__name__}",
        details={"key_type": type(key).__name__},
    )


def _load_private_key(key: KeyMaterial) -> Any:
    try:
        return load_pem_private_key(_as_bytes(key), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyError("Key is not a PEM encoded private key") from exc


def _load_public_key(key: KeyMaterial) -> Any:
    data = _as_bytes(key)
    try:
        return load_pem_public_key(data)
    except (ValueError, TypeError, UnsupportedAlgorithm):
        pass
    # A private key also carries its public half.
    return _load_private_key(data).public_key()


class SignatureAlgorithm:
    """Base class for a registered (sign, verify) pair."""

    family = "abstract"

    def prepare_signing_key(self, key: KeyMaterial) -> Any:
        raise NotImplementedError

    def prepare_verification_key(self, key: KeyMaterial) -> Any:
        raise NotImplementedError

    def sign(self, message: bytes, key: KeyMaterial) -> bytes:
        raise NotImplementedError

    def verify(self, message: bytes, key: KeyMaterial, signature: bytes) -> bool:
        raise NotImplementedError


class HMACAlgorithm(SignatureAlgorithm):
    family = "symmetric"

    def __init__(self, digest: Callable[..., Any]) -> None:
        self._digest = digest

    def prepare_signing_key(self, key: KeyMaterial) -> bytes:
        secret = _as_bytes(key)
        if not secret:
            raise InvalidKeyError("HMAC secret must not be empty")
        if secret.lstrip().startswith(_PEM_PREFIXES):
            raise InvalidKeyError("Asymmetric key material cannot be used as an HMAC secret")
        return secret

    prepare_verification_key = prepare_signing_key

    def sign(self, message: bytes, key: KeyMaterial) -> bytes:
        return hmac.new(self.prepare_signing_key(key), message, self._digest).digest()

    def verify(self, message: bytes, key: KeyMaterial, signature: bytes) -> bool:
        expected = self.sign(message, key)
        return hmac.compare_digest(expected, signature)


class RSAAlgorithm(SignatureAlgorithm):
    """RSASSA-PKCS1-v1_5 over the given hash."""

    family = "asymmetric"

    def __init__(self, hash_algorithm: hashes.HashAlgorithm) -> None:
        self._hash = hash_algorithm

    def prepare_signing_key(self, key: KeyMaterial) -> rsa.RSAPrivateKey:
        if not isinstance(key, rsa.RSAPrivateKey):
            key = _load_private_key(key)
        if not isinstance(key, rsa.RSAPrivateKey):
            raise InvalidKeyError("Key is not an RSA private key")
        return key

    def prepare_verification_key(self, key: KeyMaterial) -> rsa.RSAPublicKey:
        if isinstance(key, rsa.RSAPrivateKey):
            return key.public_key()
        if not isinstance(key, rsa.RSAPublicKey):
            key = _load_public_key(key)
        if not isinstance(key, rsa.RSAPublicKey):
            raise InvalidKeyError("Key is not an RSA public key")
        return key

    def sign(self, message: bytes, key: KeyMaterial) -> bytes:
        private_key = self.prepare_signing_key(key)
        return private_key.sign(message, padding.PKCS1v15(), self._hash)

    def verify(self, message: bytes, key: KeyMaterial, signature: bytes) -> bool:
        public_key = self.prepare_verification_key(key)
        try:
            public_key.verify(signature, message, padding.PKCS1v15(), self._hash)
        except InvalidSignature:
            return False
        return True


class ECAlgorithm(SignatureAlgorithm):
    """ECDSA with the JOSE fixed-width ``r || s`` signature encoding."""

    family = "asymmetric"

    def __init__(self, hash_algorithm: hashes.HashAlgorithm, curve: ec.EllipticCurve) -> None:
        self._hash = hash_algorithm
        self._curve = curve

    @property
    def coordinate_size(self) -> int:
        return (self._curve.key_size + 7) // 8

    def _check_curve(self, key: Any) -> None:
        if key.curve.name != self._curve.name:
            raise InvalidKeyError(
                f"EC key curve {key.curve.name} does not match {self._curve.name}",
                details={"curve": key.curve.name, "expected_curve": self._curve.name},
            )

    def prepare_signing_key(self, key: KeyMaterial) -> ec.EllipticCurvePrivateKey:
        if not isinstance(key, ec.EllipticCurvePrivateKey):
            key = _load_private_key(key)
        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise InvalidKeyError("Key is not an EC private key")
        self._check_curve(key)
        return key

    def prepare_verification_key(self, key: KeyMaterial) -> ec.EllipticCurvePublicKey:
        if isinstance(key, ec.EllipticCurvePrivateKey):
            key = key.public_key()
        elif not isinstance(key, ec.EllipticCurvePublicKey):
            key = _load_public_key(key)
        if not isinstance(key, ec.EllipticCurvePublicKey):
            raise InvalidKeyError("Key is not an EC public key")
        self._check_curve(key)
        return key

    def sign(self, message: bytes, key: KeyMaterial) -> bytes:
        private_key = self.prepare_signing_key(key)
        der_signature = private_key.sign(message, ec.ECDSA(self._hash))
        r, s = decode_dss_signature(der_signature)
        size = self.coordinate_size
        return r.to_bytes(size, "big") + s.to_bytes(size, "big")

    def verify(self, message: bytes, key: KeyMaterial, signature: bytes) -> bool:
        public_key = self.prepare_verification_key(key)
        size = self.coordinate_size
        if len(signature) != 2 * size:
            return False
        r = int.from_bytes(signature[:size], "big")
        s = int.from_bytes(signature[size:], "big")
        try:
            public_key.verify(encode_dss_signature(r, s), message, ec.ECDSA(self._hash))
        except InvalidSignature:
            return False
        return True


class AlgorithmRegistry:
    def __init__(self, algorithms: dict[str, SignatureAlgorithm] | None = None) -> None:
        self._algorithms: dict[str, SignatureAlgorithm] = dict(algorithms or {})

    def register(self, name: str, algorithm: SignatureAlgorithm, *, replace: bool = False) -> None:
        if name in self._algorithms and not replace:
            raise ValueError(f"Algorithm {name} is already registered.")
        self._algorithms[name] = algorithm

    def unregister(self, name: str) -> None:
        self._algorithms.pop(name, None)

    def supported(self) -> tuple[str, ...]:
        return tuple(sorted(self._algorithms))

    def get(self, name: Any) -> SignatureAlgorithm:
        algorithm = self._algorithms.get(name) if isinstance(name, str) else None
        if algorithm is None:
            raise UnsupportedAlgorithmError(
                f"Token: unsupported algorithm {name}",
                details={"alg": name, "supported": list(self.supported())},
            )
        return algorithm

    def sign(self, name: str, message: bytes, key: KeyMaterial) -> bytes:
        return self.get(name).sign(message, key)

    def verify(self, name: str, message: bytes, key: KeyMaterial, signature: bytes) -> bool:
        return self.get(name).verify(message, key, signature)

    def copy(self) -> AlgorithmRegistry:
        return AlgorithmRegistry(self._algorithms)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._algorithms

    def __len__(self) -> int:
        return len(self._algorithms)


default_registry = AlgorithmRegistry(
    {
        "HS256": HMACAlgorithm(hashlib.sha256),
        "HS384": HMACAlgorithm(hashlib.sha384),
        "HS512": HMACAlgorithm(hashlib.sha512),
        "RS256": RSAAlgorithm(hashes.SHA256()),
        "RS384": RSAAlgorithm(hashes.SHA384()),
        "RS512": RSAAlgorithm(hashes.SHA512()),
        "ES256": ECAlgorithm(hashes.SHA256(), ec.SECP256R1()),
        "ES384": ECAlgorithm(hashes.SHA384(), ec.SECP384R1()),
        "ES512": ECAlgorithm(hashes.SHA512(), ec.SECP521R1()),
    }
)


def get_default_registry() -> AlgorithmRegistry:
    return default_registry
