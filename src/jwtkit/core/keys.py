"""PEM key pair helpers for the RS* and ES* algorithms."""

from __future__ import annotations

import os
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

EC_CURVES = {
    "P-256": ec.SECP256R1,
    "P-384": ec.SECP384R1,
    "P-521": ec.SECP521R1,
}


def _serialize(private_key) -> tuple[str, str]:
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")
    return private_pem, public_pem


def generate_rsa_key_pair(key_size: int = 2048) -> tuple[str, str]:
    """Return ``(private_pem, public_pem)`` for a new RSA key."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
    return _serialize(private_key)


def generate_ec_key_pair(curve: str = "P-256") -> tuple[str, str]:
    """Return ``(private_pem, public_pem)`` for a new EC key on a NIST curve."""
    try:
        curve_cls = EC_CURVES[curve]
    except KeyError as exc:
        raise ValueError(f"Unsupported curve {curve}; expected one of {', '.join(EC_CURVES)}.") from exc
    private_key = ec.generate_private_key(curve_cls())
    return _serialize(private_key)


def save_key_pair(private_pem: str, public_pem: str, private_path: Path, public_path: Path) -> None:
    private_path.parent.mkdir(parents=True, exist_ok=True)
    public_path.parent.mkdir(parents=True, exist_ok=True)

    private_path.write_text(private_pem, encoding="utf-8")
    os.chmod(private_path, 0o600)
    public_path.write_text(public_pem, encoding="utf-8")
    os.chmod(public_path, 0o644)
