from __future__ import annotations

import base64
import binascii
import re

from jwtkit.core.exceptions import EncodingError

_TO_URLSAFE = str.maketrans("+/", "-_")
_FROM_URLSAFE = str.maketrans("-_", "+/")
_URLSAFE_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def to_urlsafe(b64: str) -> str:
    """Turn standard base64 text into its unpadded URL-safe form."""
    return b64.rstrip("=").translate(_TO_URLSAFE)


def from_urlsafe(data: str) -> str:
    """Turn URL-safe base64 text back into padded standard base64."""
    b64 = data.translate(_FROM_URLSAFE)
    remainder = len(b64) % 4
    if remainder == 0:
        return b64
    if remainder == 2:
        return f"{b64}=="
    if remainder == 3:
        return f"{b64}="
    raise EncodingError("Illegal B64URL string", details={"length": len(data)})


def encode(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return to_urlsafe(base64.b64encode(data).decode("ascii"))


def decode(data: str) -> bytes:
    if not _URLSAFE_ALPHABET.fullmatch(data):
        raise EncodingError("Illegal B64URL string")
    b64 = from_urlsafe(data)
    try:
        return base64.b64decode(b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncodingError("Illegal B64URL string") from exc


def decode_text(data: str) -> str:
    raw = decode(data)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError("B64URL payload is not valid UTF-8") from exc
