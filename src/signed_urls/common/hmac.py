"""HMAC-SHA256 primitives used for URL signatures."""

from __future__ import annotations

import hashlib
import hmac


def _as_bytes(value: str | bytes) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def sign(secret: bytes, message: str | bytes) -> str:
    """Create a lowercase hex-encoded HMAC-SHA256 signature."""
    return hmac.new(secret, _as_bytes(message), hashlib.sha256).hexdigest()


def verify(secret: bytes, message: str | bytes, signature: str) -> bool:
    """Verify HMAC signature in constant time."""
    expected = sign(secret, message)
    return hmac.compare_digest(_as_bytes(expected), _as_bytes(signature))
