"""Session token signing: deterministic HMAC tokens and constant-time checks."""

from __future__ import annotations

import hashlib
import hmac

# There is exactly one identity, so every session carries the same message.
SESSION_MESSAGE = b"ok"


def sign_token(secret: str) -> str:
    """Return the session token for ``secret`` as lowercase hex.

    The result is HMAC-SHA256 over a fixed message keyed by the secret. It
    has no timestamp or nonce: the same secret always yields the same token,
    and rotating the secret is what invalidates outstanding sessions.
    """
    return hmac.new(secret.encode("utf-8"), SESSION_MESSAGE, hashlib.sha256).hexdigest()


def _accumulate_difference(left: bytes, right: bytes) -> int:
    """OR together the XOR of every byte pair of two equal-length inputs."""
    diff = 0
    for x, y in zip(left, right, strict=True):
        diff |= x ^ y
    return diff


def constant_time_equals(left: str, right: str) -> bool:
    """Compare two strings without stopping at the first differing byte.

    A length mismatch rejects early; length does not depend on the secret.
    """
    left_bytes = left.encode("utf-8")
    right_bytes = right.encode("utf-8")
    if len(left_bytes) != len(right_bytes):
        return False
    return _accumulate_difference(left_bytes, right_bytes) == 0


def verify_token(candidate: str, secret: str) -> bool:
    """Check a presented token against the one derived from ``secret``."""
    return constant_time_equals(candidate, sign_token(secret))


class TokenSigner:
    """Token signing bound to one server secret."""

    def __init__(self, secret: str) -> None:
        if not secret:
            raise ValueError("Token signer requires a non-empty secret")
        self._secret = secret

    def sign(self) -> str:
        return sign_token(self._secret)

    def verify(self, candidate: str) -> bool:
        return verify_token(candidate, self._secret)
