"""
Masked CSRF token codec.

A session secret is never sent to the client as-is. Each issued token is
``pad || (secret XOR pad)`` with a fresh random pad, base64 encoded, so
every token is different while all of them unmask to the same secret.
"""

import base64
import binascii
import hmac
import secrets
from typing import Optional

SECRET_LENGTH = 32
MIN_SECRET_LENGTH = 16


def generate_secret() -> bytes:
    """Generate a new random session secret."""
    return secrets.token_bytes(SECRET_LENGTH)


def _xor(left: bytes, right: bytes) -> bytes:
    return bytes(a ^ b for a, b in zip(left, right))


def issue(session_secret: bytes) -> str:
    """
    Mask a session secret into a token safe to embed in a page.

    Args:
        session_secret: The secret stored in the CSRF cookie

    Returns:
        A URL-safe base64 token, different on every call
    """
    if len(session_secret) < MIN_SECRET_LENGTH:
        raise ValueError(
            f"Session secret must be at least {MIN_SECRET_LENGTH} bytes"
        )
    pad = secrets.token_bytes(len(session_secret))
    return base64.urlsafe_b64encode(pad + _xor(session_secret, pad)).decode('ascii')


def unmask(masked_token: str) -> Optional[bytes]:
    """
    Recover the secret hidden in a masked token.

    Returns None for anything that is not a well-formed token.
    """
    if not masked_token or not isinstance(masked_token, str):
        return None
    try:
        raw = base64.b64decode(
            masked_token.encode('ascii'), altchars=b'-_', validate=True
        )
    except (binascii.Error, ValueError):
        return None
    if not raw or len(raw) % 2:
        return None
    half = len(raw) // 2
    return _xor(raw[half:], raw[:half])


def verify(masked_token: str, session_secret: bytes) -> bool:
    """
    Check that a masked token was issued for ``session_secret``.

    Malformed tokens and wrong secrets both return False; this never raises.
    """
    if not session_secret or len(session_secret) < MIN_SECRET_LENGTH:
        return False
    candidate = unmask(masked_token)
    if candidate is None or len(candidate) != len(session_secret):
        return False
    # Constant-time comparison to prevent timing attacks
    return hmac.compare_digest(candidate, session_secret)
