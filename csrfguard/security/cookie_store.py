"""
Signed cookie carrying the session secret.

The cookie value is ``hex(secret)`` signed with the process signing key
through itsdangerous, so a client can hold the secret but cannot forge one.
"""

import hashlib
from typing import Optional

from itsdangerous import BadSignature, TimestampSigner

from .settings import CSRFSettings
from .token_codec import SECRET_LENGTH

COOKIE_SALT = 'csrfguard.cookie'


class CookieStore:
    """Reads and writes the CSRF cookie for one configured application."""

    def __init__(self, settings: CSRFSettings):
        self.settings = settings
        self._signer = TimestampSigner(
            settings.signing_key,
            salt=COOKIE_SALT,
            digest_method=hashlib.sha256,
        )

    def read(self, request) -> Optional[bytes]:
        """
        Return the session secret carried by the request, if trustworthy.

        A missing, tampered, expired or malformed cookie yields None;
        absence is an expected state, not an error.
        """
        value = request.cookies.get(self.settings.cookie_name)
        if not value:
            return None
        try:
            payload = self._signer.unsign(value, max_age=self.settings.cookie_max_age)
            secret = bytes.fromhex(payload.decode('ascii'))
        except (BadSignature, ValueError):
            return None
        if len(secret) != SECRET_LENGTH:
            return None
        return secret

    def dumps(self, session_secret: bytes) -> str:
        return self._signer.sign(session_secret.hex()).decode('ascii')

    def issue(self, response, session_secret: bytes) -> None:
        """Attach the signed session secret to ``response``."""
        response.set_cookie(
            self.settings.cookie_name,
            self.dumps(session_secret),
            max_age=self.settings.cookie_max_age,
            path=self.settings.cookie_path,
            domain=self.settings.cookie_domain,
            secure=self.settings.cookie_secure,
            httponly=True,  # never readable from JavaScript
            samesite=self.settings.cookie_samesite,
        )
