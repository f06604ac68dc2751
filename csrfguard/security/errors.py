"""
CSRF verdicts and errors.

Every request handled by the validation pipeline ends in exactly one
``Verdict``. Rejections are expected, recoverable outcomes and are turned
into a 403 response; only configuration problems raise.
"""

from enum import Enum


class Verdict(Enum):
    """Outcome of validating a single request."""

    ACCEPTED = 'accepted'
    REJECTED_NO_COOKIE = 'no_cookie'
    REJECTED_NO_TOKEN = 'no_token'
    REJECTED_BAD_TOKEN = 'bad_token'
    REJECTED_BAD_ORIGIN = 'bad_origin'

    @property
    def accepted(self) -> bool:
        return self is Verdict.ACCEPTED

    @property
    def reason(self) -> str:
        """Machine-readable reason code sent to the client."""
        return self.value

    @property
    def message(self) -> str:
        """Human-readable message sent to the client."""
        return _MESSAGES[self]


_MESSAGES = {
    Verdict.ACCEPTED: 'Request accepted.',
    Verdict.REJECTED_NO_COOKIE: 'CSRF cookie missing. Please refresh the page.',
    Verdict.REJECTED_NO_TOKEN: 'CSRF token missing. Please refresh the page.',
    Verdict.REJECTED_BAD_TOKEN: 'Invalid CSRF token. Please refresh the page.',
    Verdict.REJECTED_BAD_ORIGIN: 'Request origin is not trusted.',
}


class ConfigurationError(ValueError):
    """Raised at startup when CSRF protection cannot be configured safely."""
