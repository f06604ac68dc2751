"""
CSRF validation pipeline.

Per request: exemption check, cookie read (rotating the secret when it is
missing), then, for unsafe methods only, token and origin checks. The first
failing check decides the verdict.
"""

import fnmatch
from dataclasses import dataclass
from typing import Optional

from . import token_codec
from .cookie_store import CookieStore
from .errors import Verdict
from .origin_policy import is_trusted, resolve_declared_origin
from .settings import CSRFSettings

SAFE_METHODS = frozenset({'GET', 'HEAD', 'OPTIONS', 'TRACE'})


@dataclass(frozen=True)
class PipelineResult:
    """Everything the request hooks need to know about one request."""

    verdict: Verdict
    session_secret: Optional[bytes] = None
    rotated: bool = False
    exempt: bool = False
    safe_method: bool = False


class ValidationPipeline:
    """Stateless validator; one instance serves every request of an app."""

    def __init__(self, settings: CSRFSettings):
        self.settings = settings
        self.cookie_store = CookieStore(settings)

    def is_exempt_path(self, path: str) -> bool:
        return any(fnmatch.fnmatchcase(path, pattern) for pattern in self.settings.exempt_paths)

    def extract_token(self, request) -> Optional[str]:
        """
        Extract the presented token from the request.

        Checks the configured header first, then the form field, then the
        same field in a JSON object body.
        """
        token = request.headers.get(self.settings.header_name)
        if token:
            return token

        token = request.form.get(self.settings.field_name)
        if token:
            return token

        if request.is_json:
            data = request.get_json(silent=True)
            if isinstance(data, dict):
                token = data.get(self.settings.field_name)
                if isinstance(token, str) and token:
                    return token
        return None

    def evaluate(self, request, view_exempt: bool = False) -> PipelineResult:
        """
        Validate ``request`` and return its verdict.

        Args:
            request: The incoming Werkzeug/Flask request
            view_exempt: True when the target view was marked exempt

        Returns:
            A PipelineResult; the session secret is always set for
            non-exempt requests so a token can be minted from it
        """
        if view_exempt or self.is_exempt_path(request.path):
            return PipelineResult(Verdict.ACCEPTED, exempt=True)

        cookie_secret = self.cookie_store.read(request)
        rotated = cookie_secret is None
        session_secret = token_codec.generate_secret() if rotated else cookie_secret

        if request.method in SAFE_METHODS:
            return PipelineResult(
                Verdict.ACCEPTED, session_secret, rotated=rotated, safe_method=True
            )

        verdict = self._validate_unsafe(request, cookie_secret)
        return PipelineResult(verdict, session_secret, rotated=rotated)

    def _validate_unsafe(self, request, cookie_secret: Optional[bytes]) -> Verdict:
        if cookie_secret is None:
            return Verdict.REJECTED_NO_COOKIE

        token = self.extract_token(request)
        if not token:
            return Verdict.REJECTED_NO_TOKEN

        if not token_codec.verify(token, cookie_secret):
            return Verdict.REJECTED_BAD_TOKEN

        origin = resolve_declared_origin(request)
        if not is_trusted(origin, self.settings.trusted_origins, request.host, request.scheme):
            return Verdict.REJECTED_BAD_ORIGIN

        return Verdict.ACCEPTED
