"""
CSRF (Cross-Site Request Forgery) protection module.

This module wires the validation pipeline into a Flask application:
every request is validated before its view runs, rejected requests get a
403 JSON response, and views can mint masked tokens for the forms they
render.
"""

from dataclasses import dataclass
from typing import Optional

from flask import current_app, g, jsonify, request

from . import token_codec
from .errors import Verdict
from .pipeline import PipelineResult, ValidationPipeline
from .security_logger import SecurityLogger
from .settings import CSRFSettings

EXTENSION_KEY = 'csrfguard'


@dataclass(frozen=True)
class _CSRFState:
    settings: CSRFSettings
    pipeline: ValidationPipeline


def csrf_exempt(view):
    """
    Decorator to exclude a view from CSRF validation.
    
    Also accepts a blueprint, exempting every view registered on it.
    
    Example:
        @app.route('/webhooks/payment', methods=['POST'])
        @csrf_exempt
        def payment_webhook():
            ...
    """
    view._csrf_exempt = True
    return view


def rejection_response(verdict: Verdict):
    """Build the fixed-shape response for a rejected request."""
    return jsonify({
        'success': False,
        'error': verdict.message,
        'reason': verdict.reason,
    }), 403


def _current_result() -> Optional[PipelineResult]:
    return g.get('csrf_result')


def get_verdict() -> Optional[Verdict]:
    """Verdict for the current request, or None if it was not validated."""
    result = _current_result()
    return result.verdict if result is not None else None


def get_session_secret() -> Optional[bytes]:
    """Session secret for the current request, or None for exempt requests."""
    result = _current_result()
    return result.session_secret if result is not None else None


def generate_csrf() -> str:
    """
    Mint a fresh masked token for the current request.
    
    Returns:
        A token to embed in a form field or send in the CSRF header
    """
    secret = get_session_secret()
    if secret is None:
        raise RuntimeError(
            "CSRF protection is not active for this request; "
            "no session secret is available to mint a token."
        )
    return token_codec.issue(secret)


class CSRFProtection:
    """
    Flask extension enforcing CSRF protection on every request.
    
    Safe methods pass through and receive a fresh token; unsafe methods
    must present a valid cookie, a matching token and a trusted origin.
    """
    
    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)
    
    def exempt(self, view):
        """Exempt a view function or every view of a blueprint."""
        return csrf_exempt(view)
    
    def _is_view_exempt(self) -> bool:
        for name in request.blueprints:
            if getattr(current_app.blueprints.get(name), '_csrf_exempt', False):
                return True
        if not request.endpoint:
            return False
        view = current_app.view_functions.get(request.endpoint)
        return bool(getattr(view, '_csrf_exempt', False))
    
    def init_app(self, app):
        """
        Initialize CSRF protection for the app.
        
        Args:
            app: Flask application instance
        
        Raises:
            ConfigurationError: if the CSRF configuration is unusable
        """
        settings = CSRFSettings.from_mapping(app.config)
        state = _CSRFState(settings=settings, pipeline=ValidationPipeline(settings))
        app.extensions[EXTENSION_KEY] = state
        
        if not settings.enabled:
            SecurityLogger.log_csrf_disabled(app)
        if not settings.cookie_secure:
            SecurityLogger.log_insecure_cookie_config(app)
        
        @app.before_request
        def csrf_protect():
            """Validate the request before its view runs."""
            result = state.pipeline.evaluate(request, view_exempt=self._is_view_exempt())
            g.csrf_result = result
            
            # Disabled: keep the secret and token flow, skip rejection
            if not settings.enabled:
                return None
            if result.exempt:
                SecurityLogger.log_exempt_request(request.path)
                return None
            if result.verdict.accepted:
                return None
            
            SecurityLogger.log_csrf_violation(request.path, result.verdict.reason)
            return rejection_response(result.verdict)
        
        @app.after_request
        def csrf_refresh(response):
            """Issue the cookie on rotation and a fresh token on safe methods."""
            result = _current_result()
            if result is None or result.exempt:
                return response
            
            if result.rotated:
                state.pipeline.cookie_store.issue(response, result.session_secret)
                response.vary.add('Cookie')
            if result.safe_method:
                response.headers[settings.header_name] = token_codec.issue(result.session_secret)
                response.vary.add('Cookie')
            return response
        
        @app.context_processor
        def inject_csrf_token():
            """Make the token generator available to templates."""
            return {'csrf_token': generate_csrf}
        
        app.logger.info("CSRF protection initialized")
