"""
Security module for the application.

This module provides CSRF protection built from:
- Masked token codec
- Signed secret cookie store
- Origin/Referer policy
- Validation pipeline and Flask integration
- Security logging
"""

from .errors import ConfigurationError, Verdict
from .settings import CSRFSettings
from .origin_policy import TrustedOrigin, is_trusted, normalize_host, resolve_declared_origin
from .cookie_store import CookieStore
from .pipeline import PipelineResult, SAFE_METHODS, ValidationPipeline
from .csrf import CSRFProtection, csrf_exempt, generate_csrf, get_session_secret, get_verdict
from .security_logger import SecurityLogger
from .security_init import init_security, get_security_config

__all__ = [
    'ConfigurationError',
    'Verdict',
    'CSRFSettings',
    'TrustedOrigin',
    'is_trusted',
    'normalize_host',
    'resolve_declared_origin',
    'CookieStore',
    'PipelineResult',
    'SAFE_METHODS',
    'ValidationPipeline',
    'CSRFProtection',
    'csrf_exempt',
    'generate_csrf',
    'get_session_secret',
    'get_verdict',
    'SecurityLogger',
    'init_security',
    'get_security_config',
]
