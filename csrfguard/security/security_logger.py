"""
Security logging module.

This module provides specialized logging for CSRF events so operators can
diagnose rejected requests, such as a legitimate origin missing from the
trusted set.
"""

from flask import request, current_app
from datetime import datetime, timezone


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SecurityLogger:
    """
    Security event logger.
    
    Logs CSRF-related events for monitoring and auditing. Tokens and
    secrets are never written to the log.
    """
    
    @staticmethod
    def log_csrf_violation(endpoint: str, reason: str):
        """
        Log a rejected request.
        
        Args:
            endpoint: Path where the violation occurred
            reason: Verdict reason code
        """
        origin = request.headers.get('Origin') or request.headers.get('Referer') or '-'
        truncated_origin = origin[:100] if len(origin) > 100 else origin
        current_app.logger.warning(
            f"SECURITY: CSRF violation - Endpoint: {endpoint}, "
            f"Method: {request.method}, Reason: {reason}, "
            f"Origin: {truncated_origin}, Host: {request.host}, "
            f"IP: {request.remote_addr}, Time: {_now()}"
        )
    
    @staticmethod
    def log_exempt_request(endpoint: str):
        """Log a request that skipped CSRF validation."""
        current_app.logger.debug(
            f"SECURITY: CSRF exempt - Endpoint: {endpoint}, "
            f"Method: {request.method}, IP: {request.remote_addr}"
        )
    
    @staticmethod
    def log_csrf_disabled(app):
        """
        Log that CSRF rejections are switched off for the whole app.
        
        Args:
            app: Flask application instance
        """
        app.logger.warning(
            "SECURITY: CSRF_ENABLED is false; requests that fail CSRF validation "
            "will NOT be rejected."
        )
    
    @staticmethod
    def log_insecure_cookie_config(app):
        """
        Log that the CSRF cookie will be sent over plain HTTP.
        
        Args:
            app: Flask application instance
        """
        app.logger.warning(
            "SECURITY: CSRF_COOKIE_SECURE is disabled; the CSRF cookie will be "
            "sent over plain HTTP. Only use this for local development."
        )
