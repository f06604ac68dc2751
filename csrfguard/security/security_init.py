"""
Security initialization module.

This module initializes CSRF protection for the Flask application and
exposes the active configuration for auditing.
"""

from flask import Flask
from .csrf import CSRFProtection, EXTENSION_KEY


def init_security(app: Flask, protection: CSRFProtection) -> None:
    """
    Initialize all security features for the Flask app.
    
    Args:
        app: Flask application instance
        protection: CSRF extension instance to bind to the app
    """
    protection.init_app(app)
    
    settings = app.extensions[EXTENSION_KEY].settings
    if settings.exempt_paths:
        app.logger.warning(
            f"SECURITY: CSRF validation disabled for paths: {', '.join(settings.exempt_paths)}"
        )
    
    # Security is now initialized
    app.logger.info("Security features initialized")


def get_security_config(app: Flask) -> dict:
    """
    Get security configuration.
    
    Returns:
        Dictionary with the active CSRF configuration, without the signing key
    """
    return {
        'csrf': app.extensions[EXTENSION_KEY].settings.describe(),
    }
