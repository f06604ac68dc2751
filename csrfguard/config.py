"""
Configuration module for the application.
All configuration values are read from environment variables.
"""
import os
import secrets
import warnings

from csrfguard.security.settings import parse_bool


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()] if value else []


class Config:
    """Application configuration loaded from environment variables."""
    
    def __init__(self):
        """Initialize configuration from environment variables."""
        # Flask Configuration
        self.SECRET_KEY: str = os.getenv("SECRET_KEY", "")
        self.FLASK_ENV: str = os.getenv("FLASK_ENV", "")
        
        # Process-wide key used to sign the CSRF cookie
        self.CSRF_SIGNING_KEY: str = os.getenv("CSRF_SIGNING_KEY", "") or self.SECRET_KEY
        
        # Generate a development key if not set and not in production
        if not self.CSRF_SIGNING_KEY and self.FLASK_ENV != "production":
            self.CSRF_SIGNING_KEY = secrets.token_urlsafe(32)
            warnings.warn(
                "CSRF_SIGNING_KEY not set. Generated a temporary key for development. "
                "Set CSRF_SIGNING_KEY in your .env file for production!",
                UserWarning
            )
        
        # Cookie / token names
        self.CSRF_COOKIE_NAME: str = os.getenv("CSRF_COOKIE_NAME", "csrf_secret")
        self.CSRF_FIELD_NAME: str = os.getenv("CSRF_FIELD_NAME", "csrf_token")
        self.CSRF_HEADER_NAME: str = os.getenv("CSRF_HEADER_NAME", "X-CSRF-Token")
        
        # Cookie security attributes
        self.CSRF_COOKIE_SECURE: bool = parse_bool(os.getenv("CSRF_COOKIE_SECURE"), True, "CSRF_COOKIE_SECURE")
        self.CSRF_COOKIE_SAMESITE: str = os.getenv("CSRF_COOKIE_SAMESITE", "Lax")
        self.CSRF_COOKIE_PATH: str = os.getenv("CSRF_COOKIE_PATH", "/")
        self.CSRF_COOKIE_DOMAIN: str | None = os.getenv("CSRF_COOKIE_DOMAIN") or None
        cookie_max_age = os.getenv("CSRF_COOKIE_MAX_AGE", "")
        self.CSRF_COOKIE_MAX_AGE: int | None = int(cookie_max_age) if cookie_max_age else None
        
        # Trust boundaries
        self.CSRF_TRUSTED_ORIGINS: list[str] = _split(os.getenv("CSRF_TRUSTED_ORIGINS", ""))
        self.CSRF_EXEMPT_PATHS: list[str] = _split(os.getenv("CSRF_EXEMPT_PATHS", ""))
        
        self.CSRF_ENABLED: bool = parse_bool(os.getenv("CSRF_ENABLED"), True, "CSRF_ENABLED")
        self.CSRF_TOKEN_ROUTE_PREFIX: str = os.getenv("CSRF_TOKEN_ROUTE_PREFIX", "/csrf")
    
    def as_flask_config(self) -> dict:
        """Return the upper-case settings as a dict for ``app.config.update``."""
        return {key: value for key, value in vars(self).items() if key.isupper()}
    
    def validate(self) -> None:
        """
        Validate required configuration values.
        Only enforces CSRF_SIGNING_KEY in production environment.
        """
        if not self.CSRF_SIGNING_KEY:
            if self.FLASK_ENV == "production":
                raise ValueError(
                    "CSRF_SIGNING_KEY (or SECRET_KEY) environment variable is required in production. "
                    "Set it in your .env file or environment variables."
                )
            # For non-production, a warning was already issued in __init__


# Global config instance - will be re-initialized after load_dotenv()
config = Config()
