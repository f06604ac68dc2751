"""
Runtime CSRF settings.

Built once from the Flask config when the extension is initialized and
never mutated afterwards. Every component receives this object explicitly.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import FrozenSet, Mapping, Optional, Tuple

from .errors import ConfigurationError
from .origin_policy import TrustedOrigin, build_trust_set

DEFAULT_COOKIE_NAME = 'csrf_secret'
DEFAULT_FIELD_NAME = 'csrf_token'
DEFAULT_HEADER_NAME = 'X-CSRF-Token'
DEFAULT_TOKEN_ROUTE_PREFIX = '/csrf'

SAMESITE_POLICIES = ('Strict', 'Lax', 'None')


def _split_list(value) -> Tuple[str, ...]:
    """Accept either a comma separated string or an iterable of strings."""
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(',')
    return tuple(item.strip() for item in value if item and item.strip())


TRUE_VALUES = ('1', 'true', 'yes', 'on')
FALSE_VALUES = ('0', 'false', 'no', 'off')


def parse_bool(value, default: bool, name: str) -> bool:
    """
    Read a boolean option from a config value or environment string.

    Raises:
        ConfigurationError: for strings that are not a recognized boolean
    """
    if value is None or value == '':
        return default
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
        raise ConfigurationError(f"{name} must be a boolean, got {value!r}")
    return bool(value)


def _as_max_age(value) -> Optional[int]:
    if value is None or value == '':
        return None
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds())
    else:
        try:
            seconds = int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid CSRF_COOKIE_MAX_AGE: {value!r}")
    if seconds <= 0:
        raise ConfigurationError("CSRF_COOKIE_MAX_AGE must be a positive number of seconds")
    return seconds


def _as_samesite(value) -> str:
    if not value:
        return 'Lax'
    for policy in SAMESITE_POLICIES:
        if str(value).strip().lower() == policy.lower():
            return policy
    raise ConfigurationError(
        f"CSRF_COOKIE_SAMESITE must be one of {', '.join(SAMESITE_POLICIES)}, got {value!r}"
    )


@dataclass(frozen=True)
class CSRFSettings:
    """Immutable view of the recognized CSRF options."""

    signing_key: bytes
    cookie_name: str = DEFAULT_COOKIE_NAME
    field_name: str = DEFAULT_FIELD_NAME
    header_name: str = DEFAULT_HEADER_NAME
    cookie_secure: bool = True
    cookie_samesite: str = 'Lax'
    trusted_origins: FrozenSet[TrustedOrigin] = frozenset()
    exempt_paths: Tuple[str, ...] = ()
    cookie_max_age: Optional[int] = None
    cookie_path: str = '/'
    cookie_domain: Optional[str] = None
    enabled: bool = True
    token_route_prefix: str = DEFAULT_TOKEN_ROUTE_PREFIX

    @classmethod
    def from_mapping(cls, config: Mapping) -> 'CSRFSettings':
        """
        Build settings from a Flask config (or any mapping).

        Raises:
            ConfigurationError: if protection cannot be enabled safely
        """
        signing_key = config.get('CSRF_SIGNING_KEY') or config.get('SECRET_KEY')
        if isinstance(signing_key, str):
            signing_key = signing_key.encode('utf-8')
        if not signing_key:
            raise ConfigurationError(
                "CSRF_SIGNING_KEY (or SECRET_KEY) is required for CSRF protection"
            )

        cookie_secure = parse_bool(config.get('CSRF_COOKIE_SECURE'), True, 'CSRF_COOKIE_SECURE')
        samesite = _as_samesite(config.get('CSRF_COOKIE_SAMESITE'))
        if samesite == 'None' and not cookie_secure:
            raise ConfigurationError(
                "CSRF_COOKIE_SAMESITE=None requires CSRF_COOKIE_SECURE=true"
            )

        names = {
            'CSRF_COOKIE_NAME': config.get('CSRF_COOKIE_NAME') or DEFAULT_COOKIE_NAME,
            'CSRF_FIELD_NAME': config.get('CSRF_FIELD_NAME') or DEFAULT_FIELD_NAME,
            'CSRF_HEADER_NAME': config.get('CSRF_HEADER_NAME') or DEFAULT_HEADER_NAME,
        }
        for key, value in names.items():
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"{key} must be a non-empty string")

        return cls(
            signing_key=signing_key,
            cookie_name=names['CSRF_COOKIE_NAME'].strip(),
            field_name=names['CSRF_FIELD_NAME'].strip(),
            header_name=names['CSRF_HEADER_NAME'].strip(),
            cookie_secure=cookie_secure,
            cookie_samesite=samesite,
            trusted_origins=build_trust_set(_split_list(config.get('CSRF_TRUSTED_ORIGINS'))),
            exempt_paths=_split_list(config.get('CSRF_EXEMPT_PATHS')),
            cookie_max_age=_as_max_age(config.get('CSRF_COOKIE_MAX_AGE')),
            cookie_path=config.get('CSRF_COOKIE_PATH') or '/',
            cookie_domain=config.get('CSRF_COOKIE_DOMAIN') or None,
            enabled=parse_bool(config.get('CSRF_ENABLED'), True, 'CSRF_ENABLED'),
            token_route_prefix=config.get('CSRF_TOKEN_ROUTE_PREFIX') or DEFAULT_TOKEN_ROUTE_PREFIX,
        )

    def describe(self) -> dict:
        """Auditable summary of the active configuration, without the key."""
        return {
            'enabled': self.enabled,
            'cookie_name': self.cookie_name,
            'field_name': self.field_name,
            'header_name': self.header_name,
            'cookie_secure': self.cookie_secure,
            'cookie_samesite': self.cookie_samesite,
            'cookie_max_age': self.cookie_max_age,
            'cookie_path': self.cookie_path,
            'cookie_domain': self.cookie_domain,
            'trusted_origins': sorted(
                ('*.' if entry.wildcard else '') + entry.host for entry in self.trusted_origins
            ),
            'exempt_paths': list(self.exempt_paths),
        }
