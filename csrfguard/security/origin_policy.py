"""
Origin policy for state-changing requests.

Browsers declare where a request came from through the ``Origin`` header
(or, failing that, ``Referer``). Both the declared origin and every
configured trusted origin are reduced to the same canonical ``host[:port]``
form before being compared, so ``http://localhost:3000``,
``localhost:3000`` and ``LOCALHOST:3000`` all mean the same thing.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional
from urllib.parse import urlsplit

from .errors import ConfigurationError

DEFAULT_PORTS = {'http': 80, 'https': 443}


def normalize_host(value: Optional[str], scheme: Optional[str] = None) -> Optional[str]:
    """
    Reduce an origin, URL or bare host to lowercase ``host[:port]``.

    Default ports are dropped (80 for http, 443 for https). When no scheme
    is known both are treated as default.

    Args:
        value: ``https://example.com``, ``example.com:8080``, ``[::1]:80`` ...
        scheme: Scheme to assume when ``value`` carries none

    Returns:
        The canonical host string, or None if ``value`` cannot be parsed
    """
    if not value or not value.strip():
        return None
    value = value.strip()
    if '://' in value:
        parts = urlsplit(value)
        scheme = parts.scheme.lower() or scheme
    else:
        parts = urlsplit('//' + value)
    try:
        host = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if not host:
        return None
    if ':' in host:
        host = f'[{host}]'

    if port is not None:
        if scheme:
            is_default = DEFAULT_PORTS.get(scheme.lower()) == port
        else:
            is_default = port in DEFAULT_PORTS.values()
        if not is_default:
            return f'{host}:{port}'
    return host


@dataclass(frozen=True)
class TrustedOrigin:
    """A configured origin allowed to send state-changing requests."""

    host: str
    wildcard: bool = False

    @classmethod
    def parse(cls, entry: str) -> 'TrustedOrigin':
        normalized = normalize_host(entry)
        if normalized is None:
            raise ConfigurationError(f"Invalid trusted origin: {entry!r}")
        if normalized.startswith('*.'):
            suffix = normalized[2:]
            if not suffix or '*' in suffix:
                raise ConfigurationError(f"Invalid trusted origin: {entry!r}")
            return cls(host=suffix, wildcard=True)
        if '*' in normalized:
            raise ConfigurationError(f"Invalid trusted origin: {entry!r}")
        return cls(host=normalized)

    def matches(self, host: str) -> bool:
        if self.wildcard:
            # Strict subdomains only: never the parent, never 'evilexample.com'
            return host.endswith('.' + self.host)
        return host == self.host


def build_trust_set(entries: Iterable[str]) -> FrozenSet[TrustedOrigin]:
    """Normalize configured origins once, at startup."""
    return frozenset(TrustedOrigin.parse(entry) for entry in entries if entry and entry.strip())


def resolve_declared_origin(request) -> Optional[str]:
    """
    Find the origin a request claims to come from.

    Prefers ``Origin``; falls back to the scheme and host of ``Referer``.
    An ``Origin: null`` header counts as absent.
    """
    origin = (request.headers.get('Origin') or '').strip()
    if origin and origin.lower() != 'null':
        return origin

    referer = (request.headers.get('Referer') or '').strip()
    if not referer:
        return None
    parts = urlsplit(referer)
    if not parts.scheme or not parts.netloc:
        return None
    netloc = parts.netloc.rpartition('@')[2]
    return f'{parts.scheme}://{netloc}'


def is_trusted(origin: Optional[str], trust_set: Iterable[TrustedOrigin],
               request_host: Optional[str], request_scheme: Optional[str] = None) -> bool:
    """
    Decide whether a declared origin may send a state-changing request.

    A missing origin is rejected. Same-origin requests are always trusted;
    anything else must match the trust set.
    """
    if not origin:
        return False
    candidate = normalize_host(origin)
    if candidate is None:
        return False

    if candidate == normalize_host(request_host, request_scheme):
        return True

    return any(entry.matches(candidate) for entry in trust_set)
