# =============================================================================
# lib/cors_origin.py - CORS Origin Validation
# =============================================================================
# Decides how a request's Origin header is reflected in CORS responses.
#
# The decision is one of three verdicts:
# - AllowAny: no origin was sent (native apps, curl, Postman) -> "*"
# - Allow(origin): echo the origin back verbatim
# - Reject: the origin is not a parseable URL -> no CORS headers
#
# Localhost and the static production domains are "trusted". Every other
# well-formed origin is mirrored back as well, so custom domains work without
# a registration step. The allow-list only records which domains are ours.
#
# Usage:
#   from lib.cors_origin import validate_cors_origin, Allow
#
#   verdict = validate_cors_origin(request.headers.get("origin"))
#   if isinstance(verdict, Allow):
#       response.headers["Access-Control-Allow-Origin"] = verdict.origin
# =============================================================================

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Union
from urllib.parse import unquote, urlsplit

# Static production domains (hostnames only)
STATIC_DOMAINS: tuple[str, ...] = (
    "mando.cx",
    "mando.news",
    "mando.bot",
    "mando.chat",
    "mando.help",
)

LOCALHOST_NAMES = frozenset({"localhost", "127.0.0.1"})

# Schemes that must carry a host to be a valid URL
SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_INVALID_CHARS_RE = re.compile(r"[\s\x00-\x1f\x7f]")

# Characters a special-scheme host may not contain once percent-decoded
_FORBIDDEN_HOST_RE = re.compile(r"[\x00-\x20#%/:<>?@\[\\\]^|\x7f]")


# =============================================================================
# Verdicts
# =============================================================================

@dataclass(frozen=True)
class Allow:
    """
    Echo the origin back in Access-Control-Allow-Origin.

    `trusted` is False when the origin was only mirrored (not localhost and
    not one of the static domains). It never changes the verdict.
    """
    origin: str
    trusted: bool = True


@dataclass(frozen=True)
class AllowAny:
    """Respond with the "*" wildcard (credentials must not be allowed)."""


@dataclass(frozen=True)
class Reject:
    """Send no CORS headers and let the browser block the response."""


ValidationResult = Union[Allow, AllowAny, Reject]


# =============================================================================
# Helpers
# =============================================================================

def parse_origin_hostname(origin: str) -> str | None:
    """
    Extract the lower-cased hostname from an origin string.

    Returns None when the string cannot be parsed as an absolute URL.
    Hosts are optional for non-special schemes, so "app:local" yields "".
    Special-scheme hosts are percent-decoded, and rejected when the decoded
    form holds a forbidden host character ("https://exa%20mple.com").
    """
    if _INVALID_CHARS_RE.search(origin):
        return None

    try:
        parts = urlsplit(origin)
        # Accessing .port validates it and raises on garbage like ":abc"
        parts.port
    except ValueError:
        return None

    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return None

    hostname = parts.hostname or ""
    if parts.scheme.lower() not in SPECIAL_SCHEMES:
        return hostname

    if not hostname:
        return None

    # Bracketed IPv6 literals were already checked by urlsplit
    if parts.netloc.rpartition("@")[2].startswith("["):
        return hostname

    hostname = unquote(hostname).lower()
    if not hostname or _FORBIDDEN_HOST_RE.search(hostname):
        return None

    return hostname


def matches_domain(hostname: str, domain: str) -> bool:
    """True for the domain itself or any dot-suffixed subdomain of it."""
    return hostname == domain or hostname.endswith(f".{domain}")


# =============================================================================
# Validator
# =============================================================================

class OriginValidator:
    """
    Stateless origin validator bound to an immutable allow-list.

    Example:
        validator = OriginValidator(["mando.cx"])
        validator.validate("https://app.mando.cx")    # Allow(..., trusted=True)
        validator.validate("https://elsewhere.io")    # Allow(..., trusted=False)
        validator.validate(None)                      # AllowAny()
        validator.validate("not a url")               # Reject()
    """

    def __init__(self, allowed_domains: Iterable[str] = STATIC_DOMAINS):
        self.allowed_domains = frozenset(d.strip().lower() for d in allowed_domains if d.strip())

    def is_trusted_hostname(self, hostname: str) -> bool:
        if hostname in LOCALHOST_NAMES:
            return True
        return any(matches_domain(hostname, domain) for domain in self.allowed_domains)

    def validate(self, origin: str | None) -> ValidationResult:
        """
        Decide how to reflect `origin`. First match wins:

        1. missing/empty origin -> AllowAny
        2. unparseable origin (including whitespace-only) -> Reject
        3. localhost / 127.0.0.1 -> Allow (trusted)
        4. static domain or subdomain of one -> Allow (trusted)
        5. anything else -> Allow (mirrored)
        """
        if not origin:
            return AllowAny()

        hostname = parse_origin_hostname(origin)
        if hostname is None:
            return Reject()

        return Allow(origin=origin, trusted=self.is_trusted_hostname(hostname))


_default_validator = OriginValidator()


def validate_cors_origin(origin: str | None) -> ValidationResult:
    """Validate `origin` against the built-in static domains."""
    return _default_validator.validate(origin)
