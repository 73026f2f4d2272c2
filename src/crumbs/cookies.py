"""
Cookie wire format for crumbs.
Parses ``Cookie`` request headers and serializes ``Set-Cookie`` values.
"""

import re
from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone
from email.utils import format_datetime
from urllib.parse import quote, unquote

from crumbs.exceptions import CookieError

# RFC 6265 cookie-name: an RFC 7230 token
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

# Printable latin-1 plus horizontal tab, allowed in Path, Domain and Expires
_FIELD_CONTENT_RE = re.compile(r"^[\t\x20-\x7e\x80-\xff]+$")

# Control characters (other than tab) make a request header malformed
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")

# Characters encodeURIComponent leaves alone besides the unreserved set
_SAFE_VALUE_CHARS: str = "!*'()"

_SAMESITE_VALUES: dict[str, str] = {
    "strict": "Strict",
    "lax": "Lax",
    "none": "None",
}

_PRIORITY_VALUES: dict[str, str] = {
    "low": "Low",
    "medium": "Medium",
    "high": "High",
}

UNIX_EPOCH: datetime = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """
    Set-Cookie attributes (Immutable Value Object).

    Every attribute defaults to None, meaning "not set", so that option
    sets can be layered with ``merge``: plugin defaults first, then
    per-write overrides.
    """

    max_age: int | None = None  # In seconds
    expires: datetime | str | None = None
    path: str | None = None
    domain: str | None = None
    secure: bool | None = None
    httponly: bool | None = None
    samesite: str | bool | None = None  # "strict", "lax", "none" or True
    priority: str | None = None  # "low", "medium" or "high"

    def merge(self, other: "CookieOptions | None") -> "CookieOptions":
        """Return a copy where every attribute set on ``other`` wins."""
        if other is None:
            return self
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **changes) if changes else self

    def to_header_string(self) -> str:
        """Convert options to cookie header format."""
        parts: list[str] = []

        if self.max_age is not None:
            parts.append(f"Max-Age={int(self.max_age)}")
        if self.domain:
            if not _FIELD_CONTENT_RE.match(self.domain):
                raise CookieError(f"Invalid cookie domain: {self.domain!r}")
            parts.append(f"Domain={self.domain}")
        if self.path:
            if not _FIELD_CONTENT_RE.match(self.path):
                raise CookieError(f"Invalid cookie path: {self.path!r}")
            parts.append(f"Path={self.path}")
        if self.expires is not None:
            parts.append(f"Expires={format_expires(self.expires)}")
        if self.httponly:
            parts.append("HttpOnly")
        if self.secure:
            parts.append("Secure")
        if self.priority:
            parts.append(f"Priority={_normalize(self.priority, _PRIORITY_VALUES, 'priority')}")
        if self.samesite:
            samesite = "strict" if self.samesite is True else self.samesite
            parts.append(f"SameSite={_normalize(samesite, _SAMESITE_VALUES, 'samesite')}")

        return "; ".join(parts)


def _normalize(value: object, allowed: dict[str, str], attribute: str) -> str:
    if isinstance(value, str) and value.lower() in allowed:
        return allowed[value.lower()]
    raise CookieError(f"Invalid cookie {attribute}: {value!r}")


def format_expires(expires: datetime | str) -> str:
    """Format an expiry as an RFC 1123 date. Naive datetimes are taken as UTC."""
    if isinstance(expires, str):
        if ";" in expires or not _FIELD_CONTENT_RE.match(expires):
            raise CookieError(f"Invalid cookie expires: {expires!r}")
        return expires
    if expires.tzinfo is None:
        expires = expires.replace(tzinfo=timezone.utc)
    return format_datetime(expires.astimezone(timezone.utc), usegmt=True)


def _decode(value: str) -> str:
    if "%" not in value:
        return value
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return value


def parse_cookies(cookie_header: str) -> dict[str, str]:
    """
    Parse a Cookie header string into a dictionary.

    Pairs without ``=`` are skipped and the first occurrence of a name
    wins. Quoted values are unquoted and percent-encoding is decoded.

    Raises:
        CookieError: If the header contains control characters.
    """
    cookies: dict[str, str] = {}

    if not cookie_header:
        return cookies

    if _CONTROL_CHARS_RE.search(cookie_header):
        raise CookieError("Cookie header contains control characters")

    for item in cookie_header.split(";"):
        key, sep, value = item.partition("=")
        if not sep:
            continue

        key = key.strip()
        if not key or key in cookies:
            continue

        value = value.strip()
        if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
            value = value[1:-1]

        cookies[key] = _decode(value)

    return cookies


def format_set_cookie(
    name: str,
    value: str,
    options: CookieOptions | None = None,
) -> str:
    """
    Format a Set-Cookie header value.

    Raises:
        CookieError: If the name or an attribute cannot be serialized.
    """
    if not _TOKEN_RE.match(name):
        raise CookieError(f"Invalid cookie name: {name!r}")

    cookie = f"{name}={quote(value, safe=_SAFE_VALUE_CHARS)}"
    options_str = (options or CookieOptions()).to_header_string()

    if options_str:
        cookie = f"{cookie}; {options_str}"

    return cookie


def format_delete_cookie(
    name: str,
    path: str | None = None,
    domain: str | None = None,
) -> str:
    """Format a Set-Cookie value that makes the client drop ``name``."""
    return format_set_cookie(
        name,
        "",
        CookieOptions(path=path, domain=domain, expires=UNIX_EPOCH),
    )
