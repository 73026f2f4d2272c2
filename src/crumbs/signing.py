"""
Cookie value signing.

Tokens have the form ``<value>.<signature>`` where the signature is the
unpadded standard base64 of HMAC-SHA256(secret, value). This is the
format produced by the ``cookie-signature`` family of libraries, so
cookies signed by other stacks sharing the same secret verify here too.
"""

import base64
import hashlib
import hmac
import secrets

from crumbs.exceptions import ConfigurationError

SEPARATOR: str = "."


def _signature(value: str, secret: str) -> str:
    digest = hmac.new(
        secret.encode("utf-8"),
        value.encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("ascii").rstrip("=")


def sign(value: str, secret: str | None) -> str:
    """Sign ``value`` with ``secret`` and return the token."""
    if not isinstance(value, str):
        raise TypeError("Cookie value to sign must be a string")
    if not secret:
        raise ConfigurationError()
    return f"{value}{SEPARATOR}{_signature(value, secret)}"


def unsign(token: str, secret: str | None) -> str | None:
    """
    Verify ``token`` against ``secret``.

    Returns the embedded value, or None when the signature does not match.
    A token without a separator carries an empty payload and never verifies.

    Raises:
        ConfigurationError: If no secret is given.
    """
    if not secret:
        raise ConfigurationError()
    
    value, _, _ = token.rpartition(SEPARATOR)
    try:
        expected = sign(value, secret)
        # Constant-time comparison over the whole token
        matches = hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))
    except UnicodeEncodeError:
        # Lone surrogates cannot have been signed
        return None
    return value if matches else None


def generate_secret_key(length: int = 32) -> str:
    """Generate a cryptographically secure secret key."""
    return secrets.token_urlsafe(length)
