"""
crumbs - lazy, signed cookie jars for ASGI applications.

Handlers read and write cookies through a dict-like jar; the Cookie
header is parsed on first access and every change is sent back as a
Set-Cookie header automatically.
"""

from crumbs.config import CookieConfig
from crumbs.cookies import CookieOptions
from crumbs.exceptions import (
    ConfigurationError,
    CookieError,
    CrumbsException,
    MalformedInputError,
)
from crumbs.jar import CookieJar, CookieValue, LazyCookieStore
from crumbs.keyring import KeyRing, UnsignResult
from crumbs.middleware import CookieMiddleware
from crumbs.plugin import cookie
from crumbs.request import Request

__version__ = "0.1.0"
__all__ = [
    "cookie",
    "CookieConfig",
    "CookieJar",
    "CookieMiddleware",
    "CookieOptions",
    "CookieValue",
    "KeyRing",
    "LazyCookieStore",
    "Request",
    "UnsignResult",
    "CrumbsException",
    "ConfigurationError",
    "CookieError",
    "MalformedInputError",
]
