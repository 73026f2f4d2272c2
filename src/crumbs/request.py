"""
Handler-facing request wrapper.
Gives route code the cookie jar and signature helper attached by
CookieMiddleware.
"""

from collections.abc import Callable, Mapping
from functools import cached_property
from typing import Any

from crumbs.exceptions import ConfigurationError
from crumbs.jar import CookieJar
from crumbs.keyring import UnsignResult
from crumbs.types import Receive, Scope

_NOT_INSTALLED = "CookieMiddleware is not installed for this application"


class Request:
    """
    HTTP Request wrapper.
    
    Headers are decoded on first access; the cookie jar parses the
    Cookie header only when a handler touches it.
    
    Usage:
        async def app(scope, receive, send):
            request = Request(scope, receive)
            request.cookie["user"] = "saltyaom"
    """
    
    def __init__(self, scope: Scope, receive: Receive | None = None) -> None:
        self._scope = scope
    
    @property
    def method(self) -> str:
        """HTTP method (GET, POST, etc.)."""
        return self._scope.get("method", "GET")
    
    @property
    def path(self) -> str:
        """Request path."""
        return self._scope.get("path", "/")
    
    @cached_property
    def headers(self) -> Mapping[str, str]:
        """Request headers as a dictionary."""
        headers: dict[str, str] = {}
        raw_headers = self._scope.get("headers", [])
        
        for name, value in raw_headers:
            header_name = name.decode("latin-1").lower()
            header_value = value.decode("latin-1")
            # Repeated Cookie headers are joined, as HTTP/2 clients split them
            if header_name == "cookie" and header_name in headers:
                header_value = f"{headers[header_name]}; {header_value}"
            headers[header_name] = header_value
        
        return headers
    
    def get_header(self, name: str, default: str | None = None) -> str | None:
        """Get a specific header value."""
        return self.headers.get(name.lower(), default)
    
    @property
    def cookie(self) -> CookieJar:
        """
        The request's cookie jar.
        
        Raises:
            ConfigurationError: If CookieMiddleware is not installed.
        """
        jar = self._scope.get("cookie")
        if jar is None:
            raise ConfigurationError(_NOT_INSTALLED)
        return jar
    
    def unsign_cookie(self, token: Any) -> UnsignResult:
        """
        Verify a signed cookie value against the configured secrets.
        
        Raises:
            MalformedInputError: If ``token`` is not a string.
            ConfigurationError: If no secret is configured, or
                CookieMiddleware is not installed.
        """
        unsign: Callable[[Any], UnsignResult] | None = self._scope.get("unsign_cookie")
        if unsign is None:
            raise ConfigurationError(_NOT_INSTALLED)
        return unsign(token)
