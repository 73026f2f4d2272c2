"""
Cookie jar middleware.
"""

import logging
from typing import Any

from crumbs.config import CookieConfig
from crumbs.cookies import CookieOptions
from crumbs.middleware.base import Middleware
from crumbs.request import Request
from crumbs.types import ASGIApp, Receive, Scope, SecretConfig, Send

logger = logging.getLogger("crumbs.middleware")


class CookieMiddleware(Middleware):
    """
    Attaches a lazily-parsed cookie jar to every HTTP request.
    
    The jar is stored as ``scope["cookie"]`` and a verification helper as
    ``scope["unsign_cookie"]``; ``Request`` exposes both. Every cookie
    written or deleted through the jar before the response starts is sent
    as a ``Set-Cookie`` header.
    
    Usage:
        app = CookieMiddleware(app, secret=["new-key", "old-key"], httponly=True)
    
    A secret is only needed by routes that sign or verify cookies; the
    middleware installs fine without one.
    """
    
    def __init__(
        self,
        app: ASGIApp,
        secret: SecretConfig = None,
        options: CookieOptions | None = None,
        **attributes: Any,
    ) -> None:
        super().__init__(app)
        self.config = CookieConfig.build(secret, options, **attributes)
    
    async def process(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        jar = self.config.new_jar(lambda: request.get_header("cookie"))
        
        scope["cookie"] = jar
        scope["unsign_cookie"] = self.config.key_ring.unsign_cookie
        
        # Wrap send to flush pending cookies with the response headers
        async def send_with_cookies(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                cookies = jar.store.set_cookie_headers
                if cookies:
                    headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                    for cookie in cookies:
                        headers.append((b"set-cookie", cookie.encode("latin-1")))
                    message["headers"] = headers
                    logger.debug(
                        "Attached %d Set-Cookie header(s) to %s %s",
                        len(cookies),
                        request.method,
                        request.path,
                    )
            
            await send(message)
        
        # pyrefly: ignore [bad-argument-type]
        await self.app(scope, receive, send_with_cookies)
