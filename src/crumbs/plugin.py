"""
Plugin installer.
"""

from functools import partial
from typing import Any

from crumbs.cookies import CookieOptions
from crumbs.middleware.cookie import CookieMiddleware
from crumbs.types import MiddlewareFactory, SecretConfig


def cookie(
    secret: SecretConfig = None,
    options: CookieOptions | None = None,
    **attributes: Any,
) -> MiddlewareFactory:
    """
    Build a cookie plugin that can be applied to any ASGI application.
    
    Args:
        secret: Signing secret, or a list of secrets for key rotation.
            The first one signs new cookies; all of them verify.
        options: Default attributes for every cookie written.
        **attributes: Individual default attributes (``path``, ``domain``,
            ``max_age``, ``expires``, ``secure``, ``httponly``,
            ``samesite``, ``priority``), merged over ``options``.
    
    Usage:
        app = cookie(secret="change-me-to-something-long")(app)
    
    Invalid configuration fails here, when the plugin is applied; a
    missing secret only fails when something tries to sign or verify.
    """
    # Resolve eagerly so bad attribute names surface at install time
    CookieOptions(**attributes)
    return partial(CookieMiddleware, secret=secret, options=options, **attributes)
