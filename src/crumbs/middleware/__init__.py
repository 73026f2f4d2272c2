"""
Middleware package for crumbs.
"""

from crumbs.middleware.base import Middleware
from crumbs.middleware.cookie import CookieMiddleware

__all__ = [
    "Middleware",
    "CookieMiddleware",
]
