"""
Type definitions for crumbs.
ASGI callables plus the handler-facing cookie aliases.
"""

from collections.abc import Awaitable, Callable, MutableMapping, Sequence
from typing import Any, TypeAlias

# ASGI Types
Scope: TypeAlias = MutableMapping[str, Any]
Message: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[Message]]
Send: TypeAlias = Callable[[Message], Awaitable[None]]
ASGIApp: TypeAlias = Callable[[Scope, Receive, Send], Awaitable[None]]
MiddlewareFactory: TypeAlias = Callable[[ASGIApp], ASGIApp]

# Cookie Types
SecretConfig: TypeAlias = str | Sequence[str] | None
HeaderLoader: TypeAlias = Callable[[], str | None]
