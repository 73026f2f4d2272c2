"""
Base middleware class for crumbs.
"""

from abc import ABC, abstractmethod

from crumbs.types import ASGIApp, Receive, Scope, Send


class Middleware(ABC):
    """
    Abstract base middleware class.
    
    Wraps an ASGI application. Only ``http`` scopes reach ``process``;
    lifespan and websocket traffic is passed straight through.
    """
    
    def __init__(self, app: ASGIApp) -> None:
        self.app = app
    
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI interface - called by the server."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        
        await self.process(scope, receive, send)
    
    @abstractmethod
    async def process(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process the request. Must be implemented by subclasses."""
        ...
