"""
crumbs exceptions.
Configuration and input errors propagate to the handler; wire-format
problems in the request header are absorbed by the jar.
"""


class CrumbsException(Exception):
    """Base exception for all crumbs errors."""
    
    def __init__(self, message: str = "An error occurred") -> None:
        self.message = message
        super().__init__(self.message)


class ConfigurationError(CrumbsException):
    """Signing or verification attempted without a usable secret."""
    
    def __init__(self, message: str = "Secret key must be provided") -> None:
        super().__init__(message)


class MalformedInputError(CrumbsException, TypeError):
    """A handler passed a value of the wrong type."""
    pass


class CookieError(CrumbsException, ValueError):
    """Cookie wire-format errors (parsing or serialization)."""
    pass
