"""
Secret key ring with rotation support.
"""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import NamedTuple

from crumbs.exceptions import ConfigurationError, MalformedInputError
from crumbs.signing import sign, unsign
from crumbs.types import SecretConfig

# Secrets shorter than this are accepted but logged as weak
MIN_SECRET_LENGTH: int = 16

logger = logging.getLogger("crumbs.keyring")


@dataclass(frozen=True, slots=True)
class KeyRing:
    """
    Ordered, immutable set of signing secrets (Value Object).
    
    The first secret signs every new value. Verification tries each
    secret in order, so retired keys keep validating cookies issued
    before a rotation:
    
        ring = KeyRing.from_config(["new-secret", "old-secret"])
    """
    
    secrets: tuple[str, ...] = ()
    
    @classmethod
    def from_config(cls, secret: SecretConfig) -> "KeyRing":
        """Normalize an absent, single, or list secret into a key ring."""
        if not secret:
            return cls()
        
        if isinstance(secret, str):
            candidates: tuple[str, ...] = (secret,)
        elif isinstance(secret, Sequence) and not isinstance(secret, (bytes, bytearray)):
            candidates = tuple(secret)
        else:
            raise ConfigurationError(
                f"secret must be a string or a sequence of strings, "
                f"got {type(secret).__name__}"
            )
        
        for index, candidate in enumerate(candidates):
            if not isinstance(candidate, str) or not candidate:
                raise ConfigurationError(
                    f"secret[{index}] must be a non-empty string"
                )
            if len(candidate) < MIN_SECRET_LENGTH:
                logger.warning(
                    "secret[%d] is shorter than %d characters; "
                    "use a cryptographically random value in production",
                    index,
                    MIN_SECRET_LENGTH,
                )
        
        return cls(candidates)
    
    def __len__(self) -> int:
        return len(self.secrets)
    
    def __bool__(self) -> bool:
        return bool(self.secrets)
    
    def __iter__(self) -> Iterator[str]:
        return iter(self.secrets)
    
    def __repr__(self) -> str:
        # Never leak secrets through reprs or tracebacks
        return f"KeyRing(<{len(self.secrets)} secret(s)>)"
    
    @property
    def signing_secret(self) -> str | None:
        """The secret used for new signatures, or None when unconfigured."""
        return self.secrets[0] if self.secrets else None
    
    def sign(self, value: str) -> str:
        """
        Sign a value with the newest secret.
        
        Raises:
            ConfigurationError: If no secret is configured.
        """
        return sign(value, self.signing_secret)
    
    def verify(self, token: str) -> str | None:
        """Return the value of the first secret that verifies ``token``."""
        for secret in self.secrets:
            value = unsign(token, secret)
            if value is not None:
                return value
        return None
    
    def unsign_cookie(self, token: str) -> "UnsignResult":
        """
        Check a signed cookie value supplied by handler code.
        
        Verification failure is an ordinary result, never an exception.
        
        Raises:
            MalformedInputError: If ``token`` is not a string.
            ConfigurationError: If no secret is configured.
        """
        if not isinstance(token, str):
            raise MalformedInputError(
                f"unsign_cookie expected a string, got {type(token).__name__}"
            )
        if not self.secrets:
            raise ConfigurationError()
        
        value = self.verify(token)
        return UnsignResult(valid=value is not None, value=value)


class UnsignResult(NamedTuple):
    """Outcome of ``unsign_cookie``: ``valid, value = ring.unsign_cookie(token)``."""
    
    valid: bool
    value: str | None
