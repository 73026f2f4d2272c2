"""
Resolved plugin configuration.
"""

from dataclasses import dataclass, field
from typing import Any

from crumbs.cookies import CookieOptions
from crumbs.jar import CookieJar, LazyCookieStore
from crumbs.keyring import KeyRing
from crumbs.types import HeaderLoader, SecretConfig


@dataclass(frozen=True, slots=True)
class CookieConfig:
    """
    Key ring plus default cookie attributes for one plugin installation.
    
    Immutable, so a single instance is shared by every request.
    """
    
    key_ring: KeyRing = field(default_factory=KeyRing)
    defaults: CookieOptions = field(default_factory=CookieOptions)
    
    @classmethod
    def build(
        cls,
        secret: SecretConfig = None,
        options: CookieOptions | None = None,
        **attributes: Any,
    ) -> "CookieConfig":
        """
        Resolve keyword configuration.
        
        ``attributes`` are CookieOptions fields and take precedence over
        ``options``. Unknown names raise TypeError.
        
        Raises:
            ConfigurationError: If ``secret`` is not a string or a
                sequence of non-empty strings.
        """
        defaults = (options or CookieOptions()).merge(CookieOptions(**attributes))
        return cls(key_ring=KeyRing.from_config(secret), defaults=defaults)
    
    def new_jar(self, load_header: HeaderLoader) -> CookieJar:
        """Create a fresh, unparsed jar for one request."""
        return CookieJar(LazyCookieStore(load_header, self.key_ring, self.defaults))
