"""
Per-request cookie jar.

``LazyCookieStore`` holds the request's cookies, parsing the ``Cookie``
header only when something first touches it, and keeps the pending
``Set-Cookie`` headers in step with every write and delete.
``CookieJar`` is the dict-like view handed to request handlers.
"""

import logging
from collections.abc import Iterator, MutableMapping
from dataclasses import dataclass, replace
from typing import Any

from crumbs.cookies import (
    CookieOptions,
    format_delete_cookie,
    format_set_cookie,
    parse_cookies,
)
from crumbs.exceptions import ConfigurationError, CookieError
from crumbs.keyring import KeyRing, UnsignResult
from crumbs.types import HeaderLoader

logger = logging.getLogger("crumbs.jar")

# Applied beneath the configured defaults on every write
_BASE_OPTIONS = CookieOptions(path="/")


@dataclass(frozen=True, slots=True)
class CookieValue:
    """
    Structured cookie write.

    Assign one to a jar key instead of a bare string to sign the value
    or to override the configured attributes for this cookie:

        jar["name"] = CookieValue("bob", signed=True)
        jar["theme"] = CookieValue("dark", options=CookieOptions(max_age=3600))
    """

    value: str
    signed: bool = False
    options: CookieOptions | None = None


@dataclass(frozen=True, slots=True)
class CookieEntry:
    """A live cookie. ``options`` is None when it came from the request."""

    name: str
    value: str
    options: CookieOptions | None = None


class LazyCookieStore:
    """
    Request-scoped cookie storage.

    Every operation calls ``ensure_parsed`` first, so the header is parsed
    at most once and writes made before any read still see the cookies
    the client sent. Each name has at most one pending ``Set-Cookie``
    header; a later write or delete replaces it.
    """

    def __init__(
        self,
        load_header: HeaderLoader,
        key_ring: KeyRing | None = None,
        defaults: CookieOptions | None = None,
    ) -> None:
        self._load_header = load_header
        self.key_ring = key_ring or KeyRing()
        self._options = _BASE_OPTIONS.merge(defaults)
        self.parsed = False
        self._entries: dict[str, CookieEntry] = {}
        self._pending: dict[str, str] = {}

    def ensure_parsed(self) -> None:
        """Parse the request's Cookie header on first use."""
        if self.parsed:
            return

        header = self._load_header()
        try:
            cookies = parse_cookies(header or "")
        except CookieError as exc:
            logger.debug("Discarding malformed cookie header: %s", exc)
            cookies = {}

        self._entries = {
            name: CookieEntry(name, value) for name, value in cookies.items()
        }
        self.parsed = True
        logger.debug("Parsed %d cookie(s) from request header", len(self._entries))

    def get(self, name: str) -> str | None:
        self.ensure_parsed()
        entry = self._entries.get(name)
        return entry.value if entry is not None else None

    def entry(self, name: str) -> CookieEntry | None:
        self.ensure_parsed()
        return self._entries.get(name)

    def set(
        self,
        name: str,
        value: str | CookieValue,
        options: CookieOptions | None = None,
    ) -> None:
        """
        Store a cookie and queue its Set-Cookie header.

        Attribute precedence, lowest first: ``Path=/``, configured
        defaults, the CookieValue's own options, then ``options``.

        Raises:
            ConfigurationError: If a signed write is made without a secret.
            CookieError: If the cookie cannot be serialized.
            TypeError: If ``value`` is neither a string nor a CookieValue.
        """
        self.ensure_parsed()

        if isinstance(value, str):
            raw = value
            attributes = self._options.merge(options)
        elif isinstance(value, CookieValue):
            raw = self.key_ring.sign(value.value) if value.signed else value.value
            attributes = self._options.merge(value.options).merge(options)
        else:
            raise TypeError(
                f"Cookie {name!r} must be set to a str or CookieValue, "
                f"got {type(value).__name__}"
            )

        # Serialize first so a rejected write leaves the store untouched
        header = format_set_cookie(name, raw, attributes)
        self._entries[name] = CookieEntry(name, raw, attributes)
        self._queue(name, header)
        logger.debug("Set cookie %r", name)

    def delete(
        self,
        name: str,
        *,
        path: str | None = None,
        domain: str | None = None,
    ) -> bool:
        """
        Remove a cookie and queue a header that expires it on the client.

        Cookies written during this request are cleared with the Path and
        Domain they were written with unless ``path``/``domain`` are given.
        Returns False, queueing nothing, when the cookie does not exist.
        """
        self.ensure_parsed()

        entry = self._entries.get(name)
        if entry is None:
            return False

        if entry.options is not None:
            path = path or entry.options.path
            domain = domain or entry.options.domain

        header = format_delete_cookie(name, path=path, domain=domain)
        del self._entries[name]
        self._queue(name, header)
        logger.debug("Deleted cookie %r", name)
        return True

    def names(self) -> list[str]:
        self.ensure_parsed()
        return list(self._entries)

    def items(self) -> list[tuple[str, str]]:
        """Current (name, value) pairs, in insertion order."""
        self.ensure_parsed()
        return [(name, entry.value) for name, entry in self._entries.items()]

    def __contains__(self, name: object) -> bool:
        self.ensure_parsed()
        return name in self._entries

    def __len__(self) -> int:
        self.ensure_parsed()
        return len(self._entries)

    @property
    def set_cookie_headers(self) -> list[str]:
        """Pending Set-Cookie values, ordered by each name's last write."""
        return list(self._pending.values())

    def _queue(self, name: str, header: str) -> None:
        self._pending.pop(name, None)
        self._pending[name] = header


class CookieJar(MutableMapping[str, str]):
    """
    Dict-like cookie access for request handlers.

    Reads return the raw cookie value (signed cookies keep their
    signature; check them with ``unsign``). Assignments and deletions
    are turned into Set-Cookie headers on the response.

        jar["user"] = "saltyaom"
        jar["name"] = CookieValue("bob", signed=True)
        del jar["user"]

    Deleting a cookie that does not exist is a silent no-op.
    """

    def __init__(self, store: LazyCookieStore) -> None:
        self._store = store

    def __getitem__(self, name: str) -> str:
        value = self._store.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __setitem__(self, name: str, value: str | CookieValue) -> None:
        self._store.set(name, value)

    def __delitem__(self, name: str) -> None:
        self._store.delete(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._store.names())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, name: object) -> bool:
        return name in self._store

    def __repr__(self) -> str:
        return f"CookieJar({self._store.names()!r})"

    @property
    def store(self) -> LazyCookieStore:
        return self._store

    def set(
        self,
        name: str,
        value: str | CookieValue,
        *,
        signed: bool = False,
        **attributes: Any,
    ) -> None:
        """
        Set a cookie with per-write attributes.

        Args:
            name: Cookie name.
            value: A string or a CookieValue.
            signed: Sign the value with the current secret.
            **attributes: Any CookieOptions field, e.g. ``max_age=3600``.
        """
        if signed:
            if isinstance(value, CookieValue):
                value = replace(value, signed=True)
            else:
                value = CookieValue(value, signed=True)
        options = CookieOptions(**attributes) if attributes else None
        self._store.set(name, value, options)

    def remove(
        self,
        name: str,
        *,
        path: str | None = None,
        domain: str | None = None,
    ) -> bool:
        """Delete a cookie. Returns whether it existed."""
        return self._store.delete(name, path=path, domain=domain)

    def unsign(self, name: str) -> UnsignResult:
        """
        Verify the named cookie's signature.

        A missing cookie is reported as invalid.

        Raises:
            ConfigurationError: If no secret is configured.
        """
        value = self._store.get(name)
        if value is None:
            if not self._store.key_ring:
                raise ConfigurationError()
            return UnsignResult(valid=False, value=None)
        return self._store.key_ring.unsign_cookie(value)
