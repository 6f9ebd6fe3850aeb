"""Content-addressed parse cache for Spanmark.

Provides (content_hash, config_hash) -> Document caching so hosts that
re-parse on every keystroke can skip unchanged text.

Thread Safety:
    DictParseCache is not thread-safe. For parallel parsing, use a cache
    implementation with internal locking (e.g. threading.Lock around get/put).

Example:
    >>> from spanmark import parse, DictParseCache
    >>> cache = DictParseCache()
    >>> doc1 = parse("***hi***", cache=cache)
    >>> doc2 = parse("***hi***", cache=cache)  # Cache hit, no re-parse
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from spanmark.catalog import default_catalog
from spanmark.utils.hashing import hash_str

if TYPE_CHECKING:
    from spanmark.config import ParseConfig
    from spanmark.elements import Document


class ParseCache(Protocol):
    """Protocol for content-addressed parse caches.

    Cache key is (content_hash, config_hash). Cached value is a Document,
    which is immutable and safe to share across threads.
    """

    def get(self, content_hash: str, config_hash: str) -> Document | None:
        """Return cached Document if present, else None."""
        ...

    def put(self, content_hash: str, config_hash: str, doc: Document) -> None:
        """Store Document in cache."""
        ...


class DictParseCache:
    """In-memory parse cache using a dict.

    Not thread-safe. For parallel parsing, wrap with a lock or use a
    thread-safe implementation.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[tuple[str, str], Document] = {}

    def get(self, content_hash: str, config_hash: str) -> Document | None:
        """Return cached Document if present, else None."""
        return self._data.get((content_hash, config_hash))

    def put(self, content_hash: str, config_hash: str, doc: Document) -> None:
        """Store Document in cache."""
        self._data[(content_hash, config_hash)] = doc

    def __len__(self) -> int:
        return len(self._data)


def hash_content(source: str) -> str:
    """Compute SHA256 hash of source for cache key."""
    return hash_str(source)


def hash_config(config: ParseConfig) -> str:
    """Compute hash of ParseConfig for cache key.

    The catalog contributes its content fingerprint, so two catalogs with
    the same rules share cache entries and distinct ones never do. When
    text_transformer is set, or the catalog has a matcher that cannot be
    fingerprinted, returns empty string to disable caching.

    Args:
        config: ParseConfig to hash

    Returns:
        Hex digest of config hash, or "" if cache should be bypassed
    """
    if config.text_transformer is not None:
        return ""
    catalog = config.catalog if config.catalog is not None else default_catalog()
    if catalog.fingerprint is None:
        return ""
    return hash_str(f"{config.max_depth}|{catalog.fingerprint}")


__all__ = [
    "DictParseCache",
    "ParseCache",
    "hash_config",
    "hash_content",
]
