"""
Dotted property paths into loosely structured JSON.

A path string such as ``"data.items.0.title"`` names a value nested inside
decoded JSON. Segments are separated by ``.``; a backslash makes the next
character literal, so ``"a\\.b.c"`` addresses key ``"a.b"`` then ``"c"``.

Parsing never fails and never returns an empty sequence: the trailing
buffer is always emitted as the last segment, and a dangling backslash is
silently consumed.

Usage:
    from respcast.core.paths import PathCache, get_by_path, parse_path

    parse_path("user.screen_name")            # ("user", "screen_name")
    get_by_path({"user": {"id": 7}}, "user.id")  # 7

    cache = PathCache(maxsize=128)
    parse_path("user.id", cache)  # parsed once, then served from cache
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)

PropertyPath = tuple[str, ...]

_DEFAULT_CACHE_SIZE = 256


class PathCache:
    """Bounded LRU cache of parsed property paths.

    Owned by whoever does the lookups (normally a ResponseExtractor) and
    passed explicitly to :func:`parse_path`; there is no module-level cache.
    Safe to share between threads; every operation holds an internal lock.

    Args:
        maxsize: Maximum number of distinct path strings kept. ``0`` keeps
            nothing, which makes the cache a pass-through.
    """

    def __init__(self, maxsize: int = _DEFAULT_CACHE_SIZE) -> None:
        if maxsize < 0:
            raise ValueError("maxsize must be >= 0")
        self._maxsize = maxsize
        self._entries: OrderedDict[str, PropertyPath] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._entries

    def get(self, path: str) -> PropertyPath | None:
        with self._lock:
            chain = self._entries.get(path)
            if chain is None:
                self.misses += 1
                return None
            self._entries.move_to_end(path)
            self.hits += 1
            return chain

    def put(self, path: str, chain: PropertyPath) -> None:
        if self._maxsize == 0:
            return
        with self._lock:
            self._entries[path] = chain
            self._entries.move_to_end(path)
            while len(self._entries) > self._maxsize:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted path %r from cache", evicted)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0


def parse_path(path: str, cache: PathCache | None = None) -> PropertyPath:
    """Split a dotted, backslash-escaped path into property names.

    Args:
        path: Path string, e.g. ``"results.0.geometry"``.
        cache: Optional cache consulted before parsing and filled after.

    Returns:
        Non-empty tuple of segment names.
    """
    if cache is not None:
        cached = cache.get(path)
        if cached is not None:
            return cached

    chain: list[str] = []
    buffer: list[str] = []
    escape = False

    for ch in path:
        if escape:
            buffer.append(ch)
            escape = False
        elif ch == "\\":
            escape = True
        elif ch == ".":
            chain.append("".join(buffer))
            buffer = []
        else:
            buffer.append(ch)

    chain.append("".join(buffer))
    result = tuple(chain)

    if cache is not None:
        cache.put(path, result)
    return result


def get_by_path(
    value: Any,
    path: str | Sequence[str],
    cache: PathCache | None = None,
) -> Any:
    """Walk nested mappings and sequences along a property path.

    Mappings are indexed by key; sequences (other than strings) are indexed
    positionally when the segment is a non-negative integer. Anything else,
    including ``None`` and scalars, ends the walk with ``None``.

    Args:
        value: Decoded JSON value to read from.
        path: Path string or an already parsed sequence of segments.
        cache: Optional PathCache used when ``path`` is a string.

    Returns:
        The value found at the path, or None if any step is missing.
    """
    segments = parse_path(path, cache) if isinstance(path, str) else path

    current = value
    for segment in segments:
        if isinstance(current, Mapping):
            current = current.get(segment)
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not (segment.isascii() and segment.isdigit()):
                return None
            index = int(segment)
            if index >= len(current):
                return None
            current = current[index]
        else:
            return None
    return current
