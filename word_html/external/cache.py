"""Fingerprinting and tag-aware caching around the converter.

The cache is a collaborator: the conversion itself stays a pure function of
the input file, and this module only decides whether to call it.
"""
from __future__ import annotations

import hashlib
import os
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Protocol, Set, Tuple, Union

from word_html.config import ConversionOptions
from word_html.converter import convert_to_html
from word_html.utils.logger import get_logger

LOGGER = get_logger(__name__)


def fingerprint(path: Union[str, Path], mtime: Optional[float] = None) -> str:
    """Derive a cache key from the absolute path and its modification time."""
    absolute = os.path.abspath(os.fspath(path))
    if mtime is None:
        mtime = os.stat(absolute).st_mtime
    return hashlib.md5(f"{absolute}:{mtime}".encode("utf-8"), usedforsecurity=False).hexdigest()


class TaggedCache(Protocol):
    """Key-value store whose entries can be dropped in bulk by tag."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str, ttl: int, tags: Iterable[str] = ()) -> None:
        ...

    def invalidate_tag(self, tag: str) -> None:
        ...


@dataclass
class _Entry:
    value: str
    expires_at: float
    tags: Tuple[str, ...]


class MemoryTaggedCache:
    """Process-local :class:`TaggedCache` with TTL expiry."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._keys_by_tag: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                self._discard(key)
                return None
            return entry.value

    def set(self, key: str, value: str, ttl: int, tags: Iterable[str] = ()) -> None:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            self._discard(key)
            entry = _Entry(value=value, expires_at=now + ttl, tags=tuple(tags))
            self._entries[key] = entry
            for tag in entry.tags:
                self._keys_by_tag.setdefault(tag, set()).add(key)

    def invalidate_tag(self, tag: str) -> None:
        with self._lock:
            for key in list(self._keys_by_tag.pop(tag, ())):
                self._discard(key)

    def __len__(self) -> int:
        with self._lock:
            self._sweep(self._clock())
            return len(self._entries)

    def _sweep(self, now: float) -> None:
        """Drop entries whose TTL has elapsed; callers hold the lock."""
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            self._discard(key)

    def _discard(self, key: str) -> None:
        entry = self._entries.pop(key, None)
        if entry is None:
            return
        for tag in entry.tags:
            keys = self._keys_by_tag.get(tag)
            if keys is None:
                continue
            keys.discard(key)
            if not keys:
                del self._keys_by_tag[tag]


class CachedConverter:
    """Skips re-conversion until the source file's modification time changes.

    Concurrent conversions of the same file are not deduplicated.
    """

    def __init__(
        self,
        cache: TaggedCache,
        options: Optional[ConversionOptions] = None,
        converter: Optional[Callable[..., str]] = None,
    ) -> None:
        self._cache = cache
        self._options = options or ConversionOptions()
        self._converter = converter or convert_to_html

    def convert(self, path: Union[str, Path], tags: Iterable[str] = ()) -> str:
        try:
            key = fingerprint(path)
        except OSError:
            # Unreadable paths are reported by the converter itself.
            return self._converter(path, self._options)
        cached = self._cache.get(key)
        if cached is not None:
            LOGGER.info("Cache hit for %s", Path(path).name)
            return cached

        LOGGER.info("Cache miss for %s", Path(path).name)
        html_text = self._converter(path, self._options)
        self._cache.set(key, html_text, self._options.cache_ttl, tags)
        return html_text

    def invalidate(self, tag: str) -> None:
        self._cache.invalidate_tag(tag)
