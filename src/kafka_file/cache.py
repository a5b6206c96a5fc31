"""Version-keyed language model cache for kafka files.

Editors ask for the parsed tree of a document on nearly every keystroke.
Re-parsing is cheap, but re-parsing unchanged text is waste: this cache
maps a document identity (its URI) to the tree parsed for a given
``(version, language_id)`` and only re-parses when either changes.

Memory is bounded two ways:
- Size: at most ``max_entries`` documents. Adding a new document beyond
  that evicts the least recently accessed one.
- Time: a background sweep every ``cleanup_interval_seconds`` drops
  entries not accessed for longer than that interval (documents closed
  without a removal notification). A non-positive interval disables it.

Thread Safety:
    The entry map is guarded by a lock because the sweep runs on a timer
    thread. Parsing happens outside the lock.

Example:
    >>> from kafka_file import LanguageModelCache, TextDocument
    >>> cache = LanguageModelCache(max_entries=10, cleanup_interval_seconds=60)
    >>> doc = TextDocument("PRODUCER\\ntopic: t\\nhello", uri="file:///a.kafka")
    >>> cache.get(doc) is cache.get(doc)  # Cache hit, no re-parse
    True
    >>> cache.dispose()
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from kafka_file.document import TextDocumentLike
from kafka_file.errors import CacheConfigError
from kafka_file.parser import parse_kafka_file
from kafka_file.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ENTRIES = 10
DEFAULT_CLEANUP_INTERVAL_SECONDS = 60.0


class ModelCache(Protocol[T]):
    """Protocol for document model caches."""

    def get(self, document: TextDocumentLike) -> T:
        """Return the model for document, parsing it if needed."""
        ...

    def on_document_removed(self, document: TextDocumentLike) -> None:
        """Forget the model of a closed document."""
        ...

    def dispose(self) -> None:
        """Stop background work and drop every model."""
        ...


@dataclass(slots=True)
class _CacheEntry:
    model: Any
    version: int
    language_id: str
    last_access: float


class LanguageModelCache(Generic[T]):
    """LRU and TTL bounded cache of parsed document models.

    Args:
        max_entries: Maximum number of distinct documents kept
        cleanup_interval_seconds: Sweep period and idle time-to-live.
            Non-positive disables the sweep.
        parse: Function building the model of a document
        clock: Monotonic clock in seconds (injectable for tests)

    Raises:
        CacheConfigError: If max_entries is lower than 1

    """

    __slots__ = (
        "_max_entries",
        "_cleanup_interval",
        "_parse",
        "_clock",
        "_entries",
        "_lock",
        "_timer",
        "_disposed",
    )

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        cleanup_interval_seconds: float = DEFAULT_CLEANUP_INTERVAL_SECONDS,
        parse: Callable[[TextDocumentLike], T] = parse_kafka_file,  # type: ignore[assignment]
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise CacheConfigError("max_entries", f"must be at least 1, got {max_entries}")
        self._max_entries = max_entries
        self._cleanup_interval = cleanup_interval_seconds
        self._parse = parse
        self._clock = clock
        # Ordered by last access, least recent first
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._disposed = False

        if cleanup_interval_seconds > 0:
            self._schedule_cleanup()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, uri: object) -> bool:
        with self._lock:
            return uri in self._entries

    def __enter__(self) -> LanguageModelCache[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def cleanup_interval_seconds(self) -> float:
        return self._cleanup_interval

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def get(self, document: TextDocumentLike) -> T:
        """Return the model for document, parsing it on a version change.

        A hit requires the cached version and language id to both match
        the document's. Hits and re-parses refresh the access time.
        Exceptions raised by the parse function propagate and leave the
        cache unchanged. A tree parsed for an older version than the one
        stored meanwhile is returned but not cached.
        """
        uri = document.uri
        version = document.version
        language_id = document.language_id

        with self._lock:
            entry = self._entries.get(uri)
            if entry is not None and entry.version == version and entry.language_id == language_id:
                entry.last_access = self._clock()
                self._entries.move_to_end(uri)
                logger.debug("Cache hit for %s (version %s)", uri, version)
                return entry.model

        logger.debug("Cache miss for %s (version %s), parsing", uri, version)
        model = self._parse(document)

        with self._lock:
            current = self._entries.get(uri)
            if current is not None and current.version > version:
                logger.debug("Discarded stale model for %s (version %s)", uri, version)
                return model
            is_new = current is None
            self._entries[uri] = _CacheEntry(model, version, language_id, self._clock())
            self._entries.move_to_end(uri)
            if is_new and len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted least recently used model %s", evicted)
        return model

    def on_document_removed(self, document: TextDocumentLike) -> None:
        with self._lock:
            self._entries.pop(document.uri, None)

    def cleanup(self) -> int:
        """Drop entries idle for longer than the cleanup interval.

        Run periodically by the background timer; callable directly.

        Returns:
            Number of entries removed (always 0 when the sweep is disabled)
        """
        if self._cleanup_interval <= 0:
            return 0
        cutoff = self._clock() - self._cleanup_interval
        removed = 0
        with self._lock:
            while self._entries:
                uri, entry = next(iter(self._entries.items()))
                if entry.last_access >= cutoff:
                    break
                del self._entries[uri]
                removed += 1
        if removed:
            logger.debug("Cleanup removed %d idle model(s)", removed)
        return removed

    def dispose(self) -> None:
        """Cancel the sweep timer and drop every entry.

        The cache stays usable for ``get`` but never schedules a sweep again.
        """
        with self._lock:
            self._disposed = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._entries.clear()

    def _schedule_cleanup(self) -> None:
        timer = threading.Timer(self._cleanup_interval, self._run_scheduled_cleanup)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _run_scheduled_cleanup(self) -> None:
        self.cleanup()
        with self._lock:
            if self._disposed:
                return
            self._schedule_cleanup()


__all__ = [
    "DEFAULT_CLEANUP_INTERVAL_SECONDS",
    "DEFAULT_MAX_ENTRIES",
    "LanguageModelCache",
    "ModelCache",
]
