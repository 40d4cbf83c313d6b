"""Query side of the catalog's CQRS layer.

Queries read the catalog without changing it. Handlers that name a cache key
get their results memoised in a QueryCache for the query's TTL; command
handlers clear the cache after every successful change.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Generic, List, Optional, TypeVar
from uuid import uuid4

from ..commands.base import Middleware, apply_middleware, elapsed_ms

logger = logging.getLogger(__name__)

Q = TypeVar("Q", bound="Query")
R = TypeVar("R")

DEFAULT_CACHE_TTL_SECONDS = 300


@dataclass(frozen=True, slots=True)
class Query:
    """Base query: an id and how long its result may be cached."""

    query_id: str = field(default_factory=lambda: str(uuid4()))
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS


class QueryHandler(ABC, Generic[Q, R]):
    """Answers one query type."""

    @abstractmethod
    async def handle(self, query: Q) -> R:
        """Compute the answer to ``query``."""

    @abstractmethod
    def can_handle(self, query_type: type) -> bool:
        """Check if this handler can handle the given query type."""

    def get_cache_key(self, query: Q) -> Optional[str]:
        """Key to memoise the answer under; None disables caching."""
        return None


@dataclass(frozen=True, slots=True)
class QueryResult(Generic[R]):
    """Answer to a dispatched query."""

    data: Optional[R] = None
    success: bool = True
    query_id: str = ""
    errors: List[str] = field(default_factory=list)
    from_cache: bool = False
    execution_time_ms: Optional[float] = None
    cached_at: Optional[datetime] = None


class QueryBus:
    """Routes queries to their handlers, consulting the cache when one is set."""

    def __init__(self):
        self._handlers: Dict[type, QueryHandler] = {}
        self._middleware: List[Middleware] = []
        self._cache: Optional[QueryCache] = None

    def register(self, query_type: type, handler: QueryHandler) -> None:
        self._handlers[query_type] = handler

    def register_middleware(self, middleware: Middleware) -> None:
        """Add a wrapper around every uncached handler call."""
        self._middleware.append(middleware)

    def set_cache(self, cache: "QueryCache") -> None:
        self._cache = cache

    @property
    def cache(self) -> Optional["QueryCache"]:
        return self._cache

    async def dispatch(self, query: Query) -> QueryResult:
        """Answer ``query``; failures come back as unsuccessful results."""
        query_type = type(query)
        handler = self._handlers.get(query_type)
        if handler is None:
            return QueryResult(
                success=False,
                query_id=query.query_id,
                errors=[f"No handler registered for query type: {query_type.__name__}"],
            )

        start = datetime.now()
        cache_key = handler.get_cache_key(query) if self._cache is not None else None
        if cache_key:
            hit = await self._cache.get(cache_key)
            if hit is not None:
                logger.debug("Cache hit for %s", cache_key)
                return QueryResult(
                    data=hit.data,
                    query_id=query.query_id,
                    from_cache=True,
                    cached_at=hit.timestamp,
                    execution_time_ms=elapsed_ms(start),
                )

        try:
            data = await apply_middleware(handler.handle, self._middleware)(query)
        except Exception as e:
            logger.exception("Query %s failed", query_type.__name__)
            return QueryResult(
                success=False,
                query_id=query.query_id,
                errors=[str(e)],
                execution_time_ms=elapsed_ms(start),
            )

        if cache_key:
            await self._cache.set(cache_key, data, ttl_seconds=query.cache_ttl_seconds)
        return QueryResult(data=data, query_id=query.query_id, execution_time_ms=elapsed_ms(start))


@dataclass
class CacheEntry:
    """A memoised answer and its expiry."""

    data: Any
    timestamp: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now()) > self.expires_at


class QueryCache:
    """In-memory TTL cache keyed by query cache keys."""

    def __init__(self):
        self._entries: Dict[str, CacheEntry] = {}

    async def get(self, key: str) -> Optional[CacheEntry]:
        """Get a live entry, dropping it if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired():
            del self._entries[key]
            return None
        return entry

    async def set(self, key: str, data: Any, ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS) -> None:
        now = datetime.now()
        self._entries[key] = CacheEntry(data=data, timestamp=now, expires_at=now + timedelta(seconds=ttl_seconds))

    async def invalidate(self, pattern: Optional[str] = None) -> None:
        """Drop every entry, or only those whose key contains ``pattern``."""
        if not pattern:
            self._entries.clear()
            return
        for key in [k for k in self._entries if pattern in k]:
            del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)
