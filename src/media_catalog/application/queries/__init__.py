"""Query side of CQRS pattern."""

from .base import Query, QueryHandler, QueryBus, QueryResult, QueryCache, CacheEntry

__all__ = ["Query", "QueryHandler", "QueryBus", "QueryResult", "QueryCache", "CacheEntry"]
