"""Async-aware caching with per-item TTL for report services."""

import functools
import inspect
import time
from collections.abc import Callable
from datetime import date

from cachetools import TLRUCache
from loguru import logger

from booking_analytics.config import settings


class _CacheEntry:
    """Wrapper for cached values with period metadata for TTL computation."""

    __slots__ = ("value", "period_end")

    def __init__(self, value, period_end: date | None):
        self.value = value
        self.period_end = period_end


def _ttu(_key, entry: _CacheEntry, now):
    """Compute per-item TTU (time-to-use) based on whether the period is closed."""
    if entry.period_end is not None and entry.period_end < date.today():
        return now + settings.cache_ttl_closed
    return now + settings.cache_ttl_open


def create_cache(maxsize: int | None = None) -> TLRUCache | None:
    """Build a report cache, or None when caching is disabled (maxsize 0)."""
    maxsize = settings.cache_maxsize if maxsize is None else maxsize
    if maxsize <= 0:
        return None
    return TLRUCache(maxsize=maxsize, ttu=_ttu, timer=time.monotonic)


def async_cached(period_end: Callable[[inspect.BoundArguments], date | None]):
    """Decorator for caching async report methods with per-item TTL.

    The cache is read from the instance's ``cache`` attribute, so each service
    owns its cache and a service without one always recomputes.

    Args:
        period_end: Returns the last day covered by the call, or None for an
            open-ended period, from the call's bound arguments.
    """

    def decorator(fn):
        signature = inspect.signature(fn)

        @functools.wraps(fn)
        async def wrapper(self, *args, **kwargs):
            cache: TLRUCache | None = getattr(self, "cache", None)
            if cache is None:
                return await fn(self, *args, **kwargs)

            key = (fn.__name__, args, tuple(sorted(kwargs.items())))
            try:
                entry = cache[key]
                logger.debug("Cache hit", method=fn.__name__)
                return entry.value
            except KeyError:
                pass

            result = await fn(self, *args, **kwargs)

            bound = signature.bind(self, *args, **kwargs)
            bound.apply_defaults()
            cache[key] = _CacheEntry(value=result, period_end=period_end(bound))
            logger.debug("Cache miss", method=fn.__name__)
            return result

        return wrapper

    return decorator
