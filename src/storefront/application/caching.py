"""Cache-aside for read handlers and best-effort invalidation for writers.

Read handlers decorate ``handle`` with ``@cached(SCOPE)``; the first
positional argument is the cache key. Writers call the ``evict_*``
helpers after every mutation. Cache failures are logged and never reach
the caller.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

from storefront.application.ports import Cache
from storefront.domain.model.order import Order

logger = logging.getLogger(__name__)

T = TypeVar("T")

CART_SCOPE = "cart"
ORDER_SCOPE = "order"
USER_ORDERS_SCOPE = "user_orders"


def cached(scope: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Serve ``handle(self, key, ...)`` from ``self._cache`` when possible."""

    def decorator(method: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(method)
        def wrapper(self: Any, key: Any, *args: Any, **kwargs: Any) -> T:
            cache: Cache | None = getattr(self, "_cache", None)
            if cache is None:
                return method(self, key, *args, **kwargs)

            cache_key = str(key)
            try:
                hit = cache.get(scope, cache_key)
            except Exception:
                logger.exception("Cache read failed for %s:%s", scope, cache_key)
                hit = None
            if hit is not None:
                logger.debug("Cache hit for %s:%s", scope, cache_key)
                return hit

            value = method(self, key, *args, **kwargs)
            try:
                cache.put(scope, cache_key, value)
            except Exception:
                logger.exception("Cache write failed for %s:%s", scope, cache_key)
            return value

        return wrapper

    return decorator


def evict_quietly(cache: Cache | None, scope: str, key: Any) -> None:
    if cache is None:
        return
    try:
        cache.evict(scope, str(key))
    except Exception:
        logger.exception("Cache eviction failed for %s:%s", scope, key)


def evict_cart(cache: Cache | None, user_id: str) -> None:
    evict_quietly(cache, CART_SCOPE, user_id)


def evict_order(cache: Cache | None, order: Order) -> None:
    evict_quietly(cache, ORDER_SCOPE, order.id)
    evict_quietly(cache, USER_ORDERS_SCOPE, order.user_id)
