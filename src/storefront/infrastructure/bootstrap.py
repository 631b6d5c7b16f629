"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import functools

from storefront.application.notifications import OrderNotifications
from storefront.application.ports import Cache
from storefront.infrastructure.cache.memory_cache import InMemoryCache, NullCache
from storefront.infrastructure.config import Settings, load_settings
from storefront.infrastructure.notifications.logging_notifier import LoggingNotifier
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_user_directory import (
    JsonUserDirectory,
)


def settings() -> Settings:
    return load_settings()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(settings().data_dir / "carts.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def user_directory() -> JsonUserDirectory:
    return JsonUserDirectory(settings().data_dir / "users.json")


def cache() -> Cache:
    return _cache_for(settings().cache_ttl_seconds)


@functools.lru_cache(maxsize=None)
def _cache_for(ttl_seconds: int) -> Cache:
    if ttl_seconds == 0:
        return NullCache()
    return InMemoryCache(ttl_seconds=ttl_seconds)


def order_notifications() -> OrderNotifications:
    return OrderNotifications(LoggingNotifier(), user_directory())
