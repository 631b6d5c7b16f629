"""Domain service: order number generation.

Order numbers look like ``ORD-1760870400123-9F2C4A1B``: the creation
time in epoch milliseconds plus eight random hex digits. That is unique
in practice but not by construction, so the generator asks the order
repository and draws again on the rare collision.
"""

from __future__ import annotations

import secrets
import time
from typing import Callable

from storefront.domain.exceptions import DomainException
from storefront.domain.repository.order_repository import OrderRepository

MAX_ATTEMPTS = 5


class OrderNumberGenerator:

    def __init__(
        self,
        order_repo: OrderRepository,
        clock: Callable[[], float] = time.time,
        suffix: Callable[[], str] = lambda: secrets.token_hex(4).upper(),
    ) -> None:
        self._order_repo = order_repo
        self._clock = clock
        self._suffix = suffix

    def next_number(self) -> str:
        for _ in range(MAX_ATTEMPTS):
            candidate = f"ORD-{int(self._clock() * 1000)}-{self._suffix()}"
            if self._order_repo.get_by_order_number(candidate) is None:
                return candidate
        raise DomainException(
            f"Could not generate a unique order number after {MAX_ATTEMPTS} attempts"
        )
