"""A minimal saga: run steps, and undo the completed ones if a later step fails.

There is no transaction spanning the order store, the product store and
the cart store, so multi-step writes register a compensation after each
step that succeeds. ``Saga`` is a context manager: leaving the block
with an exception runs the compensations newest-first and re-raises the
original error.
"""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class Saga:

    def __init__(self, name: str) -> None:
        self._name = name
        self._compensations: list[tuple[str, Callable[[], None]]] = []

    def on_rollback(self, description: str, compensation: Callable[[], None]) -> None:
        self._compensations.append((description, compensation))

    def rollback(self) -> None:
        """Run every registered compensation, newest first.

        A failing compensation is logged and the rest still run.
        """
        while self._compensations:
            description, compensation = self._compensations.pop()
            try:
                compensation()
            except Exception:
                logger.exception("%s: compensation failed: %s", self._name, description)
            else:
                logger.info("%s: compensated: %s", self._name, description)

    def __enter__(self) -> Saga:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            logger.warning("%s failed (%s); rolling back", self._name, exc)
            self.rollback()
        self._compensations.clear()
        return False
