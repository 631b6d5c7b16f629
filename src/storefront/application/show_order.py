"""Application services: order queries."""

from __future__ import annotations

from storefront.application.caching import ORDER_SCOPE, USER_ORDERS_SCOPE, cached
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.ports import Cache
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository, cache: Cache | None = None) -> None:
        self._order_repo = order_repo
        self._cache = cache

    @cached(ORDER_SCOPE)
    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)


class ShowOrderByNumberHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_number: str) -> OrderDTO:
        order = self._order_repo.get_by_order_number(order_number)
        if order is None:
            raise EntityNotFoundError(f"Order {order_number} not found")
        return order_to_dto(order)


class ListUserOrdersHandler:
    """A user's order history, newest first."""

    def __init__(self, order_repo: OrderRepository, cache: Cache | None = None) -> None:
        self._order_repo = order_repo
        self._cache = cache

    @cached(USER_ORDERS_SCOPE)
    def handle(self, user_id: str) -> tuple[OrderDTO, ...]:
        return tuple(order_to_dto(o) for o in self._order_repo.list_by_user_id(user_id))


class ListOrdersHandler:
    """Admin view of every order, optionally narrowed by status and/or payment status."""

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        status: OrderStatus | None = None,
        payment_status: PaymentStatus | None = None,
    ) -> tuple[OrderDTO, ...]:
        if status is not None:
            orders = self._order_repo.list_by_status(status)
            if payment_status is not None:
                orders = [o for o in orders if o.payment_status == payment_status]
        elif payment_status is not None:
            orders = self._order_repo.list_by_payment_status(payment_status)
        else:
            orders = self._order_repo.list_all()
        return tuple(order_to_dto(o) for o in orders)
