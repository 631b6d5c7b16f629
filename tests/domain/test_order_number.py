import re

import pytest

from storefront.domain.exceptions import DomainException
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Address, Money, PaymentMethod, Quantity
from storefront.domain.service.order_number import MAX_ATTEMPTS, OrderNumberGenerator
from tests.fakes import FakeOrderRepository


def _store_order(repo: FakeOrderRepository, number: str) -> None:
    cart = Cart(user_id="alice")
    cart.add_item(Product(id="1", name="Widget", price=Money.of("1.00"), stock=1), Quantity(1))
    repo.save(Order.create(
        number, "alice", cart.items, cart.totals,
        Address("A", "B", "C", "D", "E", "F"), PaymentMethod.PAYPAL,
    ))


class TestOrderNumberGenerator:

    def test_format(self):
        number = OrderNumberGenerator(FakeOrderRepository()).next_number()
        assert re.fullmatch(r"ORD-\d{13}-[0-9A-F]{8}", number)

    def test_retries_on_collision(self):
        repo = FakeOrderRepository()
        _store_order(repo, "ORD-1000-AAAAAAAA")
        suffixes = iter(["AAAAAAAA", "BBBBBBBB"])
        generator = OrderNumberGenerator(repo, clock=lambda: 1.0, suffix=lambda: next(suffixes))

        assert generator.next_number() == "ORD-1000-BBBBBBBB"

    def test_gives_up_after_max_attempts(self):
        repo = FakeOrderRepository()
        _store_order(repo, "ORD-1000-AAAAAAAA")
        calls = []

        def suffix() -> str:
            calls.append(1)
            return "AAAAAAAA"

        generator = OrderNumberGenerator(repo, clock=lambda: 1.0, suffix=suffix)
        with pytest.raises(DomainException, match="unique order number"):
            generator.next_number()
        assert len(calls) == MAX_ATTEMPTS
