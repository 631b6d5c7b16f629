"""Integration tests for the cart use cases.

Uses in-memory fake repositories — no file I/O.
"""

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.caching import CART_SCOPE
from storefront.application.cart_discount import ApplyDiscountHandler, RemoveDiscountHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.remove_cart_item import RemoveCartItemHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.application.validate_cart import ValidateCartHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ItemNotFoundError,
    ProductUnavailableError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCache, FakeCartRepository, FakeProductRepository


def _setup():
    product_repo = FakeProductRepository([
        Product(id="1", name="Widget", price=Money.of("20.00"), stock=5),
        Product(id="2", name="Gadget", price=Money.of("15.00"), stock=10),
        Product(id="3", name="Retired", price=Money.of("5.00"), stock=10, is_active=False),
    ])
    cart_repo = FakeCartRepository()
    cache = FakeCache()
    return cart_repo, product_repo, cache


class TestAddToCart:

    def test_first_add_creates_cart(self):
        cart_repo, product_repo, cache = _setup()
        dto = AddToCartHandler(cart_repo, product_repo, cache).handle("alice", "1", 2)

        assert dto.item_count == 2
        assert dto.subtotal == "$40.00"
        assert dto.tax == "$4.00"
        assert dto.shipping == "$10.00"
        assert dto.total == "$54.00"
        assert cart_repo.get_by_user_id("alice") is not None

    def test_merged_quantity_checked_against_stock(self):
        cart_repo, product_repo, cache = _setup()
        handler = AddToCartHandler(cart_repo, product_repo, cache)
        handler.handle("alice", "1", 3)

        with pytest.raises(InsufficientStockError):
            handler.handle("alice", "1", 3)

        cart = cart_repo.get_by_user_id("alice")
        assert cart.quantity_of("1") == 3

    def test_add_does_not_touch_stock(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo, cache).handle("alice", "1", 5)
        assert product_repo.stock("1") == 5

    def test_unknown_product(self):
        cart_repo, product_repo, cache = _setup()
        with pytest.raises(EntityNotFoundError):
            AddToCartHandler(cart_repo, product_repo, cache).handle("alice", "404", 1)

    def test_inactive_product(self):
        cart_repo, product_repo, cache = _setup()
        with pytest.raises(ProductUnavailableError):
            AddToCartHandler(cart_repo, product_repo, cache).handle("alice", "3", 1)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity(self, quantity):
        cart_repo, product_repo, cache = _setup()
        with pytest.raises(ValidationError):
            AddToCartHandler(cart_repo, product_repo, cache).handle("alice", "1", quantity)
        assert cart_repo.get_by_user_id("alice") is None

    def test_evicts_cached_cart(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo, cache).handle("alice", "1", 1)
        assert (CART_SCOPE, "alice") in cache.evicted


class TestUpdateAndRemove:

    def test_update_sets_quantity(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("alice", "2", 1)

        dto = UpdateCartItemHandler(cart_repo, product_repo, cache).handle("alice", "2", 4)

        assert dto.items[0].quantity == 4

    def test_update_beyond_stock_rejected(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("alice", "1", 1)
        with pytest.raises(InsufficientStockError):
            UpdateCartItemHandler(cart_repo, product_repo, cache).handle("alice", "1", 6)

    def test_update_missing_line(self):
        cart_repo, product_repo, cache = _setup()
        with pytest.raises(ItemNotFoundError):
            UpdateCartItemHandler(cart_repo, product_repo, cache).handle("alice", "1", 1)

    def test_remove_line(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("alice", "1", 1)
        dto = RemoveCartItemHandler(cart_repo, cache).handle("alice", "1")
        assert dto.items == ()

    def test_remove_missing_line(self):
        cart_repo, _, cache = _setup()
        with pytest.raises(ItemNotFoundError):
            RemoveCartItemHandler(cart_repo, cache).handle("alice", "1")


class TestClearAndDiscount:

    def test_clear_is_idempotent(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("alice", "1", 2)
        handler = ClearCartHandler(cart_repo, cache)

        first = handler.handle("alice")
        second = handler.handle("alice")

        assert first == second
        assert first.total == "$0.00"

    def test_clear_without_cart(self):
        cart_repo, _, cache = _setup()
        assert ClearCartHandler(cart_repo, cache).handle("nobody").items == ()

    def test_discount_applied_and_removed(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("alice", "1", 3)

        dto = ApplyDiscountHandler(cart_repo, cache).handle("alice", "5.00")
        assert dto.total == "$61.00"

        dto = RemoveDiscountHandler(cart_repo, cache).handle("alice")
        assert dto.total == "$66.00"

    def test_discount_without_cart(self):
        cart_repo, _, cache = _setup()
        with pytest.raises(EntityNotFoundError):
            ApplyDiscountHandler(cart_repo, cache).handle("nobody", "5.00")


class TestShowCart:

    def test_second_read_served_from_cache(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("alice", "1", 1)
        handler = ShowCartHandler(cart_repo, cache)

        first = handler.handle("alice")
        # Written without the cache, so nothing evicts the cached view
        AddToCartHandler(cart_repo, product_repo).handle("alice", "2", 1)

        assert (CART_SCOPE, "alice") in cache.entries
        assert handler.handle("alice") is first

    def test_write_invalidates_cached_view(self):
        cart_repo, product_repo, cache = _setup()
        add = AddToCartHandler(cart_repo, product_repo, cache)
        show = ShowCartHandler(cart_repo, cache)
        add.handle("alice", "1", 1)
        show.handle("alice")

        add.handle("alice", "2", 1)

        assert show.handle("alice").item_count == 2

    def test_missing_cart_shows_empty(self):
        cart_repo, _, _ = _setup()
        dto = ShowCartHandler(cart_repo).handle("nobody")
        assert dto.items == ()
        assert dto.total == "$0.00"


class TestValidateCart:

    def test_untouched_cart_not_modified(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("alice", "1", 2)

        _, modified = ValidateCartHandler(cart_repo, product_repo, cache).handle("alice")

        assert modified is False
        assert cache.evicted == []

    def test_clamps_to_available_stock(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("alice", "1", 5)
        product_repo.set_stock("1", 2)

        dto, modified = ValidateCartHandler(cart_repo, product_repo, cache).handle("alice")

        assert modified is True
        assert dto.items[0].quantity == 2
        assert cart_repo.get_by_user_id("alice").quantity_of("1") == 2

    def test_drops_out_of_stock_and_inactive_lines(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("alice", "1", 1)
        AddToCartHandler(cart_repo, product_repo).handle("alice", "2", 1)
        product_repo.set_stock("1", 0)
        gadget = product_repo.get_by_id("2")
        gadget.deactivate()
        product_repo.save(gadget)

        dto, modified = ValidateCartHandler(cart_repo, product_repo, cache).handle("alice")

        assert modified is True
        assert dto.items == ()

    def test_refreshes_prices(self):
        cart_repo, product_repo, cache = _setup()
        AddToCartHandler(cart_repo, product_repo).handle("alice", "2", 1)
        gadget = product_repo.get_by_id("2")
        gadget.update_price(Money.of("17.50"))
        product_repo.save(gadget)

        dto, modified = ValidateCartHandler(cart_repo, product_repo, cache).handle("alice")

        assert modified is True
        assert dto.items[0].unit_price == "$17.50"
        assert (CART_SCOPE, "alice") in cache.evicted
