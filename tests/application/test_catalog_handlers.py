"""Integration tests for the catalog and inventory admin use cases."""

import pytest

from storefront.application.add_product import AddProductHandler
from storefront.application.restock import RestockHandler
from storefront.application.show_inventory import ShowInventoryHandler
from storefront.application.update_product import DeactivateProductHandler, UpdateProductHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from tests.fakes import FakeProductRepository


class TestAddProduct:

    def test_adds_with_sequential_ids(self):
        repo = FakeProductRepository()
        first = AddProductHandler(repo).handle("Widget", "15.00", stock=5)
        second = AddProductHandler(repo).handle("Gadget", "25.00")
        assert (first.id, second.id) == ("1", "2")
        assert first.stock == 5
        assert first.price == "$15.00"

    def test_duplicate_active_name_rejected(self):
        repo = FakeProductRepository()
        AddProductHandler(repo).handle("Widget", "15.00")
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(repo).handle("widget", "10.00")

    def test_infinite_price_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            AddProductHandler(FakeProductRepository()).handle("Widget", "Infinity")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError):
            AddProductHandler(FakeProductRepository()).handle("Widget", "0")


class TestUpdateProduct:

    def test_price_update_keeps_stock(self):
        repo = FakeProductRepository()
        AddProductHandler(repo).handle("Widget", "15.00", stock=7)

        dto = UpdateProductHandler(repo).handle("1", new_price="18.00")

        assert dto.price == "$18.00"
        assert repo.stock("1") == 7

    def test_set_and_clear_discount(self):
        repo = FakeProductRepository()
        AddProductHandler(repo).handle("Widget", "15.00")

        assert UpdateProductHandler(repo).handle("1", discount_price="12.00").discount_price == "$12.00"
        assert UpdateProductHandler(repo).handle("1", clear_discount=True).discount_price is None

    def test_price_below_old_discount_with_new_lower_discount(self):
        repo = FakeProductRepository()
        AddProductHandler(repo).handle("Widget", "15.00", discount_price="9.00")

        dto = UpdateProductHandler(repo).handle("1", new_price="8.00", discount_price="5.00")

        assert (dto.price, dto.discount_price) == ("$8.00", "$5.00")

    def test_price_below_kept_discount_rejected(self):
        repo = FakeProductRepository()
        AddProductHandler(repo).handle("Widget", "15.00", discount_price="9.00")
        with pytest.raises(ValidationError, match="lower than the price"):
            UpdateProductHandler(repo).handle("1", new_price="8.00")

    def test_nothing_to_update(self):
        with pytest.raises(ValidationError, match="Nothing to update"):
            UpdateProductHandler(FakeProductRepository()).handle("1")

    def test_deactivate_unknown(self):
        with pytest.raises(EntityNotFoundError):
            DeactivateProductHandler(FakeProductRepository()).handle("9")


class TestInventoryAdmin:

    def test_restock_and_low_stock_report(self):
        repo = FakeProductRepository()
        AddProductHandler(repo).handle("Widget", "15.00", stock=2)
        AddProductHandler(repo).handle("Gadget", "25.00", stock=40)

        assert [line.product_name for line in ShowInventoryHandler(repo).handle(5)] == ["Widget"]

        assert RestockHandler(repo).handle("1", 10) == 12
        assert ShowInventoryHandler(repo).handle(5) == []
        assert len(ShowInventoryHandler(repo).handle()) == 2
