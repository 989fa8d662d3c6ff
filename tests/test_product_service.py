"""
Tests for the product catalog service (ProductService over ProductRepo).
"""
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError

from app.data.models.product import ProductModel
from app.domain.errors import BackendUnavailable, InvalidArgument, NotFound, PersistenceError
from app.domain.schemas import CartProductIn
from app.repos.product_repo import ProductRepo
from app.services.product_service import ProductService


@pytest.fixture
def service(db):
    return ProductService(db)


def _count_products(db):
    return db.execute(select(func.count()).select_from(ProductModel)).scalar_one()


class TestProductCrud:

    def test_create_then_get_returns_same_product(self, service):
        created = service.create_product("Keyboard", Decimal("199.99"))

        fetched = service.get_product(created["id"])

        assert fetched == {"id": created["id"], "name": "Keyboard", "price": Decimal("199.99")}

    def test_create_rounds_price_to_cents(self, service):
        created = service.create_product("Coffee", Decimal("9.999"))

        fetched = service.get_product(created["id"])

        assert created["price"] == Decimal("10.00")
        assert fetched == created

    def test_get_missing_product_raises_not_found(self, service):
        with pytest.raises(NotFound):
            service.get_product(42)

    def test_update_changes_name_and_price(self, service):
        created = service.create_product("Mouse", Decimal("49.50"))

        updated = service.update_product(created["id"], "Gaming mouse", Decimal("79.00"))

        assert updated["name"] == "Gaming mouse"
        assert service.get_product(created["id"])["price"] == Decimal("79.00")

    def test_update_missing_product_raises_not_found(self, service):
        with pytest.raises(NotFound):
            service.update_product(7, "Ghost", Decimal("1.00"))

    def test_delete_removes_product(self, service):
        created = service.create_product("Monitor", Decimal("899.00"))

        service.delete_product(created["id"])

        with pytest.raises(NotFound):
            service.get_product(created["id"])

    def test_delete_missing_product_raises_not_found(self, service):
        with pytest.raises(NotFound):
            service.delete_product(99)


class TestListAndSearch:

    def test_list_paginates_by_ascending_id(self, service):
        for i in range(15):
            service.create_product(f"Product {i}", Decimal("1.00"))

        first_page = service.list_products(start=0, count=10)
        second_page = service.list_products(start=10, count=10)

        assert [p["id"] for p in first_page] == list(range(1, 11))
        assert [p["id"] for p in second_page] == list(range(11, 16))

    def test_list_defaults_to_first_ten(self, service):
        for i in range(12):
            service.create_product(f"Product {i}", Decimal("1.00"))

        assert len(service.list_products()) == 10

    def test_list_accepts_query_strings(self, service):
        for i in range(3):
            service.create_product(f"Product {i}", Decimal("1.00"))

        page = service.list_products(start="1", count="1")

        assert [p["id"] for p in page] == [2]

    @pytest.mark.parametrize("start,count", [("abc", None), (None, "-1"), ("1.5", "2")])
    def test_list_rejects_invalid_pagination(self, service, start, count):
        with pytest.raises(InvalidArgument):
            service.list_products(start=start, count=count)

    def test_search_matches_substring(self, service):
        service.create_product("Mechanical keyboard", Decimal("300.00"))
        service.create_product("Keyboard cover", Decimal("20.00"))
        service.create_product("Mouse", Decimal("49.50"))

        names = sorted(p["name"] for p in service.search_products("board"))

        assert names == ["Keyboard cover", "Mechanical keyboard"]

    def test_search_treats_wildcards_literally(self, service):
        service.create_product("Mouse", Decimal("49.50"))

        assert service.search_products("%") == []

    @pytest.mark.parametrize("query", ["", None])
    def test_search_requires_query(self, service, query):
        with pytest.raises(InvalidArgument):
            service.search_products(query)

    def test_get_by_empty_id_list_returns_empty(self, service):
        assert service.get_products_by_ids([]) == []

    def test_get_by_id_list_skips_unknown_ids(self, service):
        a = service.create_product("A", Decimal("1.00"))
        b = service.create_product("B", Decimal("2.00"))

        found = service.get_products_by_ids([a["id"], b["id"], 999])

        assert sorted(p["id"] for p in found) == [a["id"], b["id"]]


class TestInsertOrGet:

    def test_is_idempotent_on_name_and_price(self, db, service):
        item = CartProductIn(name="Coffee", price=Decimal("9.99"))

        first = service.insert_or_get([item])
        db.commit()
        second = service.insert_or_get([item])
        db.commit()

        assert first == second
        assert _count_products(db) == 1

    def test_reuses_existing_id(self, db, service):
        existing = service.create_product("Tea", Decimal("5.00"))

        ids = service.insert_or_get([CartProductIn(id=existing["id"], name="Renamed", price=Decimal("1.00"))])

        assert ids == [existing["id"]]
        assert _count_products(db) == 1

    def test_inserts_new_products_per_item(self, db, service):
        existing = service.create_product("Tea", Decimal("5.00"))

        ids = service.insert_or_get([
            CartProductIn(name="Tea", price=Decimal("5.00")),
            CartProductIn(name="Tea", price=Decimal("6.00")),
            CartProductIn(name="Milk", price=Decimal("2.50")),
        ])

        assert ids[0] == existing["id"]
        assert len(set(ids)) == 3
        assert _count_products(db) == 3

    def test_sub_cent_price_matches_stored_row(self, db, service):
        item = SimpleNamespace(id=None, name="Coffee", price=Decimal("9.999"))

        first = service.insert_or_get([item])
        db.commit()
        second = service.insert_or_get([item])
        db.commit()

        assert first == second
        assert _count_products(db) == 1

    def test_id_only_reuses_existing_product(self, db, service):
        existing = service.create_product("Tea", Decimal("5.00"))

        ids = service.insert_or_get([CartProductIn(id=existing["id"])])

        assert ids == [existing["id"]]
        assert _count_products(db) == 1

    def test_id_only_unknown_product_raises_not_found(self, db, service):
        with pytest.raises(NotFound):
            service.insert_or_get([CartProductIn(id=999)])

        assert _count_products(db) == 0


class TestDbErrorTranslation:

    def test_operational_error_becomes_backend_unavailable(self):
        session = MagicMock()
        session.get.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

        with pytest.raises(BackendUnavailable):
            ProductRepo(session).get_product(1)

    def test_commit_connection_failure_becomes_backend_unavailable(self, db, service, monkeypatch):
        def broken_commit():
            raise OperationalError("COMMIT", {}, Exception("server closed the connection"))

        monkeypatch.setattr(db, "commit", broken_commit)

        with pytest.raises(BackendUnavailable):
            service.create_product("Coffee", Decimal("9.99"))

        monkeypatch.undo()
        assert _count_products(db) == 0

    def test_commit_constraint_failure_becomes_persistence_error(self, db, service, monkeypatch):
        def broken_commit():
            raise IntegrityError("COMMIT", {}, Exception("deferred constraint violated"))

        monkeypatch.setattr(db, "commit", broken_commit)

        with pytest.raises(PersistenceError) as exc_info:
            service.create_product("Coffee", Decimal("9.99"))

        assert not isinstance(exc_info.value, BackendUnavailable)
