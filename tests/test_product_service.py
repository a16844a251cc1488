"""Tests for the product store."""
import pytest

from inventory.models.product import Product
from inventory.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from inventory.services.product_service import ProductService, ProductNotFoundError


def test_create_assigns_id_and_timestamp(db_session):
    service = ProductService(db_session)

    product = service.create(ProductCreate(name="Desk", price=120.0, stock=2))

    assert isinstance(product, ProductResponse)
    assert product.id == 1
    assert product.created_at is not None
    assert (product.name, product.price, product.stock) == ("Desk", 120.0, 2)


def test_get_by_id_not_found(db_session):
    service = ProductService(db_session)

    with pytest.raises(ProductNotFoundError) as exc_info:
        service.get_by_id(42)

    assert exc_info.value.product_id == 42


def test_list_all_orders_by_id_desc(db_session):
    service = ProductService(db_session)
    for name in ("a", "b", "c"):
        service.create(ProductCreate(name=name, price=1, stock=1))

    products = service.list_all()

    assert isinstance(products, list)
    assert [p.name for p in products] == ["c", "b", "a"]


def test_update_merges_present_fields_only(db_session):
    service = ProductService(db_session)
    original = service.create(ProductCreate(name="Chair", price=40.0, stock=8))

    updated = service.update(original.id, ProductUpdate(price=35.5))

    assert updated.price == 35.5
    assert updated.name == "Chair"
    assert updated.stock == 8
    assert updated.id == original.id
    assert updated.created_at == original.created_at


def test_update_not_found(db_session):
    service = ProductService(db_session)

    with pytest.raises(ProductNotFoundError):
        service.update(7, ProductUpdate(stock=1))


def test_returned_records_are_copies(db_session):
    service = ProductService(db_session)
    product = service.create(ProductCreate(name="Shelf", price=10.0, stock=1))

    product.stock = 999

    assert service.get_by_id(product.id).stock == 1


def test_delete_removes_row(db_session):
    service = ProductService(db_session)
    product = service.create(ProductCreate(name="Bin", price=2.0, stock=4))

    service.delete(product.id)

    assert db_session.query(Product).count() == 0
    with pytest.raises(ProductNotFoundError):
        service.delete(product.id)


def test_ids_strictly_increase_after_delete(db_session):
    service = ProductService(db_session)
    first = service.create(ProductCreate(name="one", price=1, stock=1))
    service.delete(first.id)

    second = service.create(ProductCreate(name="two", price=1, stock=1))

    assert second.id > first.id


def test_out_of_range_id_not_found(db_session):
    service = ProductService(db_session)
    huge = 2**80

    with pytest.raises(ProductNotFoundError):
        service.get_by_id(huge)
    with pytest.raises(ProductNotFoundError):
        service.update(-huge, ProductUpdate(stock=1))
    with pytest.raises(ProductNotFoundError):
        service.delete(huge)
