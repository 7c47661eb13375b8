"""Integration tests for the SQLAlchemy product store."""

import pytest

from ..db.session import SessionManager
from ..exceptions import ProductNotFoundError, ProductValidationError, StoreError
from ..store import ProductStore

def test_create_and_get(store, cleanser_fields):
    """Test a created product is returned with id and timestamps."""
    product = store.create(cleanser_fields)

    assert len(product.id) == 36
    assert product.created_at is not None
    assert product.modified_at is not None
    assert product.expiration_date == '2099-01-01'
    assert product.date_finished is None
    assert product.price == 15.99
    assert product.tags == ['daily', 'Hydrating']

    assert store.get(product.id) == product

def test_list_in_creation_order(store, cleanser_fields):
    """Test listing returns every product, oldest first."""
    assert store.list() == []

    first = store.create(cleanser_fields)
    second = store.create({**cleanser_fields, 'name': 'Foaming Cleanser'})

    assert [p.id for p in store.list()] == [first.id, second.id]

def test_create_invalid_stores_nothing(store, cleanser_fields):
    """Test validation failures are raised before anything is written."""
    with pytest.raises(ProductValidationError) as exc_info:
        store.create({**cleanser_fields, 'expiration_date': '2024-01-01'})

    assert exc_info.value.errors[0].field == 'expiration_date'
    assert store.list() == []

def test_create_rejects_unknown_fields(store, cleanser_fields):
    with pytest.raises(ProductValidationError, match="Field cannot be set"):
        store.create({**cleanser_fields, 'id': 'chosen-id'})

def test_update_partial(store, cleanser_fields):
    """Test only the given fields change."""
    product = store.create(cleanser_fields)
    updated = store.update(product.id, {'date_finished': '2025-03-01', 'notes': None})

    assert updated.date_finished == '2025-03-01'
    assert updated.notes is None
    assert updated.brand == 'CeraVe'
    assert updated.tags == ['daily', 'Hydrating']
    assert updated.modified_at >= product.modified_at
    assert updated.created_at == product.created_at

def test_update_validates_merged_fields(store, cleanser_fields):
    """Test a partial update cannot break the date rules."""
    product = store.create(cleanser_fields)

    with pytest.raises(ProductValidationError):
        store.update(product.id, {'date_opened': '2099-06-01'})
    with pytest.raises(ProductValidationError):
        store.update(product.id, {'tags': ['am', 'AM']})

    assert store.get(product.id).date_opened == '2025-01-01'

def test_missing_product(store):
    """Test unknown ids raise ProductNotFoundError."""
    with pytest.raises(ProductNotFoundError, match="Product not found: nope"):
        store.get('nope')
    with pytest.raises(ProductNotFoundError):
        store.update('nope', {'notes': 'x'})
    with pytest.raises(ProductNotFoundError):
        store.delete('nope')

def test_delete(store, cleanser_fields):
    product = store.create(cleanser_fields)
    other = store.create({**cleanser_fields, 'name': 'Foaming Cleanser'})

    store.delete(product.id)

    assert [p.id for p in store.list()] == [other.id]
    with pytest.raises(ProductNotFoundError):
        store.get(product.id)

def test_ping(store):
    store.ping()

def test_database_errors_become_store_errors(database_url):
    """Test a missing table surfaces as StoreError."""
    store = ProductStore(SessionManager(database_url))
    with pytest.raises(StoreError, match="Failed to list products"):
        store.list()

    store.create_schema()
    assert store.list() == []
