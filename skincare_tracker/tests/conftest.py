"""Shared test fixtures and utilities."""

import csv
from datetime import datetime, timezone
from pathlib import Path

import pytest

from ..db.session import SessionManager
from ..inventory.product import Product
from ..store import ProductStore

# Reference instant used across tests: midnight UTC on Jan 1st 2025
NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)

def make_product(id='p', brand='Brand', name='Product', type='Serum', **fields) -> Product:
    """Build an in-memory product with sensible defaults."""
    return Product(id=id, brand=brand, name=name, type=type, **fields)

@pytest.fixture
def sample_products():
    """A small collection covering every status relative to NOW."""
    return [
        make_product(
            id='p1', brand='CeraVe', name='Hydrating Cleanser', type='Cleanser',
            date_opened='2024-12-01', expiration_date='2025-06-01', tags=['daily']
        ),
        make_product(
            id='p2', brand='The Ordinary', name='Niacinamide 10% + Zinc 1%', type='Serum',
            date_opened='2024-07-20', expiration_date='2025-01-20'
        ),
        make_product(
            id='p3', brand='COSRX', name='Snail Mucin Essence', type='Essence',
            expiration_date='2024-12-01'
        ),
        make_product(
            id='p4', brand='La Roche-Posay', name='Anthelios SPF 50', type='Sunscreen',
            date_opened='2024-06-01', date_finished='2024-11-01', expiration_date='2025-03-01'
        ),
        make_product(
            id='p5', brand='CeraVe', name='Moisturizing Cream', type='Moisturizer',
            date_opened='2024-10-01'
        ),
    ]

def ids(products):
    return [p.id for p in products]

@pytest.fixture
def database_url(tmp_path):
    """SQLite database file private to the test."""
    return f"sqlite:///{tmp_path / 'tracker.db'}"

@pytest.fixture
def session_manager(database_url):
    """Session manager with the schema created."""
    manager = SessionManager(database_url)
    manager.create_all()
    yield manager
    manager.engine.dispose()

@pytest.fixture
def store(session_manager):
    return ProductStore(session_manager)

@pytest.fixture
def cleanser_fields():
    return {
        'brand': 'CeraVe',
        'name': 'Hydrating Cleanser',
        'type': 'Cleanser',
        'date_opened': '2025-01-01',
        'expiration_date': '2099-01-01',
        'price': 15.99,
        'notes': 'Gentle',
        'tags': ['daily', 'Hydrating'],
    }

def create_test_csv(path: Path, rows, fieldnames=None) -> Path:
    """Write product rows to a CSV file."""
    fieldnames = fieldnames or [
        'Brand',
        'Name',
        'Type',
        'Date Opened',
        'Date Finished',
        'Expiration Date',
        'Price',
        'Notes',
        'Tags'
    ]
    with open(path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path
