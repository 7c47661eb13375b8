"""SQLAlchemy models for database tables."""

from .base import Base
from .product import Product

__all__ = [
    'Base',
    'Product'
]
