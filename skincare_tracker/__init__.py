"""Skincare product tracker package."""

from .forms import ProductForm
from .inventory import (
    FilterCriteria,
    Product,
    ProductStatus,
    ProductType,
    classify,
    filter_products,
    sort_by_expiration,
    summarize,
)
from .store import ProductStore

__all__ = [
    'ProductForm',
    'FilterCriteria',
    'Product',
    'ProductStatus',
    'ProductType',
    'classify',
    'filter_products',
    'sort_by_expiration',
    'summarize',
    'ProductStore'
]
