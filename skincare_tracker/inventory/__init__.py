"""
Derived views over product collections.
Status classification, expiration sorting, filtering and dashboard summaries.
"""

from .product import Product, ProductType
from .status import ProductStatus, UrgencyTier, StatusInfo, classify, get_product_status
from .sorting import sort_by_expiration
from .filtering import FilterCriteria, SortKey, filter_products, filter_options
from .dashboard import DashboardSummary, summarize

__all__ = [
    'Product',
    'ProductType',
    'ProductStatus',
    'UrgencyTier',
    'StatusInfo',
    'classify',
    'get_product_status',
    'sort_by_expiration',
    'FilterCriteria',
    'SortKey',
    'filter_products',
    'filter_options',
    'DashboardSummary',
    'summarize'
]
