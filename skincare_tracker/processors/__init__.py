"""
Batch processors for bulk product data.
"""

from .base import BaseProcessor, ProcessingStats
from .error_tracker import ErrorTracker
from .product_import import ProductImportProcessor

__all__ = ['BaseProcessor', 'ProcessingStats', 'ErrorTracker', 'ProductImportProcessor']
