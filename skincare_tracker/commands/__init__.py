"""
Command implementations for the skincare tracker CLI.
Each submodule provides specific command functionality.
"""

from .dashboard import DashboardCommand
from .products import (
    ListProductsCommand,
    ShowProductCommand,
    AddProductCommand,
    EditProductCommand,
    DeleteProductCommand
)
from .products.import_products import ImportProductsCommand
from .utils import TestConnectionCommand, InitDbCommand, ShelfLifeCommand

__all__ = [
    'DashboardCommand',
    'ListProductsCommand',
    'ShowProductCommand',
    'AddProductCommand',
    'EditProductCommand',
    'DeleteProductCommand',
    'ImportProductsCommand',
    'TestConnectionCommand',
    'InitDbCommand',
    'ShelfLifeCommand'
]
