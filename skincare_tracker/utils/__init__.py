"""Utility functions and helpers."""

from .shelf_life import SHELF_LIFE_SUGGESTIONS, shelf_life_hint, suggest_expiration
from .uuid import generate_uuid

__all__ = [
    'SHELF_LIFE_SUGGESTIONS',
    'shelf_life_hint',
    'suggest_expiration',
    'generate_uuid'
]
