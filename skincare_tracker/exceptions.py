"""Exceptions raised by the store client and the form layer."""

from dataclasses import dataclass
from typing import List, Optional

@dataclass(frozen=True)
class FieldError:
    """A validation problem tied to one product field."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

class TrackerError(Exception):
    """Base class for skincare tracker errors."""

class StoreError(TrackerError):
    """The product store could not complete an operation."""

class ProductNotFoundError(StoreError):
    """No product exists with the requested id."""
    
    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id

class ProductValidationError(TrackerError, ValueError):
    """Product fields break one or more validation rules."""
    
    def __init__(self, errors: List[FieldError], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message or "; ".join(str(error) for error in self.errors))

class TagError(TrackerError, ValueError):
    """A tag could not be added."""
