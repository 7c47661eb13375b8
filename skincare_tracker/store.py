"""Product store client backed by SQLAlchemy."""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .db.models import Product as ProductRow
from .db.session import SessionManager
from .exceptions import FieldError, ProductNotFoundError, ProductValidationError, StoreError
from .forms import validate_fields
from .inventory.dates import parse_date
from .inventory.product import Product
from .utils import generate_uuid

EDITABLE_FIELDS = (
    'brand',
    'name',
    'type',
    'date_opened',
    'date_finished',
    'expiration_date',
    'price',
    'notes',
    'tags',
)

DATE_COLUMNS = ('date_opened', 'date_finished', 'expiration_date')

def to_record(row: ProductRow) -> Product:
    """Convert a database row into a detached product snapshot."""
    return Product(
        id=row.id,
        brand=row.brand,
        name=row.name,
        type=row.type,
        date_opened=row.date_opened.isoformat() if row.date_opened else None,
        date_finished=row.date_finished.isoformat() if row.date_finished else None,
        expiration_date=row.expiration_date.isoformat() if row.expiration_date else None,
        price=float(row.price) if row.price is not None else None,
        notes=row.notes,
        tags=list(row.tags or []),
        created_at=row.created_at,
        modified_at=row.modified_at
    )

def apply_fields(row: ProductRow, fields: Dict[str, Any]) -> None:
    """Copy product fields onto a row, converting them to column types."""
    for name, value in fields.items():
        if name in DATE_COLUMNS:
            value = parse_date(value)
        elif name == 'tags':
            value = [str(tag).strip() for tag in (value or [])]
        elif name in ('brand', 'name', 'type') and value is not None:
            value = str(getattr(value, 'value', value)).strip()
        elif name == 'price' and value is not None:
            value = float(value)
        setattr(row, name, value)

def build_row(fields: Dict[str, Any]) -> ProductRow:
    """New row with a fresh id and timestamps."""
    now = datetime.utcnow()
    row = ProductRow(id=generate_uuid(), tags=[], created_at=now, modified_at=now)
    apply_fields(row, fields)
    return row

def has_duplicate(session: Session, brand: str, name: str, expiration_date: Any) -> bool:
    """True when a product with this brand, name and expiration date exists."""
    return session.query(ProductRow).filter(
        ProductRow.brand == brand,
        ProductRow.name == name,
        ProductRow.expiration_date == parse_date(expiration_date)
    ).first() is not None

def _current_fields(row: ProductRow) -> Dict[str, Any]:
    return {name: getattr(row, name) for name in EDITABLE_FIELDS}

class ProductStore:
    """Create, read, update and delete products.

    The session manager is passed in by the caller; the store holds no
    other state, and every call runs in its own session.
    """

    def __init__(self, session_manager: SessionManager):
        self.session_manager = session_manager
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        try:
            with self.session_manager as session:
                yield session
        except SQLAlchemyError as e:
            self.logger.error(f"Error during {operation}: {str(e)}")
            raise StoreError(f"Failed to {operation}: {str(e)}") from e

    def _check_fields(self, fields: Dict[str, Any]) -> None:
        unknown = sorted(set(fields) - set(EDITABLE_FIELDS))
        if unknown:
            raise ProductValidationError(
                [FieldError(name, "Field cannot be set") for name in unknown]
            )

    def create_schema(self) -> None:
        """Create the products table if it does not exist."""
        try:
            self.session_manager.create_all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to create schema: {str(e)}") from e

    def ping(self) -> None:
        """Run a trivial query to check connectivity."""
        with self._session("connect") as session:
            session.execute(text("SELECT 1")).scalar()

    def list(self) -> List[Product]:
        """All products, oldest first."""
        with self._session("list products") as session:
            rows = session.query(ProductRow).order_by(ProductRow.created_at, ProductRow.id).all()
            products = [to_record(row) for row in rows]
        self.logger.debug(f"Loaded {len(products)} products")
        return products

    def get(self, product_id: str) -> Product:
        with self._session("load product") as session:
            row = session.get(ProductRow, product_id)
            if row is None:
                raise ProductNotFoundError(product_id)
            return to_record(row)

    def create(self, fields: Dict[str, Any]) -> Product:
        """Create a product.

        Args:
            fields: Product fields; ``id`` and timestamps are assigned here

        Returns:
            The stored product

        Raises:
            ProductValidationError: If the fields break a product rule
            StoreError: If the database write fails
        """
        self._check_fields(fields)
        errors = validate_fields(fields)
        if errors:
            raise ProductValidationError(errors)

        row = build_row(fields)

        with self._session("create product") as session:
            session.add(row)
            session.flush()
            product = to_record(row)

        self.logger.info(f"Created product {product.id} ({product.display_name})")
        return product

    def update(self, product_id: str, fields: Dict[str, Any]) -> Product:
        """Update some fields of a product.

        The merged result is validated as a whole, so a partial update
        cannot break the date ordering rules.

        Raises:
            ProductNotFoundError: If no product has this id
            ProductValidationError: If the merged fields break a product rule
            StoreError: If the database write fails
        """
        self._check_fields(fields)

        with self._session("update product") as session:
            row = session.get(ProductRow, product_id)
            if row is None:
                raise ProductNotFoundError(product_id)

            merged = {**_current_fields(row), **fields}
            errors = validate_fields(merged)
            if errors:
                raise ProductValidationError(errors)

            apply_fields(row, fields)
            row.modified_at = datetime.utcnow()
            session.flush()
            product = to_record(row)

        self.logger.info(f"Updated product {product_id}: {', '.join(sorted(fields)) or 'no changes'}")
        return product

    def delete(self, product_id: str) -> None:
        """Delete a product permanently."""
        with self._session("delete product") as session:
            row = session.get(ProductRow, product_id)
            if row is None:
                raise ProductNotFoundError(product_id)
            session.delete(row)

        self.logger.info(f"Deleted product {product_id}")

