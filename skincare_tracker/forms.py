"""Form layer for adding and editing products.

``ProductForm`` is an immutable draft. Every change returns a new form, so a
caller can keep the previous draft around (e.g. to cancel an edit). In add
mode, picking an opening date or a product type pre-fills the expiration
date from the shelf-life suggestions.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .exceptions import FieldError, ProductValidationError, TagError
from .inventory.dates import DateLike, parse_date, to_iso
from .inventory.product import Product, ProductType
from .utils.shelf_life import shelf_life_hint, suggest_expiration

logger = logging.getLogger(__name__)

ADD = 'add'
EDIT = 'edit'

DATE_FIELDS = {
    'date_opened': 'Date opened',
    'date_finished': 'Date finished',
    'expiration_date': 'Expiration date',
}

def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())

def add_tag(tags: Iterable[str], new_tag: str) -> List[str]:
    """Append a tag, rejecting blanks and case-insensitive duplicates.

    Args:
        tags: Current tags
        new_tag: Tag to add; surrounding whitespace is dropped

    Returns:
        New list of tags

    Raises:
        TagError: If the tag is empty or already present
    """
    current = list(tags or [])
    trimmed = (new_tag or '').strip()
    if not trimmed:
        raise TagError("Please enter a tag")
    if any(tag.casefold() == trimmed.casefold() for tag in current):
        raise TagError("This tag already exists")
    return current + [trimmed]

def remove_tag(tags: Iterable[str], tag_to_remove: str) -> List[str]:
    """Remove a tag by exact value."""
    return [tag for tag in (tags or []) if tag != tag_to_remove]

def validate_fields(fields: Dict[str, Any]) -> List[FieldError]:
    """Check product fields against the product rules.

    Args:
        fields: Product fields keyed by attribute name

    Returns:
        List of field errors, empty when the fields are valid
    """
    errors = []

    if _blank(fields.get('brand')):
        errors.append(FieldError('brand', "Brand is required."))
    if _blank(fields.get('name')):
        errors.append(FieldError('name', "Product name is required."))

    product_type = fields.get('type')
    if _blank(product_type):
        errors.append(FieldError('type', "Product type is required."))
    elif str(getattr(product_type, 'value', product_type)) not in ProductType.values():
        errors.append(FieldError('type', f"Product type must be one of: {', '.join(ProductType.values())}"))

    price = fields.get('price')
    if price is not None:
        try:
            if float(price) < 0:
                errors.append(FieldError('price', "Price must be positive."))
        except (TypeError, ValueError):
            errors.append(FieldError('price', "Price must be a number."))

    dates = {}
    for name, label in DATE_FIELDS.items():
        raw = fields.get(name)
        parsed = parse_date(raw)
        if not _blank(raw) and parsed is None:
            errors.append(FieldError(name, f"{label} is not a valid date (expected YYYY-MM-DD)."))
        dates[name] = parsed

    if _blank(fields.get('expiration_date')):
        errors.append(FieldError('expiration_date', "Expiration date is required"))

    opened = dates['date_opened']
    if opened and dates['expiration_date'] and dates['expiration_date'] < opened:
        errors.append(FieldError('expiration_date', "Expiration date cannot be earlier than the date opened"))
    if opened and dates['date_finished'] and dates['date_finished'] < opened:
        errors.append(FieldError('date_finished', "Date finished cannot be earlier than the date opened"))

    seen = set()
    for tag in fields.get('tags') or []:
        key = str(tag).strip().casefold()
        if not key:
            errors.append(FieldError('tags', "Tags cannot be empty"))
        elif key in seen:
            errors.append(FieldError('tags', f"Duplicate tag: {tag}"))
        seen.add(key)

    return errors

@dataclass(frozen=True)
class ProductForm:
    """Draft values of the add/edit product form."""
    mode: str = ADD
    brand: str = ''
    name: str = ''
    type: str = ''
    date_opened: DateLike = None
    date_finished: DateLike = None
    expiration_date: DateLike = None
    price: Optional[float] = None
    notes: str = ''
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.mode not in (ADD, EDIT):
            raise ValueError(f"mode must be '{ADD}' or '{EDIT}'")
        object.__setattr__(self, 'tags', tuple(self.tags or ()))

    @classmethod
    def from_product(cls, product: Product) -> 'ProductForm':
        """Seed an edit form from a stored product."""
        return cls(
            mode=EDIT,
            brand=product.brand or '',
            name=product.name or '',
            type=product.type or '',
            date_opened=to_iso(product.date_opened),
            date_finished=to_iso(product.date_finished),
            expiration_date=to_iso(product.expiration_date),
            price=product.price,
            notes=product.notes or '',
            tags=tuple(product.tags or ())
        )

    def with_changes(self, **changes) -> 'ProductForm':
        """Return a form with the given fields changed.

        In add mode a new opening date or type recomputes the expiration
        date when the type has a shelf-life suggestion, unless the caller
        sets ``expiration_date`` in the same change.
        """
        updated = replace(self, **changes)
        if (
            updated.mode == ADD
            and 'expiration_date' not in changes
            and ('date_opened' in changes or 'type' in changes)
        ):
            suggested = suggest_expiration(updated.date_opened, updated.type)
            if suggested is not None:
                logger.debug(f"Pre-filling expiration date with {suggested}")
                updated = replace(updated, expiration_date=suggested.isoformat())
        return updated

    def add_tag(self, tag: str) -> 'ProductForm':
        return replace(self, tags=tuple(add_tag(self.tags, tag)))

    def remove_tag(self, tag: str) -> 'ProductForm':
        return replace(self, tags=tuple(remove_tag(self.tags, tag)))

    @property
    def shelf_life_hint(self) -> str:
        return shelf_life_hint(self.type)

    def _fields(self) -> Dict[str, Any]:
        return {
            'brand': self.brand,
            'name': self.name,
            'type': self.type,
            'date_opened': self.date_opened,
            'date_finished': self.date_finished,
            'expiration_date': self.expiration_date,
            'price': self.price,
            'notes': self.notes,
            'tags': list(self.tags),
        }

    def validate(self) -> List[FieldError]:
        return validate_fields(self._fields())

    def to_payload(self) -> Dict[str, Any]:
        """Convert the form into fields for the product store.

        Raises:
            ProductValidationError: If the form does not validate
        """
        errors = self.validate()
        if errors:
            raise ProductValidationError(errors)

        return {
            'brand': self.brand.strip(),
            'name': self.name.strip(),
            'type': str(getattr(self.type, 'value', self.type)),
            'date_opened': to_iso(self.date_opened),
            'date_finished': to_iso(self.date_finished),
            'expiration_date': to_iso(self.expiration_date),
            'price': float(self.price) if self.price is not None else None,
            'notes': self.notes.strip() if self.notes and self.notes.strip() else None,
            'tags': [tag.strip() for tag in self.tags],
        }
