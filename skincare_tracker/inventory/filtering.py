"""Filter and search composition for the product list.

Every criterion is an independent predicate; a product is kept only when
all of them accept it. Sorting runs last.
"""

import enum
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Optional

from .dates import Instant, to_instant
from .sorting import sort_by_expiration, sort_by_newest, sort_by_text
from .status import ProductStatus, get_product_status

logger = logging.getLogger(__name__)

ALL = 'all'

Predicate = Callable[[Any], bool]

class SortKey(str, enum.Enum):
    """Orderings offered by the list view."""
    DEFAULT = 'default'
    NAME = 'name'
    BRAND = 'brand'
    EXPIRATION = 'expiration'
    NEWEST = 'newest'

STATUS_CHOICES = [ALL] + [status.value for status in ProductStatus]

@dataclass(frozen=True)
class FilterCriteria:
    """Filter settings for a product collection.
    
    ``type``, ``brand`` and ``status`` accept ``'all'`` to disable that
    filter. ``status`` and ``sort_by`` are checked on construction.
    """
    search_term: str = ''
    type: str = ALL
    brand: str = ALL
    status: str = ALL
    sort_by: str = SortKey.DEFAULT.value

    def __post_init__(self):
        status = self.status.value if isinstance(self.status, ProductStatus) else self.status
        if status not in STATUS_CHOICES:
            raise ValueError(f"status must be one of: {', '.join(STATUS_CHOICES)}")
        # Normalizes enum members to plain strings
        object.__setattr__(self, 'status', status)
        object.__setattr__(self, 'sort_by', SortKey(self.sort_by).value)

    def update(self, **changes) -> 'FilterCriteria':
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    @property
    def is_default(self) -> bool:
        return self == FilterCriteria()

def _matches_search(term: str) -> Predicate:
    needle = term.strip().casefold()

    def predicate(product: Any) -> bool:
        return needle in (product.name or '').casefold() or needle in (product.brand or '').casefold()
    return predicate

def _matches_field(attribute: str, value: str) -> Predicate:
    def predicate(product: Any) -> bool:
        return getattr(product, attribute) == value
    return predicate

def _matches_status(status: str, now: Instant) -> Predicate:
    if status == ProductStatus.FINISHED.value:
        # Finished is decided by date_finished alone
        return lambda product: get_product_status(product, now) == ProductStatus.FINISHED

    wanted = ProductStatus(status)

    def predicate(product: Any) -> bool:
        current = get_product_status(product, now)
        return current != ProductStatus.FINISHED and current == wanted
    return predicate

def build_predicates(criteria: FilterCriteria, now: Instant = None) -> List[Predicate]:
    """Translate criteria into the list of active predicates."""
    predicates = []
    if criteria.search_term and criteria.search_term.strip():
        predicates.append(_matches_search(criteria.search_term))
    if criteria.type != ALL:
        predicates.append(_matches_field('type', criteria.type))
    if criteria.brand != ALL:
        predicates.append(_matches_field('brand', criteria.brand))
    if criteria.status != ALL:
        predicates.append(_matches_status(criteria.status, now))
    return predicates

def sort_products(products: Iterable[Any], sort_by: str) -> List[Any]:
    """Apply one of the ``SortKey`` orderings."""
    key = SortKey(sort_by)
    if key == SortKey.NAME:
        return sort_by_text(products, 'name')
    if key == SortKey.BRAND:
        return sort_by_text(products, 'brand')
    if key == SortKey.EXPIRATION:
        return sort_by_expiration(products)
    if key == SortKey.NEWEST:
        return sort_by_newest(products)
    return list(products)

def filter_products(
    products: Iterable[Any],
    criteria: Optional[FilterCriteria] = None,
    now: Instant = None
) -> List[Any]:
    """Filter and sort a product collection.
    
    Args:
        products: Products to filter
        criteria: Filter settings, defaults to no filtering
        now: Reference instant for status matching
        
    Returns:
        New list of matching products in the requested order
    """
    criteria = criteria or FilterCriteria()
    # Pin the instant so every product is judged against the same moment
    instant = to_instant(now)
    predicates = build_predicates(criteria, instant)
    
    matched = [p for p in products if all(predicate(p) for predicate in predicates)]
    logger.debug(f"{len(matched)} products matched {len(predicates)} filters")
    return sort_products(matched, criteria.sort_by)

def filter_options(products: Iterable[Any]) -> Dict[str, List[str]]:
    """Distinct types and brands present in a collection, sorted."""
    products = list(products)
    return {
        'types': sorted({p.type for p in products if p.type}),
        'brands': sorted({p.brand for p in products if p.brand}, key=str.casefold)
    }
