"""Immutable state for the product list view.

Each reducer takes the current state and returns a new one; nothing here
talks to the store. Callers fetch or delete through the store and feed the
outcome back in.
"""

from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Tuple

from .dates import Instant, to_instant
from .filtering import FilterCriteria, filter_products
from .status import is_finished_or_expired

@dataclass(frozen=True)
class ProductListState:
    products: Tuple[Any, ...] = ()
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    loading: bool = True
    error: Optional[str] = None

def start_loading(state: ProductListState) -> ProductListState:
    return replace(state, loading=True, error=None)

def products_loaded(state: ProductListState, products: List[Any]) -> ProductListState:
    return replace(state, products=tuple(products), loading=False, error=None)

def load_failed(state: ProductListState, message: str = "Failed to load products. Please try again.") -> ProductListState:
    return replace(state, loading=False, error=message)

def product_deleted(state: ProductListState, product_id: str) -> ProductListState:
    """Drop a product the store has confirmed as deleted."""
    return replace(state, products=tuple(p for p in state.products if p.id != product_id))

def criteria_changed(state: ProductListState, **changes) -> ProductListState:
    """Change one or more filter settings, e.g. ``criteria_changed(state, brand='Cosrx')``."""
    return replace(state, criteria=state.criteria.update(**changes))

def visible_products(state: ProductListState, now: Instant = None) -> List[Any]:
    """Products that pass the current filters, in display order."""
    return filter_products(state.products, state.criteria, now)

def active_products(state: ProductListState, now: Instant = None) -> List[Any]:
    """Visible products that are neither finished nor expired."""
    instant = to_instant(now)
    return [p for p in visible_products(state, instant) if not is_finished_or_expired(p, instant)]

def finished_products(state: ProductListState, now: Instant = None) -> List[Any]:
    """Visible products that are finished or expired."""
    instant = to_instant(now)
    return [p for p in visible_products(state, instant) if is_finished_or_expired(p, instant)]
