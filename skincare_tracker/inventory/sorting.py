"""Ordering helpers for product collections."""

from datetime import date
from typing import Any, Iterable, List, Tuple

from .dates import parse_date

def _expiration_key(product: Any) -> Tuple[bool, date]:
    expiration = parse_date(product.expiration_date)
    # Undated products share one key so their relative order is kept
    return (expiration is None, expiration or date.min)

def sort_by_expiration(products: Iterable[Any]) -> List[Any]:
    """Sort products by expiration date, earliest first.
    
    The sort is stable. Products without a usable expiration date go after
    every dated product, in their original relative order. The input is not
    modified.
    """
    return sorted(products, key=_expiration_key)

def sort_by_newest(products: Iterable[Any]) -> List[Any]:
    """Most recently opened first; products never opened go last."""
    dated = []
    undated = []
    for product in products:
        if parse_date(product.date_opened) is None:
            undated.append(product)
        else:
            dated.append(product)
    dated.sort(key=lambda p: parse_date(p.date_opened), reverse=True)
    return dated + undated

def sort_by_text(products: Iterable[Any], attribute: str) -> List[Any]:
    """Case-insensitive alphabetical sort on ``name`` or ``brand``."""
    return sorted(products, key=lambda p: (getattr(p, attribute) or '').casefold())
