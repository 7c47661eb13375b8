"""Shelf-life suggestions per product type.

Months a product typically keeps after opening. Only used to pre-fill the
expiration date on the add form; nothing enforces them.
"""

import logging
from datetime import date
from typing import Optional

import pandas as pd

from ..inventory.dates import DateLike, parse_date
from ..inventory.product import ProductType

logger = logging.getLogger(__name__)

SHELF_LIFE_SUGGESTIONS = {
    ProductType.CLEANSER.value: 12,
    ProductType.TONER.value: 12,
    ProductType.ESSENCE.value: 12,
    ProductType.SERUM.value: 6,
    ProductType.MOISTURIZER.value: 12,
    ProductType.SUNSCREEN.value: 12,
    ProductType.EXFOLIANT.value: 12,
    ProductType.MASK.value: 12,
    ProductType.EYE_CREAM.value: 6,
    ProductType.FACE_OIL.value: 6,
    ProductType.SPOT_TREATMENT.value: 6,
    ProductType.LIP_CARE.value: 12,
}

def suggested_months(product_type: Optional[str]) -> Optional[int]:
    """Suggested months after opening, or None for unknown types."""
    if not product_type:
        return None
    return SHELF_LIFE_SUGGESTIONS.get(str(getattr(product_type, 'value', product_type)))

def shelf_life_hint(product_type: Optional[str]) -> str:
    """Help text shown under the type selector, empty when there is none."""
    months = suggested_months(product_type)
    if not months:
        return ""
    return f"Suggested shelf life: {months} months after opening"

def suggest_expiration(date_opened: DateLike, product_type: Optional[str]) -> Optional[date]:
    """Expiration date suggested from the opening date and product type.
    
    Adds the suggested number of calendar months. Days that do not exist in
    the target month are clamped to its last day (Aug 31 + 6 months is
    Feb 28 or 29).
    
    Returns:
        Suggested date, or None when either input is missing or unknown
    """
    opened = parse_date(date_opened)
    months = suggested_months(product_type)
    if opened is None or not months:
        return None
    
    suggested = (pd.Timestamp(opened) + pd.DateOffset(months=months)).date()
    logger.debug(f"Suggested expiration {suggested} for {product_type} opened {opened}")
    return suggested
