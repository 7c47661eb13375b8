"""Lifecycle status classification for products.

A product's status is derived from three optional dates, first match wins:

1. ``date_finished`` set -> finished
2. expiration midnight before ``now`` -> expired
3. expiration within 30 days (ceil rounding) -> expiring-soon
4. anything else -> active

Expiring-soon products carry an urgency tier (<= 7, <= 14, <= 30 days)
that only drives the label and badge styling.
"""

import enum
from dataclasses import dataclass
from typing import Any, Optional

from .dates import Instant, days_until, parse_date, to_instant

EXPIRING_SOON_DAYS = 30
CRITICAL_DAYS = 7
WARNING_DAYS = 14

class ProductStatus(str, enum.Enum):
    """Derived lifecycle status."""
    ACTIVE = 'active'
    EXPIRING_SOON = 'expiring-soon'
    EXPIRED = 'expired'
    FINISHED = 'finished'

class UrgencyTier(str, enum.Enum):
    """How close a product is to its expiration date."""
    NONE = 'none'
    NOTICE = 'notice'
    WARNING = 'warning'
    CRITICAL = 'critical'
    EXPIRED = 'expired'

# Badge variants understood by the presentation layer
VARIANTS = {
    UrgencyTier.NONE: 'secondary',
    UrgencyTier.NOTICE: 'secondary',
    UrgencyTier.WARNING: 'default',
    UrgencyTier.CRITICAL: 'destructive',
    UrgencyTier.EXPIRED: 'destructive',
}

# Terminal colors used by the CLI for each tier
COLORS = {
    UrgencyTier.NONE: None,
    UrgencyTier.NOTICE: 'yellow',
    UrgencyTier.WARNING: 'bright_red',
    UrgencyTier.CRITICAL: 'red',
    UrgencyTier.EXPIRED: 'red',
}

@dataclass(frozen=True)
class StatusInfo:
    """Status with its display label and styling hints."""
    status: ProductStatus
    label: str
    urgency: UrgencyTier = UrgencyTier.NONE
    variant: str = 'outline'
    days_left: Optional[int] = None

    @property
    def color(self) -> Optional[str]:
        if self.status == ProductStatus.FINISHED:
            return 'blue'
        if self.status == ProductStatus.ACTIVE:
            return 'green'
        return COLORS[self.urgency]

def _tier_for_days(days: int) -> UrgencyTier:
    if days <= CRITICAL_DAYS:
        return UrgencyTier.CRITICAL
    if days <= WARNING_DAYS:
        return UrgencyTier.WARNING
    if days <= EXPIRING_SOON_DAYS:
        return UrgencyTier.NOTICE
    return UrgencyTier.NONE

def _expires_label(days: int) -> str:
    return f"Expires in {days} day{'' if days == 1 else 's'}"

def classify(product: Any, now: Instant = None) -> StatusInfo:
    """Classify a product's lifecycle status.

    Args:
        product: Anything with ``date_finished`` and ``expiration_date``
            attributes (ISO strings, dates or None)
        now: Reference instant, defaults to the current time

    Returns:
        StatusInfo for the product
    """
    if parse_date(product.date_finished) is not None:
        return StatusInfo(ProductStatus.FINISHED, "Finished", variant='secondary')

    expiration = parse_date(product.expiration_date)
    if expiration is not None:
        instant = to_instant(now)
        days = days_until(expiration, instant)

        if to_instant(expiration) < instant:
            return StatusInfo(
                ProductStatus.EXPIRED,
                "Expired",
                urgency=UrgencyTier.EXPIRED,
                variant=VARIANTS[UrgencyTier.EXPIRED],
                days_left=days
            )

        if days <= EXPIRING_SOON_DAYS:
            tier = _tier_for_days(days)
            return StatusInfo(
                ProductStatus.EXPIRING_SOON,
                _expires_label(days),
                urgency=tier,
                variant=VARIANTS[tier],
                days_left=days
            )

        return StatusInfo(ProductStatus.ACTIVE, "Active", days_left=days)

    return StatusInfo(ProductStatus.ACTIVE, "Active")

def get_product_status(product: Any, now: Instant = None) -> ProductStatus:
    """Shortcut for ``classify(product, now).status``."""
    return classify(product, now).status

def expiration_urgency(product: Any, now: Instant = None) -> UrgencyTier:
    """Urgency of the expiration date alone, ignoring ``date_finished``.

    Used for the expiration badge, which is shown for finished products too.
    """
    expiration = parse_date(product.expiration_date)
    if expiration is None:
        return UrgencyTier.NONE

    instant = to_instant(now)
    if to_instant(expiration) < instant:
        return UrgencyTier.EXPIRED
    return _tier_for_days(days_until(expiration, instant))

def is_finished_or_expired(product: Any, now: Instant = None) -> bool:
    """True for products that belong on the finished tab of the list view."""
    return get_product_status(product, now) in (ProductStatus.FINISHED, ProductStatus.EXPIRED)
