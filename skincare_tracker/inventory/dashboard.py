"""Dashboard statistics for a product collection."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from .dates import Instant, to_instant
from .sorting import sort_by_expiration
from .status import ProductStatus, StatusInfo, classify

@dataclass(frozen=True)
class UpcomingExpiration:
    """A product on the upcoming expirations list."""
    product: Any
    status: StatusInfo

@dataclass(frozen=True)
class DashboardSummary:
    """Counts and lists shown on the dashboard."""
    total: int = 0
    active: int = 0
    expiring_soon: int = 0
    expired: int = 0
    finished: int = 0
    upcoming: List[UpcomingExpiration] = field(default_factory=list)
    type_counts: List[Tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'active': self.active,
            'expiring_soon': self.expiring_soon,
            'expired': self.expired,
            'finished': self.finished,
            'upcoming': [
                {
                    'id': item.product.id,
                    'brand': item.product.brand,
                    'name': item.product.name,
                    'type': item.product.type,
                    'expiration_date': item.product.expiration_date,
                    'label': item.status.label
                }
                for item in self.upcoming
            ],
            'type_counts': dict(self.type_counts)
        }

def summarize(products: Iterable[Any], now: Instant = None, upcoming_limit: int = 5) -> DashboardSummary:
    """Build the dashboard summary.
    
    Args:
        products: Products to summarize
        now: Reference instant, defaults to the current time
        upcoming_limit: Maximum number of upcoming expirations to list
        
    Returns:
        DashboardSummary
    """
    products = list(products)
    instant = to_instant(now)
    statuses = {id(p): classify(p, instant) for p in products}
    counts = Counter(info.status for info in statuses.values())
    
    # Still usable and dated, soonest first
    upcoming = [
        UpcomingExpiration(p, statuses[id(p)])
        for p in sort_by_expiration(products)
        if statuses[id(p)].status in (ProductStatus.ACTIVE, ProductStatus.EXPIRING_SOON)
        and statuses[id(p)].days_left is not None
    ]
    
    type_counts = Counter(p.type for p in products if p.type)
    
    return DashboardSummary(
        total=len(products),
        active=counts[ProductStatus.ACTIVE],
        expiring_soon=counts[ProductStatus.EXPIRING_SOON],
        expired=counts[ProductStatus.EXPIRED],
        finished=counts[ProductStatus.FINISHED],
        upcoming=upcoming[:max(upcoming_limit, 0)],
        type_counts=sorted(type_counts.items(), key=lambda item: (-item[1], item[0]))
    )
