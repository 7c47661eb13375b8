"""In-memory product record."""

import enum
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

class ProductType(str, enum.Enum):
    """Fixed set of product types offered by the form layer."""
    CLEANSER = 'Cleanser'
    TONER = 'Toner'
    ESSENCE = 'Essence'
    SERUM = 'Serum'
    MOISTURIZER = 'Moisturizer'
    SUNSCREEN = 'Sunscreen'
    EXFOLIANT = 'Exfoliant'
    MASK = 'Mask'
    EYE_CREAM = 'Eye Cream'
    FACE_OIL = 'Face Oil'
    SPOT_TREATMENT = 'Spot Treatment'
    LIP_CARE = 'Lip Care'
    OTHER = 'Other'
    
    @classmethod
    def values(cls) -> List[str]:
        """Display values in declaration order."""
        return [member.value for member in cls]

@dataclass(frozen=True)
class Product:
    """Snapshot of a stored product.
    
    Dates are ISO ``YYYY-MM-DD`` strings or None, the way the store hands
    them to the views.
    """
    
    id: str
    brand: str
    name: str
    type: str
    date_opened: Optional[str] = None
    date_finished: Optional[str] = None
    expiration_date: Optional[str] = None
    price: Optional[float] = None
    notes: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    
    @property
    def display_name(self) -> str:
        return f"{self.brand} - {self.name}"
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON friendly dictionary."""
        result = asdict(self)
        for key in ('created_at', 'modified_at'):
            if isinstance(result[key], datetime):
                result[key] = result[key].isoformat()
        return result
