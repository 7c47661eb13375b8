"""Product model definition."""

from datetime import datetime

from sqlalchemy import Column, String, Date, DateTime, Numeric, Text, JSON

from .base import Base

class Product(Base):
    """Skincare product row."""
    
    __tablename__ = 'products'
    
    id = Column(String, primary_key=True)
    brand = Column(String, nullable=False)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    date_opened = Column(Date)
    date_finished = Column(Date)
    expiration_date = Column(Date)
    price = Column(Numeric(10, 2, asdecimal=False))
    notes = Column(Text)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    modified_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    
    def __repr__(self):
        """Return string representation."""
        return f'<Product(id="{self.id}", brand="{self.brand}", name="{self.name}")>'
