"""Order model definition."""

from sqlalchemy import Column, String, Date, DateTime, Numeric
from sqlalchemy.orm import relationship

from .base import Base

class OrderRow(Base):
    """Parent row of an order; line items live in order_products."""
    
    __tablename__ = 'orders'
    
    id = Column(String(36), primary_key=True)
    date = Column(Date, nullable=False)
    supplier = Column(String, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True))
    
    products = relationship(
        'OrderProductRow',
        order_by='OrderProductRow.position',
        lazy='selectin',
        viewonly=True
    )
    
    def __repr__(self):
        """Return string representation."""
        return f'<OrderRow(id="{self.id}", supplier="{self.supplier}", date="{self.date}")>'
