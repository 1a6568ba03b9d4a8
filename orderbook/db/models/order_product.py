"""OrderProduct model definition."""

from sqlalchemy import Column, String, Integer, Numeric, ForeignKey

from .base import Base

class OrderProductRow(Base):
    """Line item row, owned by exactly one order."""
    
    __tablename__ = 'order_products'
    
    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey('orders.id'), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)  # display order
    name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(18, 6), nullable=False)
    category = Column(String)
    brand = Column(String)
    compatibility = Column(String)
    
    def __repr__(self):
        """Return string representation."""
        return f'<OrderProductRow(id="{self.id}", order="{self.order_id}", name="{self.name}")>'
