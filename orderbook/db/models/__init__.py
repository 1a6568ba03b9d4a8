"""SQLAlchemy models for database tables."""

from .base import Base
from .order import OrderRow
from .order_product import OrderProductRow
from .kv_entry import KeyValueEntry

__all__ = [
    'Base',
    'OrderRow',
    'OrderProductRow',
    'KeyValueEntry'
]
