"""Purchase order book with swappable storage and background sync."""

from .entities import Order, Product, compute_total
from .exceptions import OrderbookError, PersistenceError, SyncError, ValidationError
from .repository import OrderRepository, build_repository

__all__ = [
    'Order',
    'Product',
    'compute_total',
    'OrderbookError',
    'PersistenceError',
    'SyncError',
    'ValidationError',
    'OrderRepository',
    'build_repository'
]
