"""
Command implementations for the orderbook CLI.
Each submodule provides specific command functionality.
"""

from .orders import (
    AddOrderCommand,
    UpdateOrderCommand,
    DeleteOrderCommand,
    ListOrdersCommand,
    SuggestCommand,
    add_order,
    update_order,
    delete_order,
    list_orders,
    suggest
)
from .price_list import PriceListCommand, price_list
from .sync import SyncCommand, sync
from .utils import TestConnectionCommand, test_connection

__all__ = [
    'AddOrderCommand',
    'UpdateOrderCommand',
    'DeleteOrderCommand',
    'ListOrdersCommand',
    'SuggestCommand',
    'PriceListCommand',
    'SyncCommand',
    'TestConnectionCommand',
    'add_order',
    'update_order',
    'delete_order',
    'list_orders',
    'suggest',
    'price_list',
    'sync',
    'test_connection'
]
