"""Read-only views over stored orders."""

from .history import HISTORY_SORTS, SUGGESTION_FIELDS, group_by_supplier, order_history, suggestions
from .price_list import (
    SORT_OPTIONS,
    build_price_list,
    export_price_list,
    price_list_stats,
)

__all__ = [
    'HISTORY_SORTS',
    'SORT_OPTIONS',
    'SUGGESTION_FIELDS',
    'build_price_list',
    'export_price_list',
    'group_by_supplier',
    'order_history',
    'price_list_stats',
    'suggestions'
]
