"""Order history views: grouping, filtering and autocomplete values."""

from typing import Dict, Iterable, List, Optional

from ..entities import Order
from ..utils.normalization import clean_text, title_case

HISTORY_SORTS = ('date', 'supplier-asc', 'supplier-desc')
SUGGESTION_FIELDS = ('suppliers', 'names', 'categories', 'brands', 'compatibilities')

def group_by_supplier(orders: Iterable[Order]) -> Dict[str, List[Order]]:
    """Group orders by normalized supplier name, keeping first-seen order."""
    groups: Dict[str, List[Order]] = {}
    for order in orders:
        groups.setdefault(title_case(order.supplier), []).append(order)
    return groups

def order_history(
    orders: Iterable[Order],
    supplier: Optional[str] = None,
    sort_by: str = 'date'
) -> List[Order]:
    """Filter orders by supplier and sort them for display.

    Args:
        orders: Orders to show
        supplier: Only keep this supplier (compared after normalization)
        sort_by: 'date' (newest first), 'supplier-asc' or 'supplier-desc'

    Raises:
        ValueError: If sort_by is not a known option
    """
    if sort_by not in HISTORY_SORTS:
        raise ValueError(f"sort_by must be one of: {', '.join(HISTORY_SORTS)}")

    selected = list(orders)
    if supplier:
        wanted = title_case(supplier)
        selected = [o for o in selected if title_case(o.supplier) == wanted]

    if sort_by == 'date':
        return sorted(selected, key=lambda o: o.created_at, reverse=True)
    return sorted(
        selected,
        key=lambda o: (o.supplier or '').casefold(),
        reverse=(sort_by == 'supplier-desc')
    )

def suggestions(orders: Iterable[Order]) -> Dict[str, List[str]]:
    """Distinct values previously entered, for autocompleting new orders."""
    values = {field: {} for field in SUGGESTION_FIELDS}
    for order in orders:
        if order.supplier:
            values['suppliers'][title_case(order.supplier)] = None
        for product in order.products:
            if product.name:
                values['names'][clean_text(product.name)] = None
            if product.category:
                values['categories'][title_case(product.category)] = None
            if product.brand:
                values['brands'][title_case(product.brand)] = None
            if product.compatibility:
                values['compatibilities'][clean_text(product.compatibility)] = None
    return {key: list(found) for key, found in values.items()}
