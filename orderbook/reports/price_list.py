"""Consolidated price list built from historical orders."""

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

import pandas as pd

from ..entities import Order
from ..utils.normalization import title_case

logger = logging.getLogger(__name__)

SORT_OPTIONS = ('none', 'category', 'brand', 'supplier')
SEARCH_COLUMNS = ['name', 'category', 'brand', 'supplier', 'compatibility']
PRICE_LIST_COLUMNS = [
    'name', 'category', 'brand', 'supplier', 'compatibility',
    'quantity', 'price', 'total', 'order_date', 'order_id', 'product_id'
]
EXPORT_HEADERS = {
    'name': 'Product Name',
    'category': 'Category',
    'brand': 'Brand',
    'supplier': 'Supplier',
    'compatibility': 'Compatibility',
    'quantity': 'Quantity',
    'price': 'Unit Price',
    'total': 'Total',
    'order_date': 'Order Date',
}

def build_price_list(
    orders: Iterable[Order],
    sort_by: str = 'none',
    query: Optional[str] = None
) -> pd.DataFrame:
    """Flatten orders into one row per product.

    Args:
        orders: Orders as returned by the repository
        sort_by: One of SORT_OPTIONS; sorting is case-insensitive and stable
        query: Optional case-insensitive text filter over name, category,
            brand, supplier and compatibility

    Returns:
        DataFrame with PRICE_LIST_COLUMNS

    Raises:
        ValueError: If sort_by is not a known option
    """
    if sort_by not in SORT_OPTIONS:
        raise ValueError(f"sort_by must be one of: {', '.join(SORT_OPTIONS)}")

    rows = []
    for order in orders:
        for product in order.products:
            rows.append({
                'name': product.name,
                'category': product.category,
                'brand': product.brand,
                'supplier': title_case(order.supplier),
                'compatibility': product.compatibility or '',
                'quantity': product.quantity,
                'price': product.price,
                'total': product.line_total,
                'order_date': order.date.isoformat(),
                'order_id': order.id,
                'product_id': product.id,
            })

    df = pd.DataFrame(rows, columns=PRICE_LIST_COLUMNS)

    if query and query.strip():
        needle = query.strip()
        mask = pd.Series(False, index=df.index)
        for column in SEARCH_COLUMNS:
            mask |= df[column].astype(str).str.contains(needle, case=False, regex=False)
        df = df[mask]

    if sort_by != 'none':
        df = df.sort_values(by=sort_by, key=lambda s: s.astype(str).str.lower(), kind='stable')

    logger.debug(f"Built price list with {len(df)} rows (sort_by={sort_by}, query={query!r})")
    return df.reset_index(drop=True)

def price_list_stats(df: pd.DataFrame) -> Dict[str, float]:
    """Total item count and total value of a price list."""
    if df.empty:
        return {'total_items': 0, 'total_value': 0.0}
    return {
        'total_items': int(df['quantity'].sum()),
        'total_value': round(float(df['total'].sum()), 2),
    }

def export_price_list(df: pd.DataFrame, path: Path) -> int:
    """Write a price list to CSV.

    Returns:
        Number of product rows written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    export = df[list(EXPORT_HEADERS)].rename(columns=EXPORT_HEADERS)
    export.to_csv(path, index=False, float_format='%.2f')
    logger.info(f"Exported {len(export)} price list rows to {path}")
    return len(export)
