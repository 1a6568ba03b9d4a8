"""Text normalization and structural validation for orders.

Supplier, category and brand are shown and grouped in title case, so two
orders typed as "tech supply co." and "TECH SUPPLY CO." land in the same
price list bucket. Product names and compatibility notes are only trimmed.

Every function here is idempotent: normalizing an already normalized value
returns it unchanged.
"""

import logging
import math
import re
from dataclasses import replace
from decimal import Decimal
from numbers import Integral, Real
from typing import TYPE_CHECKING, Optional

from ..exceptions import ValidationError
from .uuid import is_valid_uuid

if TYPE_CHECKING:
    from ..entities import Order, Product

logger = logging.getLogger(__name__)

_WORD_START = re.compile(r'(^|\s)(\S)')

def _upper_first(match: re.Match) -> str:
    char = match.group(2)
    upper = char.upper()
    # Characters like "ß" expand when uppercased; leave them alone
    return match.group(1) + (upper if len(upper) == 1 else char)

def title_case(text: Optional[str]) -> str:
    """Lowercase a value and capitalize the first letter of each word.

    Words are whitespace-delimited, so "co." stays a single word.

    Examples:
        >>> title_case("TECH SUPPLY CO.")
        'Tech Supply Co.'
        >>> title_case("  acme  ")
        'Acme'
        >>> title_case(None)
        ''
    """
    if not text:
        return ''
    return _WORD_START.sub(_upper_first, str(text).strip().lower())

def clean_text(text: Optional[str]) -> str:
    """Strip surrounding whitespace; missing values become an empty string."""
    if text is None:
        return ''
    return str(text).strip()

def normalize_product(product: 'Product') -> 'Product':
    """Return a copy of a product with display fields normalized."""
    return replace(
        product,
        name=clean_text(product.name),
        category=title_case(product.category),
        brand=title_case(product.brand),
        compatibility=clean_text(product.compatibility),
    )

def normalize_order(order: 'Order') -> 'Order':
    """Return a copy of an order with supplier and all products normalized."""
    return replace(
        order,
        supplier=title_case(order.supplier),
        products=[normalize_product(p) for p in order.products],
    )

def is_valid_order(order: 'Order') -> bool:
    """Check the order id and every product id are canonical UUIDs."""
    if not is_valid_uuid(order.id):
        return False
    return all(is_valid_uuid(p.id) for p in order.products)

def validate_order(order: 'Order') -> None:
    """Reject an order that must not be written to any store.

    Args:
        order: Order about to be saved or updated

    Raises:
        ValidationError: If an id is malformed or a required field is missing
    """
    if not is_valid_uuid(order.id):
        raise ValidationError(f"Invalid order id: {order.id!r}")
    if not clean_text(order.supplier):
        raise ValidationError("Supplier is required")
    if not order.products:
        raise ValidationError("An order needs at least one product")

    for index, product in enumerate(order.products, 1):
        if not is_valid_uuid(product.id):
            raise ValidationError(f"Product {index} has an invalid id: {product.id!r}")
        if not clean_text(product.name):
            raise ValidationError(f"Product {index} is missing a name")
        if isinstance(product.quantity, bool) or not isinstance(product.quantity, Integral):
            raise ValidationError(f"Product {index} quantity must be a whole number")
        if product.quantity < 0:
            raise ValidationError(f"Product {index} quantity cannot be negative")
        if isinstance(product.price, bool) or not isinstance(product.price, (Real, Decimal)):
            raise ValidationError(f"Product {index} price must be a number")
        if not math.isfinite(product.price):
            raise ValidationError(f"Product {index} price must be a finite number")
        if product.price < 0:
            raise ValidationError(f"Product {index} price cannot be negative")

    logger.debug(f"Order {order.id} passed validation ({len(order.products)} products)")
