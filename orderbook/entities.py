"""Order and Product record shapes.

Entities convert to and from the backend-agnostic record layout used by
every store:

    {id, date, supplier, products: [{id, name, quantity, price, category,
     brand, compatibility}], totalAmount, createdAt, updatedAt?}
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import ValidationError
from .utils.uuid import generate_uuid

CENTS = Decimal('0.01')

def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)

def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts the "Z" suffix written by browser clients. Naive values
    (SQLite drops the offset) are taken to be UTC.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)

def parse_date(value: Any) -> date:
    """Parse a calendar date; a full timestamp is truncated to its date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) > 10:
        return parse_timestamp(text).date()
    return date.fromisoformat(text)

def compute_total(products: Iterable['Product']) -> float:
    """Sum price x quantity over products, rounded half-up to cents.

    Decimal arithmetic keeps 19.99 x 10 + 24.50 x 5 at exactly 322.40.

    Raises:
        ValidationError: If a price is infinite or NaN
    """
    total = sum(
        (Decimal(str(p.price)) * int(p.quantity) for p in products),
        Decimal('0')
    )
    if not total.is_finite():
        raise ValidationError(f"Order total is not a finite number: {total}")
    return float(total.quantize(CENTS, rounding=ROUND_HALF_UP))

@dataclass
class Product:
    """A line item owned by exactly one order."""
    id: str
    name: str
    quantity: int
    price: float
    category: str = ''
    brand: str = ''
    compatibility: str = ''

    @property
    def line_total(self) -> float:
        return compute_total([self])

    @classmethod
    def new(cls, name: str, quantity: int, price: float, category: str = '',
            brand: str = '', compatibility: str = '') -> 'Product':
        """Create a product with a freshly generated id."""
        return cls(
            id=generate_uuid(),
            name=name,
            quantity=quantity,
            price=price,
            category=category,
            brand=brand,
            compatibility=compatibility
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'quantity': self.quantity,
            'price': self.price,
            'category': self.category,
            'brand': self.brand,
            'compatibility': self.compatibility,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Product':
        return cls(
            id=record['id'],
            name=record.get('name') or '',
            quantity=int(record.get('quantity') or 0),
            price=float(record.get('price') or 0),
            category=record.get('category') or '',
            brand=record.get('brand') or '',
            compatibility=record.get('compatibility') or '',
        )

@dataclass
class Order:
    """A purchase order from one supplier."""
    id: str
    date: date
    supplier: str
    products: List[Product] = field(default_factory=list)
    total_amount: float = 0.0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    @classmethod
    def new(cls, supplier: str, products: List[Product],
            order_date: Optional[date] = None) -> 'Order':
        """Create an order as the new-order flow does.

        Args:
            supplier: Supplier name as typed
            products: Line items, at least one
            order_date: Order date, defaults to today

        Returns:
            Order with a fresh id, creation stamp and computed total
        """
        return cls(
            id=generate_uuid(),
            date=order_date or date.today(),
            supplier=supplier,
            products=list(products),
            total_amount=compute_total(products),
            created_at=utcnow()
        )

    def to_record(self) -> Dict[str, Any]:
        record = {
            'id': self.id,
            'date': self.date.isoformat(),
            'supplier': self.supplier,
            'products': [p.to_record() for p in self.products],
            'totalAmount': self.total_amount,
            'createdAt': self.created_at.isoformat(),
        }
        if self.updated_at is not None:
            record['updatedAt'] = self.updated_at.isoformat()
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Order':
        """Build an order from a stored record.

        Raises:
            KeyError, TypeError, ValueError: If the record is malformed
        """
        return cls(
            id=record['id'],
            date=parse_date(record['date']),
            supplier=record.get('supplier') or '',
            products=[Product.from_record(p) for p in record.get('products') or []],
            total_amount=float(record.get('totalAmount') or 0),
            created_at=parse_timestamp(record.get('createdAt')) or utcnow(),
            updated_at=parse_timestamp(record.get('updatedAt'))
        )

    def __repr__(self):
        """Return string representation."""
        return f'<Order(id="{self.id}", supplier="{self.supplier}", products={len(self.products)})>'
