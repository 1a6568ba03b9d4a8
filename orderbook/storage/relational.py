"""Relational storage backend.

Orders are split across two tables: ``orders`` holds the parent row and
``order_products`` the line items. Child rows are always removed before the
parent is touched, and an update re-creates every line item instead of
diffing them.
"""

from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, lazyload

from ..db.models import Base, OrderRow, OrderProductRow
from ..db.session import SessionManager
from ..entities import parse_date, parse_timestamp, utcnow
from ..exceptions import PersistenceError
from .base import OrderStore, Record

class RelationalStore(OrderStore):
    """Order store backed by SQLAlchemy."""

    def __init__(self, database_url: str, name: str = 'relational'):
        """Connect and create the order tables if they are missing.

        Args:
            database_url: SQLAlchemy database URL
            name: Store name used in logs; the remote mirror uses 'remote'
        """
        super().__init__()
        self.name = name
        self.session_manager = SessionManager(database_url)
        try:
            Base.metadata.create_all(
                self.session_manager.engine,
                tables=[OrderRow.__table__, OrderProductRow.__table__]
            )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to prepare tables for '{name}': {e}") from e

    @contextmanager
    def _unit_of_work(self, action: str) -> Iterator[Session]:
        try:
            with self.session_manager.session() as session:
                yield session
        except SQLAlchemyError as e:
            self.logger.debug(f"{action} failed on '{self.name}'", exc_info=True)
            raise PersistenceError(f"Failed to {action} on '{self.name}': {e}") from e

    def load(self) -> List[Record]:
        with self._unit_of_work('load orders') as session:
            rows = session.query(OrderRow).order_by(OrderRow.created_at.desc()).all()
            return [self._to_record(row) for row in rows]

    def insert(self, record: Record) -> None:
        with self._unit_of_work('insert order') as session:
            if self._get_order(session, record['id']) is not None:
                raise PersistenceError(f"Order {record['id']} already exists in '{self.name}'")
            self._add(session, record)

    def replace(self, record: Record) -> bool:
        with self._unit_of_work('update order') as session:
            row = self._get_order(session, record['id'])
            if row is None:
                return False
            self._delete_products(session, record['id'])
            self._apply(row, record)
            self._add_products(session, record)
            return True

    def remove(self, order_id: str) -> bool:
        with self._unit_of_work('delete order') as session:
            self._delete_products(session, order_id)
            deleted = session.query(OrderRow).filter_by(id=order_id).delete()
            return deleted > 0

    def replace_all(self, records: List[Record]) -> None:
        with self._unit_of_work('replace orders') as session:
            session.query(OrderProductRow).delete()
            session.query(OrderRow).delete()
            session.flush()
            for record in records:
                self._add(session, record)

    def close(self) -> None:
        self.session_manager.dispose()

    def _add(self, session: Session, record: Record) -> None:
        row = OrderRow(id=record['id'])
        self._apply(row, record)
        session.add(row)
        session.flush()
        self._add_products(session, record)

    @staticmethod
    def _get_order(session: Session, order_id: str):
        # Line items are rewritten separately; keep them out of the identity map
        return session.get(OrderRow, order_id, options=[lazyload(OrderRow.products)])

    @staticmethod
    def _delete_products(session: Session, order_id: str) -> None:
        session.query(OrderProductRow).filter_by(order_id=order_id).delete()
        session.flush()

    @staticmethod
    def _apply(row: OrderRow, record: Record) -> None:
        row.date = parse_date(record['date'])
        row.supplier = record.get('supplier') or ''
        row.total_amount = Decimal(str(record.get('totalAmount') or 0))
        row.created_at = parse_timestamp(record.get('createdAt')) or utcnow()
        row.updated_at = parse_timestamp(record.get('updatedAt'))

    @staticmethod
    def _add_products(session: Session, record: Record) -> None:
        for position, product in enumerate(record.get('products') or []):
            session.add(OrderProductRow(
                id=product['id'],
                order_id=record['id'],
                position=position,
                name=product.get('name') or '',
                quantity=int(product.get('quantity') or 0),
                price=Decimal(str(product.get('price') or 0)),
                category=product.get('category'),
                brand=product.get('brand'),
                compatibility=product.get('compatibility')
            ))
        session.flush()

    @staticmethod
    def _to_record(row: OrderRow) -> Record:
        record = {
            'id': row.id,
            'date': row.date.isoformat(),
            'supplier': row.supplier,
            'products': [
                {
                    'id': p.id,
                    'name': p.name,
                    'quantity': p.quantity,
                    'price': float(p.price),
                    'category': p.category or '',
                    'brand': p.brand or '',
                    'compatibility': p.compatibility or '',
                }
                for p in row.products
            ],
            'totalAmount': float(row.total_amount or 0),
            'createdAt': parse_timestamp(row.created_at).isoformat(),
        }
        if row.updated_at is not None:
            record['updatedAt'] = parse_timestamp(row.updated_at).isoformat()
        return record
