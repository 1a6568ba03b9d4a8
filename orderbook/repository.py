"""Order repository: the single entry point for reading and writing orders.

Writes go to the primary store and return; mirroring to secondary stores
is queued on the background worker. Reads return the primary's current
contents and queue a refresh whose effect shows up on a later read.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from .entities import Order, compute_total, utcnow
from .exceptions import PersistenceError
from .storage import OrderStore, create_store
from .sync import BackgroundQueue, Reconciler
from .utils.normalization import is_valid_order, normalize_order, validate_order

logger = logging.getLogger(__name__)

class OrderRepository:
    """Persistence adapter over one primary store and optional mirrors."""

    def __init__(
        self,
        primary: OrderStore,
        secondaries: Sequence[OrderStore] = (),
        background_queue: Optional[BackgroundQueue] = None
    ):
        """Initialize the repository.

        Args:
            primary: Store the caller reads from and writes to synchronously
            secondaries: Stores mirrored to in the background
            background_queue: Queue for mirror tasks, created if omitted
        """
        self.primary = primary
        self.queue = background_queue or BackgroundQueue()
        self.reconciler = Reconciler(primary, secondaries, self.queue)

    def start(self) -> None:
        """Seed empty secondaries from the primary, once per process."""
        if self.reconciler.enabled and self.primary.available:
            self.reconciler.schedule_migration()

    def close(self, wait: bool = True, timeout: float = 5.0) -> None:
        """Stop the background queue and release store resources."""
        self.queue.stop(wait=wait, timeout=timeout)
        for store in [self.primary, *self.reconciler.secondaries]:
            try:
                store.close()
            except Exception as e:
                logger.warning(f"Failed to close store '{store.name}': {e}")

    def _prepare(self, order: Order) -> Order:
        validate_order(order)
        prepared = normalize_order(order)
        return replace(prepared, total_amount=compute_total(prepared.products))

    def save_order(self, order: Order) -> Order:
        """Persist a new order.

        Args:
            order: Fully formed order with client-generated ids

        Returns:
            The stored order, normalized and with its total recomputed

        Raises:
            ValidationError: If the order is malformed; nothing is written
            PersistenceError: If the primary store rejects the write
        """
        stored = self._prepare(order)
        record = stored.to_record()
        self.primary.insert(record)
        logger.info(f"Saved order {stored.id} from {stored.supplier} ({len(stored.products)} products)")
        self.reconciler.mirror_save(record)
        return stored

    def get_orders(self) -> List[Order]:
        """Return all valid orders, newest first.

        Never raises: a failed read degrades to an empty list.
        """
        try:
            records = self.primary.load()
        except PersistenceError as e:
            logger.error(f"Failed to load orders from '{self.primary.name}': {e}")
            records = []

        orders = []
        for record in records:
            try:
                order = Order.from_record(record)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed order record: {e}")
                continue
            if not is_valid_order(order):
                logger.debug(f"Skipping order with invalid ids: {order.id!r}")
                continue
            orders.append(normalize_order(order))

        if self.primary.prunes_on_read and records:
            self._prune(records, orders)

        orders.sort(key=lambda o: o.created_at, reverse=True)
        self.reconciler.schedule_refresh()
        return orders

    def _prune(self, records: list, orders: List[Order]) -> None:
        cleaned = [o.to_record() for o in orders]
        if cleaned == records:
            return
        try:
            self.primary.replace_all(cleaned)
            logger.info(f"Pruned '{self.primary.name}': kept {len(cleaned)} of {len(records)} records")
        except PersistenceError as e:
            logger.warning(f"Failed to write cleaned orders back to '{self.primary.name}': {e}")

    def get_order(self, order_id: str) -> Optional[Order]:
        """Return one order by id, or None."""
        for order in self.get_orders():
            if order.id == order_id:
                return order
        return None

    def update_order(self, order: Order) -> Order:
        """Replace an order, appending it when the id is not stored yet.

        Raises:
            ValidationError: If the order is malformed; nothing is written
            PersistenceError: If the primary store rejects the write
        """
        stored = replace(self._prepare(order), updated_at=utcnow())
        record = stored.to_record()
        if not self.primary.replace(record):
            logger.warning(f"Order {stored.id} not found in '{self.primary.name}', inserting it instead")
            self.primary.insert(record)
        else:
            logger.info(f"Updated order {stored.id}")
        self.reconciler.mirror_update(record)
        return stored

    def delete_order(self, order_id: str) -> None:
        """Delete an order by id; deleting an absent id does nothing.

        Raises:
            PersistenceError: If the primary store rejects the delete
        """
        if self.primary.remove(order_id):
            logger.info(f"Deleted order {order_id}")
        else:
            logger.debug(f"Order {order_id} not present, nothing to delete")
        self.reconciler.mirror_delete(order_id)

def build_repository(config) -> OrderRepository:
    """Create a repository from configuration.

    The primary backend comes from ``config.storage_backend``. An optional
    ``config.secondary_backend`` and ``config.remote_database_url`` add
    background mirrors; when neither is set reconciliation is a no-op.
    """
    primary = create_store(config.storage_backend, config)
    if not primary.available:
        logger.error(f"Primary storage '{primary.name}' is unavailable: {primary.reason}")

    secondaries = []
    if config.secondary_backend:
        secondaries.append(create_store(config.secondary_backend, config))
    if config.remote_database_url:
        secondaries.append(create_store('remote', config))

    repository = OrderRepository(
        primary,
        secondaries,
        BackgroundQueue(max_retries=config.sync_max_retries)
    )
    repository.start()
    return repository
