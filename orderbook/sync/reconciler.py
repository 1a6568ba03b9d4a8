"""Best-effort mirroring between the primary store and secondary stores.

This is cache warming, not replication:

- writes to the primary are mirrored to every available secondary in the
  background; a failed mirror is logged and lost until the next write
- a read schedules a refresh from the first available secondary, and any
  non-empty result overwrites the primary wholesale. There is no merge and
  no timestamp comparison, so a stale secondary wins over a richer primary
- at startup an empty secondary is seeded from the primary once
"""

import logging
from functools import partial
from typing import List, Optional, Sequence

from ..storage.base import OrderStore, Record
from .background import BackgroundQueue

logger = logging.getLogger(__name__)

class Reconciler:
    """Schedules mirror, refresh and migration tasks on a background queue."""

    def __init__(self, primary: OrderStore, secondaries: Sequence[OrderStore],
                 background_queue: BackgroundQueue):
        self.primary = primary
        self.secondaries = list(secondaries)
        self.queue = background_queue

        for store in self.secondaries:
            if not store.available:
                logger.info(f"Secondary store '{store.name}' unavailable, sync to it disabled: "
                            f"{getattr(store, 'reason', 'unknown')}")

    @property
    def active_secondaries(self) -> List[OrderStore]:
        return [s for s in self.secondaries if s.available]

    @property
    def enabled(self) -> bool:
        return bool(self.active_secondaries)

    @property
    def refresh_source(self) -> Optional[OrderStore]:
        active = self.active_secondaries
        return active[0] if active else None

    def mirror_save(self, record: Record) -> None:
        for store in self.active_secondaries:
            self.queue.submit(f"mirror-save:{store.name}", partial(store.upsert, record))

    def mirror_update(self, record: Record) -> None:
        for store in self.active_secondaries:
            self.queue.submit(f"mirror-update:{store.name}", partial(store.upsert, record))

    def mirror_delete(self, order_id: str) -> None:
        for store in self.active_secondaries:
            self.queue.submit(f"mirror-delete:{store.name}", partial(store.remove, order_id))

    def schedule_refresh(self) -> None:
        """Queue a read of the refresh source that may overwrite the primary."""
        source = self.refresh_source
        if source is None:
            return
        self.queue.submit(f"refresh:{source.name}", partial(self._refresh_from, source))

    def schedule_migration(self) -> None:
        """Queue a one-time seed of each empty secondary from the primary."""
        for store in self.active_secondaries:
            self.queue.submit(f"migrate:{store.name}", partial(self._migrate_to, store))

    def schedule_push(self) -> None:
        """Queue an upsert of every primary record into each secondary."""
        for store in self.active_secondaries:
            self.queue.submit(f"push:{store.name}", partial(self._push_to, store))

    def schedule_pull(self) -> None:
        """Queue an upsert of every secondary record into the primary."""
        for store in self.active_secondaries:
            self.queue.submit(f"pull:{store.name}", partial(self._pull_from, store))

    def _refresh_from(self, source: OrderStore) -> None:
        records = source.load()
        if not records:
            logger.debug(f"Refresh source '{source.name}' is empty, keeping primary")
            return
        self.primary.replace_all(records)
        logger.info(f"Primary '{self.primary.name}' overwritten with {len(records)} orders from '{source.name}'")

    def _migrate_to(self, store: OrderStore) -> None:
        if store.load():
            logger.debug(f"Secondary '{store.name}' already has data, skipping migration")
            return
        records = self.primary.load()
        if not records:
            return
        store.replace_all(records)
        logger.info(f"Migrated {len(records)} orders from '{self.primary.name}' to '{store.name}'")

    def _push_to(self, store: OrderStore) -> None:
        records = self.primary.load()
        for record in records:
            store.upsert(record)
        logger.info(f"Pushed {len(records)} orders to '{store.name}'")

    def _pull_from(self, store: OrderStore) -> None:
        records = store.load()
        for record in records:
            self.primary.upsert(record)
        logger.info(f"Pulled {len(records)} orders from '{store.name}'")
