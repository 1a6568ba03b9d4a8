"""
Storage backends for orders.
The backend is chosen by configuration; ``create_store`` returns a concrete
store or an ``UnavailableStore`` when the backend cannot be used.
"""

import logging
from pathlib import Path

from ..exceptions import PersistenceError
from .base import OrderStore, Record
from .document import DocumentStore
from .keyvalue import DeviceStorageStore, KeyValueStore, LocalStorageStore
from .relational import RelationalStore
from .unavailable import UnavailableStore

logger = logging.getLogger(__name__)

BACKENDS = ('local', 'device', 'document', 'relational')

def create_store(kind: str, config) -> OrderStore:
    """Create the store for a backend kind.

    Args:
        kind: One of BACKENDS, or 'remote' for the remote mirror database
        config: Application configuration

    Returns:
        OrderStore: Concrete store, or UnavailableStore if the backend is
            not configured or cannot be opened

    Raises:
        ValueError: If the backend kind is unknown
    """
    try:
        if kind == 'local':
            return LocalStorageStore(Path(config.local_storage_path))
        if kind == 'device':
            return DeviceStorageStore(Path(config.device_storage_path))
        if kind == 'relational':
            if not config.database_url:
                return UnavailableStore(kind, "DATABASE_URL is not set")
            return RelationalStore(config.database_url)
        if kind == 'document':
            if not config.document_db_url:
                return UnavailableStore(kind, "DOCUMENT_DB_URL is not set")
            return DocumentStore.from_url(
                config.document_db_url,
                config.document_db_name,
                config.orders_collection
            )
        if kind == 'remote':
            if not config.remote_database_url:
                return UnavailableStore(kind, "REMOTE_DATABASE_URL is not set")
            return RelationalStore(config.remote_database_url, name='remote')
    except PersistenceError as e:
        logger.warning(f"Storage backend '{kind}' could not be opened: {e}")
        return UnavailableStore(kind, str(e))

    raise ValueError(f"Unknown storage backend: {kind}")

__all__ = [
    'BACKENDS',
    'OrderStore',
    'Record',
    'KeyValueStore',
    'LocalStorageStore',
    'DeviceStorageStore',
    'DocumentStore',
    'RelationalStore',
    'UnavailableStore',
    'create_store'
]
