"""Key/value storage backends.

Both backends keep the whole order list as one JSON string under the
``orders`` key, the way browser local storage and on-device preference
storage are used by the mobile client:

- LocalStorageStore: a JSON file holding a key/value map
- DeviceStorageStore: a SQLite file with a ``kv_store`` table
"""

import json
import os
from abc import abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..db.models import KeyValueEntry
from ..db.session import SessionManager
from ..exceptions import PersistenceError
from .base import OrderStore, Record

ORDERS_KEY = 'orders'

class KeyValueStore(OrderStore):
    """Order store on top of get/set/remove of a single key.

    Every write is a full overwrite of the key; there is no locking, so
    concurrent writers in one process see last-write-wins.
    """

    prunes_on_read = True

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        pass

    def load(self) -> List[Record]:
        raw = self.get_item(ORDERS_KEY)
        if not raw:
            return []
        if not isinstance(raw, str):
            raise PersistenceError(f"Stored orders in '{self.name}' are not a JSON string")
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Stored orders in '{self.name}' are not valid JSON: {e}") from e
        if not isinstance(records, list):
            raise PersistenceError(f"Stored orders in '{self.name}' are not a list")
        return records

    def _write(self, records: List[Record]) -> None:
        self.set_item(ORDERS_KEY, json.dumps(records))

    def insert(self, record: Record) -> None:
        records = self.load()
        if any(r.get('id') == record['id'] for r in records if isinstance(r, dict)):
            raise PersistenceError(f"Order {record['id']} already exists in '{self.name}'")
        records.append(record)
        self._write(records)

    def replace(self, record: Record) -> bool:
        records = self.load()
        for index, existing in enumerate(records):
            if isinstance(existing, dict) and existing.get('id') == record['id']:
                records[index] = record
                self._write(records)
                return True
        return False

    def remove(self, order_id: str) -> bool:
        records = self.load()
        remaining = [r for r in records if not (isinstance(r, dict) and r.get('id') == order_id)]
        if len(remaining) == len(records):
            return False
        self._write(remaining)
        return True

    def replace_all(self, records: List[Record]) -> None:
        self._write(list(records))

    def clear(self) -> None:
        """Drop the stored order list."""
        self.remove_item(ORDERS_KEY)

class LocalStorageStore(KeyValueStore):
    """Key/value map persisted as a JSON file."""

    name = 'local'

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)

    def _read_map(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"{self.path} does not contain a key/value map")
        return data

    def _write_map(self, data: Dict[str, str]) -> None:
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceError(f"Failed to write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read_map().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_map()
        data[key] = value
        self._write_map(data)

    def remove_item(self, key: str) -> None:
        data = self._read_map()
        if data.pop(key, None) is not None:
            self._write_map(data)

class DeviceStorageStore(KeyValueStore):
    """Key/value table in a SQLite file on the device."""

    name = 'device'

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        self.session_manager = SessionManager(f"sqlite:///{self.path}")
        try:
            KeyValueEntry.__table__.create(self.session_manager.engine, checkfirst=True)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to open device storage at {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        try:
            with self.session_manager.session() as session:
                entry = session.get(KeyValueEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read '{key}' from device storage: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        try:
            with self.session_manager.session() as session:
                session.merge(KeyValueEntry(key=key, value=value))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to write '{key}' to device storage: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            with self.session_manager.session() as session:
                session.query(KeyValueEntry).filter_by(key=key).delete()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to remove '{key}' from device storage: {e}") from e

    def close(self) -> None:
        self.session_manager.dispose()
