"""Document database backend (MongoDB through pymongo)."""

from typing import List

from pymongo import DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..exceptions import PersistenceError
from .base import OrderStore, Record

class DocumentStore(OrderStore):
    """One document per order, keyed by the order id."""

    name = 'document'

    def __init__(self, collection: Collection, client: MongoClient = None):
        super().__init__()
        self.collection = collection
        self.client = client

    @classmethod
    def from_url(cls, url: str, database: str, collection: str) -> 'DocumentStore':
        """Open a store on a MongoDB deployment.

        Args:
            url: MongoDB connection string
            database: Database name
            collection: Orders collection name
        """
        try:
            client = MongoClient(url, serverSelectionTimeoutMS=5000)
        except PyMongoError as e:
            raise PersistenceError(f"Failed to configure document database: {e}") from e
        return cls(client[database][collection], client=client)

    @staticmethod
    def _to_document(record: Record) -> dict:
        return {'_id': record['id'], **record}

    @staticmethod
    def _to_record(document: dict) -> Record:
        record = dict(document)
        record.pop('_id', None)
        return record

    def load(self) -> List[Record]:
        try:
            documents = self.collection.find({}, sort=[('createdAt', DESCENDING)])
            return [self._to_record(d) for d in documents]
        except PyMongoError as e:
            raise PersistenceError(f"Failed to load orders from '{self.name}': {e}") from e

    def insert(self, record: Record) -> None:
        try:
            self.collection.insert_one(self._to_document(record))
        except DuplicateKeyError as e:
            raise PersistenceError(f"Order {record['id']} already exists in '{self.name}'") from e
        except PyMongoError as e:
            raise PersistenceError(f"Failed to insert order {record['id']}: {e}") from e

    def replace(self, record: Record) -> bool:
        try:
            result = self.collection.replace_one({'_id': record['id']}, self._to_document(record))
        except PyMongoError as e:
            raise PersistenceError(f"Failed to update order {record['id']}: {e}") from e
        return result.matched_count > 0

    def remove(self, order_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': order_id})
        except PyMongoError as e:
            raise PersistenceError(f"Failed to delete order {order_id}: {e}") from e
        return result.deleted_count > 0

    def replace_all(self, records: List[Record]) -> None:
        try:
            self.collection.delete_many({})
            if records:
                self.collection.insert_many([self._to_document(r) for r in records])
        except PyMongoError as e:
            raise PersistenceError(f"Failed to replace orders in '{self.name}': {e}") from e

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
