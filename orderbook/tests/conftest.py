"""Shared test fixtures and utilities."""

import copy
import threading
from datetime import date
from types import SimpleNamespace

import pytest
from pymongo.errors import DuplicateKeyError

from ..entities import Order, Product
from ..exceptions import PersistenceError
from ..repository import OrderRepository
from ..storage import DeviceStorageStore, DocumentStore, LocalStorageStore, RelationalStore
from ..sync import BackgroundQueue

VALID_ORDER_ID = '3fa85f64-5717-4562-b3fc-2c963f66afa6'

def make_order(supplier='tech supply co.', products=None, order_date=date(2024, 3, 1)):
    """Build a new order with two line items unless products are given."""
    if products is None:
        products = [
            Product.new('  USB-C Cable ', 10, 19.99, 'cables', 'ANKER'),
            Product.new('Charger', 5, 24.50, 'power', 'anker', ' iPhone 15 '),
        ]
    return Order.new(supplier, products, order_date)

class FakeCollection:
    """In-memory stand-in for a pymongo collection."""

    def __init__(self):
        self.docs = {}

    def insert_one(self, doc):
        if doc['_id'] in self.docs:
            raise DuplicateKeyError(f"E11000 duplicate key: {doc['_id']}")
        self.docs[doc['_id']] = copy.deepcopy(doc)

    def insert_many(self, docs):
        for doc in docs:
            self.insert_one(doc)

    def replace_one(self, query, doc):
        matched = query['_id'] in self.docs
        if matched:
            self.docs[query['_id']] = copy.deepcopy(doc)
        return SimpleNamespace(matched_count=int(matched))

    def delete_one(self, query):
        removed = self.docs.pop(query['_id'], None)
        return SimpleNamespace(deleted_count=int(removed is not None))

    def delete_many(self, query):
        count = len(self.docs)
        self.docs.clear()
        return SimpleNamespace(deleted_count=count)

    def find(self, query=None, sort=None):
        docs = [copy.deepcopy(d) for d in self.docs.values()]
        if sort:
            key, direction = sort[0]
            docs.sort(key=lambda d: d.get(key) or '', reverse=direction < 0)
        return iter(docs)

class GatedStore(LocalStorageStore):
    """Local store whose writes block until the gate opens."""

    name = 'gated'

    def __init__(self, path):
        super().__init__(path)
        self.gate = threading.Event()

    def replace(self, record):
        self.gate.wait(timeout=10)
        return super().replace(record)

    def remove(self, order_id):
        self.gate.wait(timeout=10)
        return super().remove(order_id)

class FailingStore(LocalStorageStore):
    """Local store whose writes fail a set number of times."""

    name = 'failing'

    def __init__(self, path, failures=None):
        super().__init__(path)
        self.failures = failures
        self.attempts = 0

    def _maybe_fail(self):
        self.attempts += 1
        if self.failures is None or self.attempts <= self.failures:
            raise PersistenceError("secondary unreachable")

    def replace(self, record):
        self._maybe_fail()
        return super().replace(record)

    def remove(self, order_id):
        self._maybe_fail()
        return super().remove(order_id)

@pytest.fixture
def local_store(tmp_path):
    return LocalStorageStore(tmp_path / 'local.json')

@pytest.fixture
def device_store(tmp_path):
    store = DeviceStorageStore(tmp_path / 'device.db')
    yield store
    store.close()

@pytest.fixture
def relational_store(tmp_path):
    store = RelationalStore(f"sqlite:///{tmp_path / 'orders.db'}")
    yield store
    store.close()

@pytest.fixture
def document_store():
    return DocumentStore(FakeCollection())

@pytest.fixture(params=['local', 'device', 'relational', 'document'])
def any_store(request):
    """Each storage backend in turn."""
    return request.getfixturevalue(f"{request.param}_store")

@pytest.fixture
def background_queue():
    queue = BackgroundQueue()
    yield queue
    queue.stop(wait=False)

@pytest.fixture
def repository(local_store, background_queue):
    """Repository over a local primary and no secondaries."""
    return OrderRepository(local_store, background_queue=background_queue)

@pytest.fixture
def secondary_store(tmp_path):
    return LocalStorageStore(tmp_path / 'secondary.json')

@pytest.fixture
def mirrored_repository(local_store, secondary_store, background_queue):
    """Repository over a local primary mirrored to a second local store."""
    return OrderRepository(local_store, [secondary_store], background_queue)
