"""Placeholder returned when a configured backend cannot be used."""

from typing import List

from ..exceptions import PersistenceError
from .base import OrderStore, Record

class UnavailableStore(OrderStore):
    """Store variant for a backend that is missing its configuration.
    
    Reads return nothing and writes fail, so a primary that is unavailable
    surfaces errors to the caller while an unavailable secondary is simply
    skipped by the reconciler.
    """
    
    available = False
    
    def __init__(self, name: str, reason: str):
        super().__init__()
        self.name = name
        self.reason = reason
    
    def _fail(self):
        raise PersistenceError(f"Storage backend '{self.name}' is unavailable: {self.reason}")
    
    def load(self) -> List[Record]:
        return []
    
    def insert(self, record: Record) -> None:
        self._fail()
    
    def replace(self, record: Record) -> bool:
        self._fail()
    
    def remove(self, order_id: str) -> bool:
        self._fail()
    
    def replace_all(self, records: List[Record]) -> None:
        self._fail()
