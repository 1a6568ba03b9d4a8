"""Store interface shared by every storage backend.

Stores deal in raw records (the dict layout produced by
``Order.to_record``). Filtering, normalization and sorting happen in the
repository, so a store only has to persist and return what it was given.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List
import logging

Record = Dict[str, Any]

class OrderStore(ABC):
    """Abstract base class for order storage backends."""
    
    name = 'store'
    available = True
    # Key/value backends hold one blob; cleaned reads are written back
    prunes_on_read = False
    
    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
    
    @abstractmethod
    def load(self) -> List[Record]:
        """Return every stored record.
        
        Raises:
            PersistenceError: If the backend cannot be read
        """
        pass
    
    @abstractmethod
    def insert(self, record: Record) -> None:
        """Append a record.
        
        Raises:
            PersistenceError: If the write is rejected, including when a
                record with the same id already exists
        """
        pass
    
    @abstractmethod
    def replace(self, record: Record) -> bool:
        """Replace the record sharing this record's id.
        
        Returns:
            True if a record was replaced, False if none matched
        """
        pass
    
    @abstractmethod
    def remove(self, order_id: str) -> bool:
        """Remove a record by id.
        
        Returns:
            True if a record was removed, False if it was absent
        """
        pass
    
    @abstractmethod
    def replace_all(self, records: List[Record]) -> None:
        """Overwrite the store's entire contents."""
        pass
    
    def upsert(self, record: Record) -> None:
        """Replace a record, inserting it when no record matches."""
        if not self.replace(record):
            self.insert(record)
    
    def close(self) -> None:
        """Release any held resources."""
        pass
    
    def __repr__(self):
        """Return string representation."""
        return f'<{self.__class__.__name__}(name="{self.name}", available={self.available})>'
