"""Key/value entry used by on-device storage."""

from sqlalchemy import Column, String, Text

from .base import Base

class KeyValueEntry(Base):
    """Single key/value pair; values are JSON strings."""
    
    __tablename__ = 'kv_store'
    
    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    
    def __repr__(self):
        """Return string representation."""
        return f'<KeyValueEntry(key="{self.key}", size={len(self.value or "")})>'
