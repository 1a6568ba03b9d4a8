"""
Configuration management for the orderbook CLI.
Handles loading and validating configuration from environment variables and files.
"""

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

from ..storage import BACKENDS

@dataclass
class Config:
    """Configuration settings for the orderbook CLI."""

    # Primary storage
    storage_backend: str = 'local'
    local_storage_path: Path = Path('orderbook.json')
    device_storage_path: Path = Path('orderbook.db')
    database_url: Optional[str] = None

    # Document database settings
    document_db_url: Optional[str] = None
    document_db_name: str = 'orderflow'
    orders_collection: str = 'orders'

    # Background sync settings
    secondary_backend: Optional[str] = None
    remote_database_url: Optional[str] = None
    sync_max_retries: int = 0

    # Logging settings
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'Config':
        """Create configuration from environment variables.

        Args:
            env_file: Optional path to .env file

        Returns:
            Config: Configuration instance
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        return cls(
            storage_backend=os.getenv('STORAGE_BACKEND', 'local').lower(),
            local_storage_path=Path(os.getenv('LOCAL_STORAGE_PATH', 'orderbook.json')),
            device_storage_path=Path(os.getenv('DEVICE_STORAGE_PATH', 'orderbook.db')),
            database_url=os.getenv('DATABASE_URL') or None,
            document_db_url=os.getenv('DOCUMENT_DB_URL') or None,
            document_db_name=os.getenv('DOCUMENT_DB_NAME', 'orderflow'),
            orders_collection=os.getenv('ORDERS_COLLECTION', 'orders'),
            secondary_backend=(os.getenv('SECONDARY_BACKEND') or '').lower() or None,
            remote_database_url=os.getenv('REMOTE_DATABASE_URL') or None,
            sync_max_retries=int(os.getenv('SYNC_MAX_RETRIES', '0')),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper()
        )

    def validate(self) -> bool:
        """Validate configuration settings.

        Returns:
            bool: True if configuration is valid

        Raises:
            ValueError: If a setting is invalid
        """
        if self.storage_backend not in BACKENDS:
            raise ValueError(f"storage_backend must be one of: {', '.join(BACKENDS)}")
        if self.secondary_backend is not None:
            if self.secondary_backend not in BACKENDS:
                raise ValueError(f"secondary_backend must be one of: {', '.join(BACKENDS)}")
            if self.secondary_backend == self.storage_backend:
                raise ValueError("secondary_backend must differ from storage_backend")
        if self.sync_max_retries < 0:
            raise ValueError("sync_max_retries cannot be negative")

        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        if self.log_level not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")

        return True
