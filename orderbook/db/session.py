"""Database session management."""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

class SessionManager:
    """Manages database sessions.

    Stores are used from the caller's thread and from the background sync
    worker, so every unit of work gets its own session.
    """

    def __init__(self, database_url: str):
        """Initialize session manager with database URL."""
        self.database_url = database_url
        self.engine = create_engine(database_url, **self._engine_options(database_url))
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def _engine_options(database_url: str) -> dict:
        url = make_url(database_url)
        if url.get_backend_name() != 'sqlite':
            return {'pool_pre_ping': True}
        options = {'connect_args': {'check_same_thread': False}}
        if url.database in (None, '', ':memory:'):
            # One shared connection, otherwise each thread sees an empty database
            options['poolclass'] = StaticPool
        return options

    def get_session(self) -> Session:
        """Get a new database session."""
        session = self.SessionLocal()
        self.logger.debug(f"Created new session: {id(session)}")
        return session

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Provide a session that commits on success and rolls back on error."""
        session = self.get_session()
        try:
            yield session
            self.logger.debug("Committing session")
            session.commit()
        except Exception:
            self.logger.debug("Rolling back session")
            session.rollback()
            raise
        finally:
            self.logger.debug("Closing session")
            session.close()

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()
