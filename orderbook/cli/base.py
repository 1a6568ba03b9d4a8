"""
Base command infrastructure for the orderbook CLI.
Provides common functionality and utilities for all commands.
"""

import functools
import click
import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

from .config import Config
from ..exceptions import OrderbookError
from ..repository import OrderRepository, build_repository

class BaseCommand(ABC):
    """Base class for all CLI commands."""

    def __init__(self, config: Config):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self._repository: Optional[OrderRepository] = None

        # Get debug status from click context
        ctx = click.get_current_context(silent=True)
        self.debug = bool(ctx and ctx.obj and ctx.obj.get('debug'))
        if self.debug:
            self.logger.debug(f"Debug mode enabled for {self.__class__.__name__}")

    @property
    def repository(self) -> OrderRepository:
        """Get or create the order repository."""
        if self._repository is None:
            if self.debug:
                self.logger.debug(f"Opening '{self.config.storage_backend}' storage")
            self._repository = build_repository(self.config)
        return self._repository

    def close(self) -> None:
        """Drain background sync and report its failures."""
        if self._repository is None:
            return
        repository = self._repository
        self._repository = None
        repository.close(wait=True)
        repository.queue.error_tracker.log_summary(self.logger)

    @abstractmethod
    def execute(self) -> None:
        """Execute the command. Must be implemented by subclasses."""
        pass

    def validate(self) -> bool:
        """Validate command configuration and requirements.

        Returns:
            bool: True if validation passes, False otherwise
        """
        if self.debug:
            self.logger.debug("Validating command configuration")
        try:
            return self.config.validate()
        except ValueError as e:
            self.logger.error(f"Invalid configuration: {e}")
            return False

def command_error_handler(f):
    """Decorator to handle command execution errors consistently."""
    @functools.wraps(f)
    def wrapper(self, *args, **kwargs):
        start = time.time()
        if not self.validate():
            raise click.Abort()
        try:
            if self.debug:
                self.logger.debug(f"Starting command execution: {f.__name__}")

            result = f(self, *args, **kwargs)

            if self.debug:
                self.logger.debug(f"Command completed in {time.time() - start:.3f}s")

            return result

        except OrderbookError as e:
            click.secho(f"Failed: {e}", fg='red', err=True)
            if self.debug:
                self.logger.debug(f"Command failed with error: {str(e)}", exc_info=True)
            raise click.Abort()
        finally:
            self.close()
    return wrapper
