"""
Utility commands for the orderbook CLI.
Provides helper commands for diagnostics.
"""

import click

from ..cli.base import BaseCommand, command_error_handler
from ..cli.config import Config
from ..exceptions import PersistenceError

class TestConnectionCommand(BaseCommand):
    """Command to check every configured store can be read."""
    
    def __init__(self, config: Config):
        super().__init__(config)
    
    @command_error_handler
    def execute(self) -> bool:
        """Execute the connection test."""
        self.logger.info("Testing storage connections...")
        repository = self.repository
        stores = [repository.primary, *repository.reconciler.secondaries]
        
        ok = True
        for store in stores:
            if not store.available:
                click.secho(f"{store.name}: unavailable ({store.reason})", fg='yellow')
                ok = ok and store is not repository.primary
                continue
            try:
                count = len(store.load())
            except PersistenceError as e:
                self.logger.error(f"Connection to '{store.name}' failed: {e}")
                click.secho(f"{store.name}: failed ({e})", fg='red')
                ok = False
                continue
            click.secho(f"{store.name}: ok ({count} orders)", fg='green')
        
        if not ok:
            raise click.Abort()
        return ok

@click.command('test-connection')
def test_connection():
    """Test storage connectivity"""
    command = TestConnectionCommand(Config.from_env())
    command.execute()
