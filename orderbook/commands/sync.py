"""Manual sync commands for secondary and remote stores."""

import click

from ..cli.base import BaseCommand, command_error_handler
from ..cli.config import Config

class SyncCommand(BaseCommand):
    """Run one reconciliation action and wait for it to finish."""
    
    ACTIONS = ('migrate', 'push', 'pull')
    
    def __init__(self, config: Config, action: str):
        super().__init__(config)
        if action not in self.ACTIONS:
            raise ValueError(f"Unknown sync action: {action}")
        self.action = action
    
    @command_error_handler
    def execute(self) -> int:
        repository = self.repository
        reconciler = repository.reconciler
        if not reconciler.enabled:
            click.secho("No secondary or remote store is configured; nothing to sync", fg='yellow')
            return 0
        
        # build_repository already scheduled the startup migration
        if self.action == 'push':
            reconciler.schedule_push()
        elif self.action == 'pull':
            reconciler.schedule_pull()
        
        repository.queue.join()
        failures = repository.queue.error_tracker.total
        if failures:
            click.secho(f"Sync {self.action} finished with {failures} failed task(s)", fg='red')
            return 1
        
        names = ', '.join(s.name for s in reconciler.active_secondaries)
        click.secho(f"Sync {self.action} finished ({names})", fg='green')
        return 0

@click.group()
def sync():
    """Mirror orders to and from secondary stores."""
    pass

@sync.command('migrate')
@click.pass_context
def migrate(ctx):
    """Seed empty secondary stores from the primary."""
    ctx.exit(SyncCommand(Config.from_env(), 'migrate').execute())

@sync.command('push')
@click.pass_context
def push(ctx):
    """Upsert every local order into the secondary stores."""
    ctx.exit(SyncCommand(Config.from_env(), 'push').execute())

@sync.command('pull')
@click.pass_context
def pull(ctx):
    """Upsert every secondary order into the primary store."""
    ctx.exit(SyncCommand(Config.from_env(), 'pull').execute())
