"""
Core CLI implementation for the orderbook package.
"""

import click

from .config import Config
from .logging import setup_logging, get_logger
from ..commands import (
    add_order,
    update_order,
    delete_order,
    list_orders,
    suggest,
    price_list,
    sync,
    test_connection
)

@click.group()
@click.option('--debug', is_flag=True, help='Enable detailed debug output')
@click.pass_context
def cli(ctx, debug: bool):
    """Purchase order book and price list"""
    # Store debug flag in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    try:
        config = Config.from_env()
        config.validate()
    except ValueError as e:
        click.echo(f"Error initializing configuration: {str(e)}", err=True)
        ctx.exit(1)

    setup_logging(debug=debug, level=config.log_level)
    logger = get_logger('cli')
    if debug:
        logger.debug(f"Using '{config.storage_backend}' storage")
    ctx.obj['config'] = config

cli.add_command(add_order)
cli.add_command(update_order)
cli.add_command(delete_order)
cli.add_command(list_orders)
cli.add_command(suggest)
cli.add_command(price_list)
cli.add_command(sync)
cli.add_command(test_connection)
