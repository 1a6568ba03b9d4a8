"""Price list command."""

from pathlib import Path
from typing import Optional

import click
import pandas as pd

from ..cli.base import BaseCommand, command_error_handler
from ..cli.config import Config
from ..reports import SORT_OPTIONS, build_price_list, export_price_list, price_list_stats

class PriceListCommand(BaseCommand):
    """Show or export every product ever ordered."""
    
    def __init__(self, config: Config, sort_by: str = 'none', query: Optional[str] = None,
                 output_file: Optional[Path] = None):
        super().__init__(config)
        self.sort_by = sort_by
        self.query = query
        self.output_file = output_file
    
    @command_error_handler
    def execute(self) -> pd.DataFrame:
        orders = self.repository.get_orders()
        df = build_price_list(orders, self.sort_by, self.query)
        stats = price_list_stats(df)
        
        if self.output_file:
            rows = export_price_list(df, self.output_file)
            click.secho(f"Exported {rows} products to {self.output_file}", fg='green')
            return df
        
        if df.empty:
            click.echo("No products found. Create your first order to get started.")
            return df
        
        for row in df.itertuples(index=False):
            click.echo(
                f"{row.name:<30} {row.category:<15} {row.brand:<15} {row.supplier:<20} "
                f"{row.quantity:>5} {row.price:>10.2f} {row.total:>10.2f}"
            )
        click.echo(f"\nTotal items: {stats['total_items']}")
        click.echo(f"Total value: {stats['total_value']:.2f}")
        return df

@click.command('price-list')
@click.option('--sort-by', type=click.Choice(SORT_OPTIONS), default='none', help='Sort products by this field')
@click.option('--search', 'query', help='Only show products matching this text')
@click.option('--output', type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
              help='Export the price list to a CSV file')
def price_list(sort_by: str, query: Optional[str], output: Optional[Path]):
    """Show the consolidated price list."""
    config = Config.from_env()
    command = PriceListCommand(config, sort_by, query, output)
    command.execute()
