"""Order entry and history commands."""

import math
from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional, Sequence

import click

from ..cli.base import BaseCommand, command_error_handler
from ..cli.config import Config
from ..entities import Order, Product
from ..reports import HISTORY_SORTS, SUGGESTION_FIELDS, order_history, suggestions

PRODUCT_HELP = 'Line item as "name|quantity|price|category|brand[|compatibility]"; repeatable'

def parse_product(value: str) -> Product:
    """Parse a product option into a Product with a fresh id.

    Raises:
        click.BadParameter: If the value is malformed
    """
    parts = [p.strip() for p in value.split('|')]
    if len(parts) not in (5, 6):
        raise click.BadParameter(f"expected 5 or 6 '|'-separated fields, got {len(parts)}: {value!r}")

    name, quantity, price, category, brand = parts[:5]
    compatibility = parts[5] if len(parts) == 6 else ''
    try:
        qty = int(quantity)
        unit_price = float(price)
    except ValueError:
        raise click.BadParameter(f"quantity and price must be numbers: {value!r}")
    if not math.isfinite(unit_price):
        raise click.BadParameter(f"price must be a finite number: {value!r}")

    return Product.new(name, qty, unit_price, category, brand, compatibility)

def echo_order(order: Order) -> None:
    """Print one order with its line items."""
    click.echo(f"\n{order.id}  {order.date.isoformat()}  {order.supplier}  total {order.total_amount:.2f}")
    for product in order.products:
        extra = f" [{product.compatibility}]" if product.compatibility else ''
        click.echo(
            f"  - {product.name} ({product.category} / {product.brand}){extra}: "
            f"{product.quantity} x {product.price:.2f} = {product.line_total:.2f}"
        )

class AddOrderCommand(BaseCommand):
    """Record a new purchase order."""

    def __init__(self, config: Config, supplier: str, products: Sequence[Product],
                 order_date: Optional[date] = None):
        super().__init__(config)
        self.supplier = supplier
        self.products = list(products)
        self.order_date = order_date

    @command_error_handler
    def execute(self) -> Order:
        order = Order.new(self.supplier, self.products, self.order_date)
        stored = self.repository.save_order(order)
        click.secho(f"Order {stored.id} saved ({stored.total_amount:.2f})", fg='green')
        return stored

class UpdateOrderCommand(BaseCommand):
    """Edit an existing order; unspecified fields keep their values."""

    def __init__(self, config: Config, order_id: str, supplier: Optional[str] = None,
                 products: Optional[Sequence[Product]] = None, order_date: Optional[date] = None):
        super().__init__(config)
        self.order_id = order_id
        self.supplier = supplier
        self.products = list(products) if products else None
        self.order_date = order_date

    @command_error_handler
    def execute(self) -> Optional[Order]:
        existing = self.repository.get_order(self.order_id)
        if existing is None:
            click.secho(f"Order {self.order_id} not found", fg='yellow')
            return None

        changes = {}
        if self.supplier is not None:
            changes['supplier'] = self.supplier
        if self.products is not None:
            changes['products'] = self.products
        if self.order_date is not None:
            changes['date'] = self.order_date

        stored = self.repository.update_order(replace(existing, **changes))
        click.secho(f"Order {stored.id} updated ({stored.total_amount:.2f})", fg='green')
        return stored

class DeleteOrderCommand(BaseCommand):
    """Delete an order by id."""

    def __init__(self, config: Config, order_id: str):
        super().__init__(config)
        self.order_id = order_id

    @command_error_handler
    def execute(self) -> None:
        self.repository.delete_order(self.order_id)
        click.secho(f"Order {self.order_id} deleted", fg='green')

class ListOrdersCommand(BaseCommand):
    """Show order history."""

    def __init__(self, config: Config, supplier: Optional[str] = None,
                 sort_by: str = 'date', limit: Optional[int] = None):
        super().__init__(config)
        self.supplier = supplier
        self.sort_by = sort_by
        self.limit = limit

    @command_error_handler
    def execute(self) -> List[Order]:
        orders = order_history(self.repository.get_orders(), self.supplier, self.sort_by)
        if self.limit:
            orders = orders[:self.limit]

        if not orders:
            click.echo("No orders found")
            return orders

        for order in orders:
            echo_order(order)
        return orders

class SuggestCommand(BaseCommand):
    """List values already entered, for filling in a new order."""

    def __init__(self, config: Config, field: Optional[str] = None):
        super().__init__(config)
        self.field = field

    @command_error_handler
    def execute(self) -> Dict[str, List[str]]:
        values = suggestions(self.repository.get_orders())
        if self.field:
            values = {self.field: values[self.field]}

        for field, found in values.items():
            click.echo(f"{field}:")
            if not found:
                click.echo("  (none)")
            for value in found:
                click.echo(f"  {value}")
        return values

def _products_option(ctx, param, values) -> List[Product]:
    return [parse_product(v) for v in values]

@click.command('add')
@click.option('--supplier', required=True, help='Supplier name')
@click.option('--date', 'order_date', type=click.DateTime(formats=['%Y-%m-%d']), help='Order date (defaults to today)')
@click.option('--product', 'products', multiple=True, required=True, callback=_products_option, help=PRODUCT_HELP)
def add_order(supplier: str, order_date, products: List[Product]):
    """Record a new purchase order."""
    config = Config.from_env()
    command = AddOrderCommand(config, supplier, products, order_date.date() if order_date else None)
    command.execute()

@click.command('update')
@click.argument('order_id')
@click.option('--supplier', help='New supplier name')
@click.option('--date', 'order_date', type=click.DateTime(formats=['%Y-%m-%d']), help='New order date')
@click.option('--product', 'products', multiple=True, callback=_products_option,
              help=PRODUCT_HELP + '; replaces all line items')
def update_order(order_id: str, supplier: Optional[str], order_date, products: List[Product]):
    """Edit an existing order."""
    config = Config.from_env()
    command = UpdateOrderCommand(config, order_id, supplier, products, order_date.date() if order_date else None)
    command.execute()

@click.command('delete')
@click.argument('order_id')
def delete_order(order_id: str):
    """Delete an order."""
    config = Config.from_env()
    command = DeleteOrderCommand(config, order_id)
    command.execute()

@click.command('list')
@click.option('--supplier', help='Only show orders from this supplier')
@click.option('--sort-by', type=click.Choice(HISTORY_SORTS), default='date', help='Sort order')
@click.option('--limit', type=int, help='Maximum number of orders to show')
def list_orders(supplier: Optional[str], sort_by: str, limit: Optional[int]):
    """Show order history."""
    config = Config.from_env()
    command = ListOrdersCommand(config, supplier, sort_by, limit)
    command.execute()

@click.command('suggest')
@click.option('--field', type=click.Choice(SUGGESTION_FIELDS), help='Only show values for this field')
def suggest(field: Optional[str]):
    """Show previously entered suppliers, names, categories and brands."""
    config = Config.from_env()
    command = SuggestCommand(config, field)
    command.execute()
