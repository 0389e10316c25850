import click

from marketplace.domain.exceptions import DomainException
from marketplace.infrastructure.bootstrap import customer_id
from marketplace.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from marketplace.infrastructure.cli.catalog_commands import (
    catalog_add,
    catalog_list,
    catalog_remove,
    catalog_update,
)
from marketplace.infrastructure.cli.checkout_commands import checkout
from marketplace.infrastructure.cli.order_commands import (
    order_advance,
    order_cancel,
    order_list,
    order_set_status,
    order_show,
)
from marketplace.infrastructure.logging import add_context, configure_logging


@click.group()
def cli() -> None:
    """Marketplace — multi-vendor cart, checkout and orders"""
    configure_logging()
    try:
        add_context(customer_id=customer_id())
    except DomainException as exc:
        raise click.ClickException(str(exc))


@cli.group()
def cart() -> None:
    """Manage the cart."""


@cli.group()
def catalog() -> None:
    """Manage catalog items."""


@cli.group()
def order() -> None:
    """Track and update orders."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
catalog.add_command(catalog_add)
catalog.add_command(catalog_list)
catalog.add_command(catalog_remove)
catalog.add_command(catalog_update)
order.add_command(order_advance)
order.add_command(order_cancel)
order.add_command(order_list)
order.add_command(order_set_status)
order.add_command(order_show)
cli.add_command(checkout)
