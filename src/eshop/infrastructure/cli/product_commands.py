"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from eshop.domain.exceptions import DomainException
from eshop.infrastructure.bootstrap import show_product_handler, update_product_handler


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a product with its current price and stock."""
    try:
        dto = show_product_handler().handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'ID':<16} {'Title':<24} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 59)
    click.echo(f"{dto.id:<16} {dto.title:<24} {'$' + format(dto.price, '.2f'):>10} {dto.stock:>6}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price."""
    try:
        update_product_handler().handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} price updated to ${price}")
