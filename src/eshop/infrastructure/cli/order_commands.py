"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from eshop.application.dto import AddressDetails, CustomerDetails, OrderDTO, PlaceOrderRequest
from eshop.domain.exceptions import DomainException, ValidationError
from eshop.infrastructure.bootstrap import list_orders_handler, place_order_handler


def _parse_items(raw: str) -> list[str]:
    """Parse 'laptop-1,mouse-1,mouse-1' into one product id per unit."""
    ids = [part.strip() for part in raw.split(",")]
    if not all(ids):
        raise click.BadParameter(
            f"Invalid item list '{raw}'. Expected 'ProductId,ProductId,...'."
        )
    return ids


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (user={dto.user_id})")
    click.echo(f"Customer: {dto.customer.first_name} {dto.customer.last_name} <{dto.customer.email}>")
    click.echo(f"Ship to:  {dto.address.street}, {dto.address.zip} {dto.address.city}")
    click.echo(f"Created:  {dto.created_at.strftime('%Y-%m-%d %H:%M UTC')}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        name = item.product.title if item.product else item.product_id
        click.echo(
            f"  {name:<20} {item.quantity:>5} {'$' + format(item.unit_price, '.2f'):>10} "
            f"{'$' + format(item.line_total, '.2f'):>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {'$' + format(dto.total, '.2f'):>20}")


@click.command("place")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--first-name", required=True, help="Customer first name.")
@click.option("--last-name", required=True, help="Customer last name.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--street", required=True, help="Shipping street.")
@click.option("--city", required=True, help="Shipping city.")
@click.option("--zip", "zip_code", required=True, help="Shipping ZIP code.")
@click.option("--items", required=True, help="Product IDs, repeated per unit: 'A,A,B'.")
@click.option("--total", default=None, help="Declared order total (e.g. 59.98).")
def order_place(
    user_id: str,
    first_name: str,
    last_name: str,
    email: str,
    street: str,
    city: str,
    zip_code: str,
    items: str,
    total: str | None,
) -> None:
    """Place an order (reserves stock and clears the user's cart)."""
    request = PlaceOrderRequest(
        customer=CustomerDetails(first_name=first_name, last_name=last_name, email=email),
        address=AddressDetails(street=street, city=city, zip=zip_code),
        item_ids=_parse_items(items),
        total=total,
    )

    try:
        dto = place_order_handler().handle(user_id, request)
    except ValidationError as exc:
        raise click.ClickException("\n".join(exc.messages))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", required=True, help="User whose orders to list.")
def order_list(user_id: str) -> None:
    """List a user's orders, newest first."""
    try:
        orders = list_orders_handler().handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    for i, dto in enumerate(orders):
        if i:
            click.echo()
        _display_order(dto)
