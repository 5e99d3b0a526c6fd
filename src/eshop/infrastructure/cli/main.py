import click
import uvicorn

from eshop.infrastructure.bootstrap import settings
from eshop.infrastructure.cli.order_commands import order_list, order_place
from eshop.infrastructure.cli.product_commands import product_show, product_update
from eshop.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """eshop — order placement backend"""
    configure_logging(settings())


@cli.group()
def order() -> None:
    """Place and list orders."""


@cli.group()
def product() -> None:
    """Look up and reprice products."""


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port.")
def serve(host: str, port: int) -> None:
    """Run the HTTP API."""
    # A single worker: row locks live in this process.
    uvicorn.run("eshop.infrastructure.api.app:app", host=host, port=port, workers=1)


# Register subcommands
order.add_command(order_list)
order.add_command(order_place)
product.add_command(product_show)
product.add_command(product_update)
