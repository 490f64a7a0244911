"""
SellerCenter catalog client - CLI Entry Point.
CLI using Click and Rich.
"""

import json
import sys
from typing import Optional

import click
import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sellercenter.config.settings import get_settings
from sellercenter.models.schemas import Product, Products, ProductStatusFilter
from sellercenter.services.product_manager import create_product_manager
from sellercenter.utils.errors import SellerCenterError
from sellercenter.utils.logger import setup_logging

console = Console()

DATETIME_FORMATS = ["%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"]

# =============================================================================
# Helper Functions
# =============================================================================

def setup_logger(verbose: bool):
    """Configure logging based on verbosity."""
    setup_logging(level="DEBUG" if verbose else "WARNING", json_format=False)


def fail(title: str, error: Exception) -> None:
    console.print(Panel(str(error), title=f"[bold red]{title}[/bold red]", border_style="red"))
    sys.exit(1)


def product_to_json(product: Product) -> dict:
    data = product.model_dump(mode="json", exclude={"categories"})
    data["categories"] = [category.wire_value for category in product.categories]
    return data


def products_table(products: Products) -> Table:
    table = Table(title=f"Products ({len(products)})", header_style="bold magenta")
    table.add_column("Seller SKU")
    table.add_column("Name")
    table.add_column("Brand")
    table.add_column("Status")
    table.add_column("Price", justify="right")
    table.add_column("Images", justify="right")

    for product in products:
        table.add_row(
            product.seller_sku,
            product.name,
            product.brand.name if product.brand else "-",
            product.status or "-",
            format(product.price, "f") if product.price is not None else "-",
            str(len(product.images)),
        )
    return table


# =============================================================================
# CLI Group
# =============================================================================

@click.group()
@click.version_option(version="1.0.0")
def cli():
    """SellerCenter catalog client"""
    pass


# =============================================================================
# Commands
# =============================================================================

@cli.command()
@click.option("--created-before", type=click.DateTime(DATETIME_FORMATS), help="Created before this time")
@click.option("--created-after", type=click.DateTime(DATETIME_FORMATS), help="Created after this time")
@click.option("--updated-before", type=click.DateTime(DATETIME_FORMATS), help="Updated before this time")
@click.option("--updated-after", type=click.DateTime(DATETIME_FORMATS), help="Updated after this time")
@click.option("--search", help="Free text search")
@click.option(
    "--filter",
    "status_filter",
    help=f"Status filter ({', '.join(f.value for f in ProductStatusFilter)})",
)
@click.option("--limit", type=click.IntRange(min=0), help="Maximum number of products")
@click.option("--offset", type=click.IntRange(min=0), help="Number of products to skip")
@click.option("--sku", "skus", multiple=True, help="Seller SKU to look up (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.option("--verbose", is_flag=True, help="Detailed logging")
def products(
    created_before,
    created_after,
    updated_before,
    updated_after,
    search: Optional[str],
    status_filter: Optional[str],
    limit: Optional[int],
    offset: Optional[int],
    skus: tuple[str, ...],
    as_json: bool,
    verbose: bool,
):
    """List catalog products."""
    setup_logger(verbose)

    criteria = {
        "created_before": created_before,
        "created_after": created_after,
        "updated_before": updated_before,
        "updated_after": updated_after,
        "search": search,
        "filter": status_filter,
        "limit": limit,
        "offset": offset,
        "seller_skus": list(skus) if skus else None,
    }

    try:
        with create_product_manager(get_settings()) as manager:
            result = manager.get_products_from_parameters(
                **{name: value for name, value in criteria.items() if value is not None}
            )
    except ValidationError as e:
        fail("Configuration Error", e)
    except SellerCenterError as e:
        fail("Request Failed", e)
    except httpx.HTTPError as e:
        fail("Transport Error", e)

    if as_json:
        console.print_json(json.dumps([product_to_json(p) for p in result]))
    else:
        console.print(products_table(result))


@cli.command()
@click.argument("skus", nargs=-1, required=True)
@click.option("--verbose", is_flag=True, help="Detailed logging")
def remove(skus: tuple[str, ...], verbose: bool):
    """
    Remove products from the catalog.

    SKUS: One or more seller SKUs.
    """
    setup_logger(verbose)

    try:
        with create_product_manager(get_settings()) as manager:
            found = manager.get_products_by_seller_sku(list(skus))
            if not len(found):
                console.print("[yellow]None of the given SKUs exist in the catalog.[/yellow]")
                sys.exit(1)
            feed = manager.product_remove(found)
    except ValidationError as e:
        fail("Configuration Error", e)
    except SellerCenterError as e:
        fail("Feed Rejected", e)
    except httpx.HTTPError as e:
        fail("Transport Error", e)

    missing = sorted(set(skus) - set(found.seller_skus()))
    if missing:
        console.print(f"[yellow]Not found: {', '.join(missing)}[/yellow]")
    console.print(f"[green]✓[/green] Remove feed accepted: [cyan]{feed.request_id}[/cyan]")


@cli.command(name="add-image")
@click.argument("sku")
@click.argument("urls", nargs=-1, required=True)
@click.option("--verbose", is_flag=True, help="Detailed logging")
def add_image(sku: str, urls: tuple[str, ...], verbose: bool):
    """
    Attach images to a product.

    SKU: Seller SKU. URLS: One or more image URLs, in display order.
    """
    setup_logger(verbose)

    try:
        with create_product_manager(get_settings()) as manager:
            feed = manager.add_image({sku: list(urls)})
    except ValidationError as e:
        fail("Configuration Error", e)
    except SellerCenterError as e:
        fail("Feed Rejected", e)
    except httpx.HTTPError as e:
        fail("Transport Error", e)

    console.print(f"[green]✓[/green] Image feed accepted: [cyan]{feed.request_id}[/cyan]")


if __name__ == "__main__":
    cli()
