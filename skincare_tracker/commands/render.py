"""Text rendering of products for terminal output."""

import click

from ..inventory.dates import Instant, format_date
from ..inventory.product import Product
from ..inventory.status import COLORS, classify, expiration_urgency

def product_line(product: Product, now: Instant = None) -> None:
    """One line per product: status badge, name, type and expiration."""
    info = classify(product, now)
    badge = click.style(f"[{info.label}]", fg=info.color)
    expires = click.style(
        format_date(product.expiration_date),
        fg=COLORS[expiration_urgency(product, now)]
    )
    click.echo(f"  {badge} {product.display_name} ({product.type})  Expires: {expires}  id: {product.id}")

def product_details(product: Product, now: Instant = None) -> None:
    """Full card for a single product."""
    info = classify(product, now)
    click.secho(product.brand, bold=True)
    click.echo(f"  {product.name}")
    click.echo(f"  Type:     {product.type}")
    click.echo(f"  Status:   {click.style(info.label, fg=info.color)}")
    click.echo(f"  Expires:  {format_date(product.expiration_date)}")
    click.echo(f"  Opened:   {format_date(product.date_opened)}")
    click.echo(f"  Finished: {format_date(product.date_finished)}")
    price = f"${product.price:.2f}" if product.price is not None else "Not set"
    click.echo(f"  Price:    {price}")
    if product.tags:
        click.echo(f"  Tags:     {', '.join(product.tags)}")
    if product.notes:
        click.echo(f"  Notes:    {product.notes}")
    click.echo(f"  id:       {product.id}")
