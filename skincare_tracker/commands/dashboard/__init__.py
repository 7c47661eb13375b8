"""
Dashboard command: overview of the collection and upcoming expirations.
"""

from typing import Optional

import click

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config
from ...inventory.dashboard import summarize
from ...inventory.dates import format_date
from ...store import ProductStore

class DashboardCommand(BaseCommand):
    """Show status counts, upcoming expirations and product types."""

    def __init__(self, config: Config, limit: Optional[int] = None, store: Optional[ProductStore] = None):
        super().__init__(config, store)
        self.limit = config.upcoming_limit if limit is None else limit

    @command_error_handler
    def execute(self) -> None:
        """Execute the command."""
        summary = summarize(self.store.list(), upcoming_limit=self.limit)

        if self.as_json:
            self.echo_json(summary.to_dict())
            return

        click.secho("\nDashboard", bold=True)
        click.echo(f"Total Products: {summary.total}")
        click.secho(f"Active Products: {summary.active}", fg='green')
        click.secho(f"Expiring Soon (next 30 days): {summary.expiring_soon}", fg='yellow')
        click.secho(f"Expired: {summary.expired}", fg='red')
        click.secho(f"Finished: {summary.finished}", fg='blue')

        click.secho("\nUpcoming Expirations", bold=True)
        if not summary.upcoming:
            click.echo("  Nothing expiring")
        for item in summary.upcoming:
            product = item.product
            click.echo(
                f"  {product.display_name} ({product.type})  "
                f"{click.style(format_date(product.expiration_date), fg=item.status.color)}  {item.status.label}"
            )

        click.secho("\nProduct Types", bold=True)
        if not summary.type_counts:
            click.echo("  No products")
        for product_type, count in summary.type_counts:
            click.echo(f"  {product_type}: {count}")

__all__ = ['DashboardCommand']
