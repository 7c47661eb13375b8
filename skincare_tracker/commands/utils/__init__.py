"""
Utility commands for the skincare tracker CLI.
Provides helper commands for setup, diagnostics and shelf-life lookups.
"""

from datetime import date
from typing import Optional

import click

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config
from ...inventory.dates import format_date
from ...utils.shelf_life import SHELF_LIFE_SUGGESTIONS, shelf_life_hint, suggest_expiration

class TestConnectionCommand(BaseCommand):
    """Command to test database connectivity."""

    @command_error_handler
    def execute(self) -> None:
        """Execute the connection test."""
        self.logger.info("Testing database connection...")
        self.store.ping()
        click.secho("Successfully connected to the database!", fg='green')

class InitDbCommand(BaseCommand):
    """Create the products table."""

    @command_error_handler
    def execute(self) -> None:
        """Execute the command."""
        self.store.create_schema()
        click.secho("Database schema is ready", fg='green')

class ShelfLifeCommand(BaseCommand):
    """Show shelf-life suggestions, optionally with a suggested expiration date."""

    def __init__(self, config: Config, product_type: Optional[str] = None, opened: Optional[date] = None):
        super().__init__(config)
        self.product_type = product_type
        self.opened = opened

    @command_error_handler
    def execute(self) -> None:
        """Execute the command."""
        if not self.product_type:
            click.echo("Suggested shelf life after opening:")
            for product_type, months in SHELF_LIFE_SUGGESTIONS.items():
                click.echo(f"  {product_type}: {months} months")
            return

        hint = shelf_life_hint(self.product_type)
        if not hint:
            click.echo(f"No shelf-life suggestion for {self.product_type}")
            return
        click.echo(hint)

        if self.opened:
            suggested = suggest_expiration(self.opened, self.product_type)
            click.echo(f"Opened {format_date(self.opened)}: expires around {format_date(suggested)}")

__all__ = ['TestConnectionCommand', 'InitDbCommand', 'ShelfLifeCommand']
