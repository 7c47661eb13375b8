"""Product import command for product CSV files."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import click

from ...cli.base import FileInputCommand, command_error_handler
from ...cli.config import Config
from ...processors.product_import import ProductImportProcessor
from ...store import ProductStore

class ImportProductsCommand(FileInputCommand):
    """Import products from a CSV file."""

    def __init__(
        self,
        config: Config,
        input_file: Path,
        output_file: Optional[Path] = None,
        batch_size: Optional[int] = None,
        store: Optional[ProductStore] = None
    ):
        """Initialize command.

        Args:
            config: Application configuration
            input_file: Path to input CSV file
            output_file: Optional path to save results as JSON
            batch_size: Rows per batch, defaults to the configured size
            store: Optional product store to import into
        """
        super().__init__(config, input_file, output_file, store)
        self.batch_size = batch_size or config.batch_size

    def save_results(self, results: Dict[str, Any]) -> None:
        with open(self.output_file, 'w') as f:
            json.dump(results, f, indent=2, default=str)
        click.echo(f"\nDetailed results saved to {self.output_file}")

    @command_error_handler
    def execute(self) -> Optional[int]:
        """Execute the command.

        Returns:
            1 when any batch failed, otherwise None
        """
        if not self.validate():
            raise click.Abort()

        processor = ProductImportProcessor(
            self.store.session_manager,
            batch_size=self.batch_size,
            debug=self.debug
        )

        self.logger.info(f"Importing products from {self.input_file}")
        results = processor.process_file(self.input_file)
        stats = results['summary']['stats']

        click.echo("\nImport Summary:")
        click.echo(f"Rows read: {stats['total_products']}")
        click.echo(f"Created: {stats['created']}")
        click.echo(f"Skipped (already present): {stats['skipped']}")
        click.echo(f"Invalid rows: {stats['validation_errors']}")
        click.echo(f"Successful batches: {stats['successful_batches']}")

        if self.output_file:
            self.save_results(results)

        if stats['failed_batches'] > 0:
            click.secho(f"Failed batches: {stats['failed_batches']}", fg='red')
            return 1
        return None
