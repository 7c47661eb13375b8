"""
Core CLI implementation for the skincare tracker.
"""

import click
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from .config import Config, OUTPUT_FORMATS
from .logging import setup_logging, get_logger
from ..commands.dashboard import DashboardCommand
from ..commands.products import (
    CLEARABLE_FIELDS,
    TABS,
    AddProductCommand,
    DeleteProductCommand,
    EditProductCommand,
    ListProductsCommand,
    ShowProductCommand,
)
from ..commands.products.import_products import ImportProductsCommand
from ..commands.utils import InitDbCommand, ShelfLifeCommand, TestConnectionCommand
from ..inventory.filtering import ALL, STATUS_CHOICES, FilterCriteria, SortKey
from ..inventory.product import ProductType

DATE = click.DateTime(formats=['%Y-%m-%d'])
TYPE_CHOICE = click.Choice(ProductType.values())

def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.date().isoformat() if value else None

def get_config(ctx: click.Context) -> Config:
    """Configuration loaded by the group, or exit with its error."""
    config = ctx.obj.get('config')
    if config is None:
        click.secho(f"Error initializing configuration: {ctx.obj.get('config_error')}", fg='red', err=True)
        ctx.exit(1)
    return config

@click.group()
@click.option('--debug', is_flag=True, help='Enable detailed debug output')
@click.option('--format', 'output_format', type=click.Choice(OUTPUT_FORMATS), help='Output format (overrides OUTPUT_FORMAT)')
@click.option('--env-file', type=click.Path(exists=True, dir_okay=False, path_type=Path), help='Load settings from this .env file')
@click.pass_context
def cli(ctx, debug: bool, output_format: Optional[str], env_file: Optional[Path]):
    """Skincare product tracker"""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    config = None
    try:
        config = Config.from_env(env_file)
        if output_format:
            config.output_format = output_format
        ctx.obj['config'] = config
    except ValueError as e:
        ctx.obj['config'] = None
        ctx.obj['config_error'] = str(e)

    setup_logging(
        debug=debug,
        level=config.log_level if config else 'WARNING',
        log_dir=config.log_dir if config else None
    )

    logger = get_logger('cli')
    if debug:
        logger.debug("Debug mode enabled")
        if config:
            logger.debug(f"Using database: {config.database_url}")

@cli.command('test-connection')
@click.pass_context
def test_connection(ctx):
    """Test database connectivity"""
    TestConnectionCommand(get_config(ctx)).execute()

@cli.command('init-db')
@click.pass_context
def init_db(ctx):
    """Create the products table if it is missing"""
    InitDbCommand(get_config(ctx)).execute()

@cli.command()
@click.option('--limit', type=int, help='Number of upcoming expirations to show')
@click.pass_context
def dashboard(ctx, limit: Optional[int]):
    """Overview of your products and expiration dates"""
    DashboardCommand(get_config(ctx), limit).execute()

@cli.command('shelf-life')
@click.argument('product_type', required=False, type=TYPE_CHOICE)
@click.option('--opened', type=DATE, help='Date opened (YYYY-MM-DD) to suggest an expiration date')
@click.pass_context
def shelf_life(ctx, product_type: Optional[str], opened: Optional[datetime]):
    """Show suggested shelf life after opening"""
    config = ctx.obj.get('config') or Config(database_url='')
    ShelfLifeCommand(config, product_type, opened.date() if opened else None).execute()

# Product Commands Group
@cli.group()
def products():
    """Manage your skincare product collection"""
    pass

@products.command('list')
@click.option('--search', default='', help='Match name or brand (case-insensitive)')
@click.option('--type', 'product_type', type=click.Choice([ALL] + ProductType.values()), default=ALL, help='Product type')
@click.option('--brand', default=ALL, help='Exact brand')
@click.option('--status', type=click.Choice(STATUS_CHOICES), default=ALL, help='Lifecycle status')
@click.option('--sort', 'sort_by', type=click.Choice([key.value for key in SortKey]), default=SortKey.DEFAULT.value, help='Sort order')
@click.option('--tab', type=click.Choice(TABS), default='all', help='Active (not finished or expired) or finished products')
@click.pass_context
def list_products(ctx, search: str, product_type: str, brand: str, status: str, sort_by: str, tab: str):
    """List products with filters."""
    criteria = FilterCriteria(
        search_term=search,
        type=product_type,
        brand=brand,
        status=status,
        sort_by=sort_by
    )
    ListProductsCommand(get_config(ctx), criteria, tab).execute()

@products.command('show')
@click.argument('product_id')
@click.pass_context
def show_product(ctx, product_id: str):
    """Show a single product."""
    ShowProductCommand(get_config(ctx), product_id).execute()

@products.command('add')
@click.option('--brand', required=True, help='Brand')
@click.option('--name', required=True, help='Product name')
@click.option('--type', 'product_type', required=True, type=TYPE_CHOICE, help='Product type')
@click.option('--opened', type=DATE, help='Date opened (YYYY-MM-DD)')
@click.option('--expires', type=DATE, help='Expiration date (YYYY-MM-DD); suggested from shelf life when omitted')
@click.option('--finished', type=DATE, help='Date finished (YYYY-MM-DD)')
@click.option('--price', type=float, help='Price')
@click.option('--notes', help='Notes')
@click.option('--tag', 'tags', multiple=True, help='Tag (repeatable)')
@click.pass_context
def add_product(ctx, brand, name, product_type, opened, expires, finished, price, notes, tags: Tuple[str, ...]):
    """Add a product."""
    values = {
        'brand': brand,
        'name': name,
        'type': product_type,
        'date_opened': _iso(opened),
        'expiration_date': _iso(expires),
        'date_finished': _iso(finished),
        'price': price,
        'notes': notes,
    }
    AddProductCommand(get_config(ctx), values, tags).execute()

@products.command('edit')
@click.argument('product_id')
@click.option('--brand', help='Brand')
@click.option('--name', help='Product name')
@click.option('--type', 'product_type', type=TYPE_CHOICE, help='Product type')
@click.option('--opened', type=DATE, help='Date opened (YYYY-MM-DD)')
@click.option('--expires', type=DATE, help='Expiration date (YYYY-MM-DD)')
@click.option('--finished', type=DATE, help='Date finished (YYYY-MM-DD)')
@click.option('--price', type=float, help='Price')
@click.option('--notes', help='Notes')
@click.option('--tag', 'add_tags', multiple=True, help='Add a tag (repeatable)')
@click.option('--remove-tag', 'remove_tags', multiple=True, help='Remove a tag (repeatable)')
@click.option('--clear', multiple=True, type=click.Choice(CLEARABLE_FIELDS), help='Clear an optional field (repeatable)')
@click.pass_context
def edit_product(ctx, product_id, brand, name, product_type, opened, expires, finished, price, notes,
                 add_tags, remove_tags, clear):
    """Edit a product."""
    values = {
        'brand': brand,
        'name': name,
        'type': product_type,
        'date_opened': _iso(opened),
        'expiration_date': _iso(expires),
        'date_finished': _iso(finished),
        'price': price,
        'notes': notes,
    }
    EditProductCommand(get_config(ctx), product_id, values, add_tags, remove_tags, clear).execute()

@products.command('finish')
@click.argument('product_id')
@click.option('--on', 'finished_on', type=DATE, help='Date finished (YYYY-MM-DD), defaults to today')
@click.pass_context
def finish_product(ctx, product_id, finished_on):
    """Mark a product as finished."""
    finished = _iso(finished_on) or datetime.now().date().isoformat()
    EditProductCommand(get_config(ctx), product_id, {'date_finished': finished}).execute()

@products.command('delete')
@click.argument('product_id')
@click.option('--yes', 'assume_yes', is_flag=True, help='Do not ask for confirmation')
@click.pass_context
def delete_product(ctx, product_id: str, assume_yes: bool):
    """Delete a product permanently."""
    DeleteProductCommand(get_config(ctx), product_id, assume_yes).execute()

@products.command('import')
@click.argument('file', type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path))
@click.option('--output', type=click.Path(file_okay=True, dir_okay=False, path_type=Path), help='Save import results to file')
@click.option('--batch-size', type=click.IntRange(min=1), help='Rows per batch')
@click.pass_context
def import_products(ctx, file: Path, output: Optional[Path], batch_size: Optional[int]):
    """Import products from a CSV file."""
    exit_code = ImportProductsCommand(get_config(ctx), file, output, batch_size).execute()
    if exit_code:
        ctx.exit(exit_code)
