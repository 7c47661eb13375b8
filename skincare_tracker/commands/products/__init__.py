"""
Product commands for the skincare tracker CLI.
List, inspect, add, edit and delete products.
"""

from typing import Any, Dict, Iterable, Optional, Sequence

import click

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config
from ...forms import ADD, ProductForm
from ...inventory.filtering import FilterCriteria
from ...inventory.status import classify
from ...inventory.view_state import (
    ProductListState,
    active_products,
    finished_products,
    products_loaded,
    visible_products,
)
from ...store import ProductStore
from ..render import product_details, product_line

TABS = ['active', 'finished', 'all']

# Edit options that may be cleared
CLEARABLE_FIELDS = ['date_opened', 'date_finished', 'price', 'notes']

def _with_status(product) -> Dict[str, Any]:
    info = classify(product)
    return {**product.to_dict(), 'status': info.status.value, 'label': info.label}

class ListProductsCommand(BaseCommand):
    """List products with filters, split into active and finished tabs."""

    def __init__(self, config: Config, criteria: FilterCriteria, tab: str = 'all',
                 store: Optional[ProductStore] = None):
        super().__init__(config, store)
        self.criteria = criteria
        self.tab = tab

    def _tab_products(self, state: ProductListState):
        if self.tab == 'active':
            return active_products(state)
        if self.tab == 'finished':
            return finished_products(state)
        return visible_products(state)

    @command_error_handler
    def execute(self) -> None:
        """Execute the command."""
        state = ProductListState(criteria=self.criteria)
        state = products_loaded(state, self.store.list())
        products = self._tab_products(state)

        if self.as_json:
            self.echo_json([_with_status(p) for p in products])
            return

        if not products:
            if not state.products:
                click.echo("No products yet. Add your first product with 'products add'.")
            elif self.tab == 'finished':
                click.echo("No finished products")
            else:
                click.echo("No products match the current filters")
            return

        click.echo(f"\n{len(products)} of {len(state.products)} products:")
        for product in products:
            product_line(product)

class ShowProductCommand(BaseCommand):
    """Show a single product."""

    def __init__(self, config: Config, product_id: str, store: Optional[ProductStore] = None):
        super().__init__(config, store)
        self.product_id = product_id

    @command_error_handler
    def execute(self) -> None:
        """Execute the command."""
        product = self.store.get(self.product_id)
        if self.as_json:
            self.echo_json(_with_status(product))
            return
        product_details(product)

class AddProductCommand(BaseCommand):
    """Add a product from command-line values."""

    def __init__(self, config: Config, values: Dict[str, Any], tags: Sequence[str] = (),
                 store: Optional[ProductStore] = None):
        super().__init__(config, store)
        self.values = values
        self.tags = tags

    def build_form(self) -> ProductForm:
        """Fill an add form the way a user would, field by field."""
        values = {k: v for k, v in self.values.items() if v is not None}
        expiration = values.pop('expiration_date', None)

        form = ProductForm(mode=ADD).with_changes(**values)
        if form.expiration_date and expiration is None and not self.as_json:
            click.echo(f"Expiration date set from shelf life: {form.expiration_date}")
        if expiration is not None:
            form = form.with_changes(expiration_date=expiration)

        for tag in self.tags:
            form = form.add_tag(tag)
        return form

    @command_error_handler
    def execute(self) -> None:
        """Execute the command."""
        form = self.build_form()
        product = self.store.create(form.to_payload())

        if self.as_json:
            self.echo_json(product.to_dict())
            return
        click.secho("Product added successfully!", fg='green')
        product_details(product)

class EditProductCommand(BaseCommand):
    """Change fields of an existing product."""

    def __init__(self, config: Config, product_id: str, values: Dict[str, Any],
                 add_tags: Sequence[str] = (), remove_tags: Sequence[str] = (),
                 clear: Iterable[str] = (), store: Optional[ProductStore] = None):
        super().__init__(config, store)
        self.product_id = product_id
        self.values = values
        self.add_tags = add_tags
        self.remove_tags = remove_tags
        self.clear = list(clear)

    def changed_fields(self, original: Dict[str, Any], payload: Dict[str, Any]) -> Dict[str, Any]:
        return {name: value for name, value in payload.items() if original.get(name) != value}

    @command_error_handler
    def execute(self) -> None:
        """Execute the command."""
        product = self.store.get(self.product_id)
        original = ProductForm.from_product(product)

        changes = {k: v for k, v in self.values.items() if v is not None}
        for name in self.clear:
            changes[name] = '' if name == 'notes' else None

        form = original.with_changes(**changes)
        for tag in self.remove_tags:
            form = form.remove_tag(tag)
        for tag in self.add_tags:
            form = form.add_tag(tag)

        # Compare against the stored values, not the raw form
        before = {**product.to_dict(), 'tags': list(product.tags)}
        updates = self.changed_fields(before, form.to_payload())
        if not updates:
            click.echo("No changes to save")
            return

        updated = self.store.update(self.product_id, updates)
        if self.as_json:
            self.echo_json(updated.to_dict())
            return
        click.secho("Product updated successfully!", fg='green')
        click.echo(f"Changed: {', '.join(sorted(updates))}")
        product_details(updated)

class DeleteProductCommand(BaseCommand):
    """Delete a product after confirmation."""

    def __init__(self, config: Config, product_id: str, assume_yes: bool = False,
                 store: Optional[ProductStore] = None):
        super().__init__(config, store)
        self.product_id = product_id
        self.assume_yes = assume_yes

    @command_error_handler
    def execute(self) -> None:
        """Execute the command."""
        product = self.store.get(self.product_id)

        if not self.assume_yes:
            click.echo(
                f'This action cannot be undone. This will permanently delete '
                f'the product "{product.display_name}".'
            )
            if not self.config.interactive or not click.confirm("Are you sure?", default=False):
                click.echo("Cancelled")
                return

        self.store.delete(self.product_id)
        click.secho(f"Deleted {product.display_name}", fg='green')

__all__ = [
    'TABS',
    'CLEARABLE_FIELDS',
    'ListProductsCommand',
    'ShowProductCommand',
    'AddProductCommand',
    'EditProductCommand',
    'DeleteProductCommand'
]
