"""Tests for the command line interface."""

import json
import logging

import pytest
from click.testing import CliRunner

from ..cli.main import cli
from .conftest import create_test_csv

@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)

@pytest.fixture
def runner():
    return CliRunner()

@pytest.fixture
def env(database_url):
    return {'DATABASE_URL': database_url, 'LOG_LEVEL': 'WARNING', 'OUTPUT_FORMAT': 'text'}

@pytest.fixture
def invoke(runner, env, session_manager):
    """Run a CLI command against the test database."""
    def run(*args, input=None):
        return runner.invoke(cli, list(args), env=env, input=input)
    return run

@pytest.fixture
def cleanser(store, cleanser_fields):
    return store.create(cleanser_fields)

def test_missing_database_url(runner):
    result = runner.invoke(cli, ['products', 'list'], env={'DATABASE_URL': ''})
    assert result.exit_code == 1
    assert 'DATABASE_URL' in result.output

def test_init_db(runner, env):
    result = runner.invoke(cli, ['init-db'], env=env)
    assert result.exit_code == 0
    assert 'Database schema is ready' in result.output

    result = runner.invoke(cli, ['test-connection'], env=env)
    assert result.exit_code == 0
    assert 'Successfully connected' in result.output

def test_list_empty(invoke):
    result = invoke('products', 'list')
    assert result.exit_code == 0
    assert "No products yet" in result.output

def test_add_with_suggested_expiration(invoke, store):
    """Test adding without an expiration date uses the shelf life."""
    result = invoke(
        'products', 'add',
        '--brand', 'The Ordinary',
        '--name', 'Niacinamide 10% + Zinc 1%',
        '--type', 'Serum',
        '--opened', '2025-01-15',
        '--tag', 'AM',
        '--tag', 'oily skin'
    )
    assert result.exit_code == 0, result.output
    assert "Expiration date set from shelf life: 2025-07-15" in result.output
    assert "Product added successfully!" in result.output

    [product] = store.list()
    assert product.expiration_date == '2025-07-15'
    assert product.tags == ['AM', 'oily skin']

def test_add_duplicate_tag_fails(invoke, store):
    result = invoke(
        'products', 'add',
        '--brand', 'CeraVe', '--name', 'Hydrating Cleanser', '--type', 'Cleanser',
        '--expires', '2026-01-01',
        '--tag', 'Daily', '--tag', 'daily'
    )
    assert result.exit_code != 0
    assert store.list() == []

def test_add_requires_expiration(invoke, store):
    """Test a type without a shelf life still needs an expiration date."""
    result = invoke('products', 'add', '--brand', 'Acme', '--name', 'Balm', '--type', 'Other')
    assert result.exit_code != 0
    assert store.list() == []

def test_list_json(invoke, cleanser):
    result = invoke('--format', 'json', 'products', 'list')
    assert result.exit_code == 0, result.output

    data = json.loads(result.output)
    assert [item['id'] for item in data] == [cleanser.id]
    assert data[0]['status'] == 'active'

def test_list_filters(invoke, store, cleanser, cleanser_fields):
    store.create({**cleanser_fields, 'brand': 'COSRX', 'name': 'Snail Mucin Essence', 'type': 'Essence'})

    result = invoke('products', 'list', '--search', 'snail')
    assert result.exit_code == 0
    assert "1 of 2 products" in result.output
    assert "Snail Mucin Essence" in result.output
    assert "Hydrating Cleanser" not in result.output

    result = invoke('products', 'list', '--status', 'finished')
    assert "No products match the current filters" in result.output

    result = invoke('products', 'list', '--tab', 'finished')
    assert "No finished products" in result.output

def test_show(invoke, cleanser):
    result = invoke('products', 'show', cleanser.id)
    assert result.exit_code == 0
    assert "Hydrating Cleanser" in result.output
    assert "$15.99" in result.output

def test_show_unknown(invoke):
    result = invoke('products', 'show', 'missing')
    assert result.exit_code != 0
    assert "Product not found: missing" in result.output

def test_edit(invoke, store, cleanser):
    """Test editing fields and tags."""
    result = invoke(
        'products', 'edit', cleanser.id,
        '--name', 'Hydrating Facial Cleanser',
        '--remove-tag', 'daily',
        '--tag', 'PM',
        '--clear', 'price'
    )
    assert result.exit_code == 0, result.output
    assert "Product updated successfully!" in result.output

    product = store.get(cleanser.id)
    assert product.name == 'Hydrating Facial Cleanser'
    assert product.tags == ['Hydrating', 'PM']
    assert product.price is None
    assert product.brand == 'CeraVe'

def test_edit_without_changes(invoke, cleanser):
    result = invoke('products', 'edit', cleanser.id, '--brand', 'CeraVe')
    assert result.exit_code == 0
    assert "No changes to save" in result.output

def test_edit_invalid_dates(invoke, store, cleanser):
    result = invoke('products', 'edit', cleanser.id, '--expires', '2024-06-01')
    assert result.exit_code != 0
    assert store.get(cleanser.id).expiration_date == '2099-01-01'

def test_finish(invoke, store, cleanser):
    result = invoke('products', 'finish', cleanser.id, '--on', '2025-04-01')
    assert result.exit_code == 0, result.output
    assert store.get(cleanser.id).date_finished == '2025-04-01'

def test_delete_confirmation(invoke, store, cleanser):
    """Test delete asks first and can be cancelled."""
    result = invoke('products', 'delete', cleanser.id, input='n\n')
    assert result.exit_code == 0
    assert "Cancelled" in result.output
    assert len(store.list()) == 1

    result = invoke('products', 'delete', cleanser.id, input='y\n')
    assert result.exit_code == 0
    assert "Deleted CeraVe - Hydrating Cleanser" in result.output
    assert store.list() == []

def test_delete_yes(invoke, store, cleanser):
    result = invoke('products', 'delete', cleanser.id, '--yes')
    assert result.exit_code == 0
    assert store.list() == []

def test_dashboard(invoke, cleanser):
    result = invoke('dashboard')
    assert result.exit_code == 0
    assert "Total Products: 1" in result.output
    assert "Cleanser: 1" in result.output

    result = invoke('--format', 'json', 'dashboard')
    data = json.loads(result.output)
    assert data['total'] == 1
    assert data['upcoming'][0]['id'] == cleanser.id

def test_import(invoke, store, tmp_path):
    csv_file = create_test_csv(tmp_path / 'products.csv', [{
        'Brand': 'COSRX',
        'Name': 'Snail Mucin Essence',
        'Type': 'Essence',
        'Expiration Date': '2025-06-01'
    }])
    output = tmp_path / 'results.json'

    result = invoke('products', 'import', str(csv_file), '--output', str(output))
    assert result.exit_code == 0, result.output
    assert "Created: 1" in result.output
    assert len(store.list()) == 1

    saved = json.loads(output.read_text())
    assert saved['summary']['stats']['created'] == 1

def test_shelf_life(runner, env):
    result = runner.invoke(cli, ['shelf-life'], env=env)
    assert result.exit_code == 0
    assert "Serum: 6 months" in result.output

    result = runner.invoke(cli, ['shelf-life', 'Serum', '--opened', '2024-08-31'], env=env)
    assert result.exit_code == 0
    assert "Suggested shelf life: 6 months after opening" in result.output
    assert "Feb 28, 2025" in result.output

    result = runner.invoke(cli, ['shelf-life', 'Other'], env=env)
    assert "No shelf-life suggestion for Other" in result.output
