"""Tests for the command line interface."""

import csv
import logging

import click
import pytest
from click.testing import CliRunner

from ..cli.config import Config
from ..cli.main import cli
from ..commands.orders import parse_product
from ..storage import LocalStorageStore
from .conftest import VALID_ORDER_ID

CABLE = 'usb-c cable|10|19.99|cables|ANKER'
CHARGER = 'Charger|5|24.50|power|anker|iPhone 15'

@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)

@pytest.fixture
def env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for key in ('STORAGE_BACKEND', 'SECONDARY_BACKEND', 'DATABASE_URL', 'DOCUMENT_DB_URL',
                'REMOTE_DATABASE_URL', 'SYNC_MAX_RETRIES', 'LOG_LEVEL'):
        monkeypatch.delenv(key, raising=False)
    return {
        'STORAGE_BACKEND': 'local',
        'LOCAL_STORAGE_PATH': str(tmp_path / 'orders.json'),
        'LOG_LEVEL': 'WARNING',
    }

@pytest.fixture
def runner():
    return CliRunner()

def stored_ids(env):
    return [r['id'] for r in LocalStorageStore(env['LOCAL_STORAGE_PATH']).load()]

def add(runner, env, supplier='tech supply co.'):
    return runner.invoke(cli, [
        'add', '--supplier', supplier, '--date', '2024-03-01',
        '--product', CABLE, '--product', CHARGER
    ], env=env)

def test_parse_product():
    product = parse_product(CHARGER)
    assert (product.name, product.quantity, product.price) == ('Charger', 5, 24.50)
    assert product.compatibility == 'iPhone 15'

    with pytest.raises(click.BadParameter):
        parse_product('Cable|ten|1.00|cables|anker')
    with pytest.raises(click.BadParameter):
        parse_product('Cable|1|1.00')
    with pytest.raises(click.BadParameter, match='finite'):
        parse_product('Cable|1|inf|cables|anker')

def test_add_and_list(runner, env):
    result = add(runner, env)
    assert result.exit_code == 0, result.output
    assert '322.40' in result.output
    assert len(stored_ids(env)) == 1

    result = runner.invoke(cli, ['list'], env=env)
    assert result.exit_code == 0, result.output
    assert 'Tech Supply Co.' in result.output
    assert 'USB-C' not in result.output
    assert 'usb-c cable' in result.output

def test_list_empty(runner, env):
    result = runner.invoke(cli, ['list'], env=env)
    assert result.exit_code == 0
    assert 'No orders found' in result.output

def test_update_and_delete(runner, env):
    add(runner, env)
    order_id = stored_ids(env)[0]

    result = runner.invoke(cli, ['update', order_id, '--supplier', 'ACME PARTS'], env=env)
    assert result.exit_code == 0, result.output
    result = runner.invoke(cli, ['list', '--supplier', 'acme parts'], env=env)
    assert 'Acme Parts' in result.output

    result = runner.invoke(cli, ['delete', order_id], env=env)
    assert result.exit_code == 0, result.output
    assert stored_ids(env) == []

    result = runner.invoke(cli, ['delete', order_id], env=env)
    assert result.exit_code == 0

def test_update_unknown_order(runner, env):
    result = runner.invoke(cli, ['update', VALID_ORDER_ID, '--supplier', 'Nobody'], env=env)
    assert result.exit_code == 0
    assert 'not found' in result.output
    assert stored_ids(env) == []

def test_price_list_export(runner, env, tmp_path):
    add(runner, env)
    add(runner, env, supplier='TECH SUPPLY CO.')
    output = tmp_path / 'price_list.csv'

    result = runner.invoke(cli, ['price-list', '--sort-by', 'category', '--output', str(output)], env=env)
    assert result.exit_code == 0, result.output

    with open(output, newline='') as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 4
    assert {r['Supplier'] for r in rows} == {'Tech Supply Co.'}
    assert [r['Category'] for r in rows] == ['Cables', 'Cables', 'Power', 'Power']

def test_price_list_table(runner, env):
    result = runner.invoke(cli, ['price-list'], env=env)
    assert 'No products found' in result.output

    add(runner, env)
    result = runner.invoke(cli, ['price-list', '--search', 'iphone'], env=env)
    assert result.exit_code == 0, result.output
    assert 'Charger' in result.output
    assert 'Total items: 5' in result.output

def test_invalid_product_option(runner, env):
    result = runner.invoke(cli, ['add', '--supplier', 'Acme', '--product', 'broken'], env=env)
    assert result.exit_code != 0
    assert stored_ids(env) == []

def test_invalid_backend(runner, env):
    env['STORAGE_BACKEND'] = 'floppy'
    result = runner.invoke(cli, ['list'], env=env)
    assert result.exit_code == 1
    assert 'storage_backend' in result.output

def test_unavailable_primary_reports_failure(runner, env):
    env['STORAGE_BACKEND'] = 'relational'
    result = add(runner, env)
    assert result.exit_code != 0
    assert 'unavailable' in result.output

def test_sync_push_to_secondary(runner, env, tmp_path):
    add(runner, env)
    env['SECONDARY_BACKEND'] = 'device'
    env['DEVICE_STORAGE_PATH'] = str(tmp_path / 'device.db')

    result = runner.invoke(cli, ['sync', 'push'], env=env)
    assert result.exit_code == 0, result.output
    assert 'device' in result.output

def test_sync_without_secondary(runner, env):
    result = runner.invoke(cli, ['sync', 'pull'], env=env)
    assert result.exit_code == 0
    assert 'nothing to sync' in result.output

def test_test_connection(runner, env):
    result = runner.invoke(cli, ['test-connection'], env=env)
    assert result.exit_code == 0, result.output
    assert 'local: ok (0 orders)' in result.output

def test_config_from_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('STORAGE_BACKEND', 'Device')
    monkeypatch.setenv('SECONDARY_BACKEND', 'relational')
    monkeypatch.setenv('SYNC_MAX_RETRIES', '2')
    monkeypatch.delenv('DATABASE_URL', raising=False)

    config = Config.from_env()
    assert config.storage_backend == 'device'
    assert config.secondary_backend == 'relational'
    assert config.sync_max_retries == 2
    assert config.database_url is None
    assert config.validate()

def test_config_validation():
    with pytest.raises(ValueError):
        Config(storage_backend='floppy').validate()
    with pytest.raises(ValueError):
        Config(storage_backend='local', secondary_backend='local').validate()
    with pytest.raises(ValueError):
        Config(sync_max_retries=-1).validate()
    with pytest.raises(ValueError):
        Config(log_level='LOUD').validate()

def test_non_finite_price_is_rejected(runner, env):
    result = runner.invoke(cli, ['add', '--supplier', 'Acme', '--product', 'Cable|1|nan|cables|anker'], env=env)
    assert result.exit_code != 0
    assert 'finite' in result.output
    assert stored_ids(env) == []

def test_suggest(runner, env):
    result = runner.invoke(cli, ['suggest'], env=env)
    assert result.exit_code == 0, result.output
    assert '(none)' in result.output

    add(runner, env)
    add(runner, env, supplier='acme parts')
    result = runner.invoke(cli, ['suggest', '--field', 'suppliers'], env=env)
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == 'suppliers:'
    assert sorted(lines[1:]) == ['  Acme Parts', '  Tech Supply Co.']

    result = runner.invoke(cli, ['suggest', '--field', 'brands'], env=env)
    assert 'brands:\n  Anker\n' in result.output
    assert 'suppliers:' not in result.output
