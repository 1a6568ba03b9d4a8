"""Tests for text normalization and UUID validation."""

import pytest

from ..entities import Product
from ..exceptions import ValidationError
from ..utils import (
    clean_text,
    generate_uuid,
    is_valid_order,
    is_valid_uuid,
    normalize_order,
    title_case,
    validate_order,
)
from .conftest import VALID_ORDER_ID, make_order

@pytest.mark.parametrize('raw, expected', [
    ('tech supply co.', 'Tech Supply Co.'),
    ('TECH SUPPLY CO.', 'Tech Supply Co.'),
    ('  mIxEd   case  ', 'Mixed   Case'),
    ('usb-c cables', 'Usb-c Cables'),
    ('', ''),
    (None, ''),
])
def test_title_case(raw, expected):
    """Title case lowercases everything and capitalizes whitespace-delimited words."""
    assert title_case(raw) == expected

@pytest.mark.parametrize('raw', [
    'tech supply co.', 'ALREADY UPPER', 'Tech Supply Co.', '  spaced  out ',
    'straße', "o'reilly media", '123 abc', '\tTabbed\nlines ',
])
def test_title_case_is_idempotent(raw):
    once = title_case(raw)
    assert title_case(once) == once

@pytest.mark.parametrize('raw', ['  name  ', 'name', '', '\n x \t', None])
def test_clean_text_is_idempotent(raw):
    once = clean_text(raw)
    assert clean_text(once) == once
    assert once == (raw or '').strip()

def test_uuid_validation():
    assert is_valid_uuid(VALID_ORDER_ID)
    assert is_valid_uuid(VALID_ORDER_ID.upper())
    assert is_valid_uuid(generate_uuid())
    assert not is_valid_uuid('demo-1')
    assert not is_valid_uuid(VALID_ORDER_ID.replace('-', ''))
    assert not is_valid_uuid(f"{VALID_ORDER_ID}0")
    assert not is_valid_uuid(None)
    assert not is_valid_uuid(12345)

def test_normalize_order_fields():
    order = make_order(supplier='  TECH supply CO. ')
    normalized = normalize_order(order)

    assert normalized.supplier == 'Tech Supply Co.'
    cable, charger = normalized.products
    assert cable.name == 'USB-C Cable'
    assert cable.category == 'Cables'
    assert cable.brand == 'Anker'
    assert charger.brand == 'Anker'
    assert charger.compatibility == 'iPhone 15'
    # Original is left untouched
    assert order.supplier == '  TECH supply CO. '
    assert normalize_order(normalized) == normalized

def test_is_valid_order_checks_product_ids():
    order = make_order()
    assert is_valid_order(order)

    order.products[1].id = 'demo-product'
    assert not is_valid_order(order)

    order = make_order()
    order.id = 'demo-1'
    assert not is_valid_order(order)

def test_validate_order_accepts_complete_order():
    validate_order(make_order())

@pytest.mark.parametrize('mutate, message', [
    (lambda o: setattr(o, 'id', 'demo-1'), 'order id'),
    (lambda o: setattr(o, 'supplier', '   '), 'Supplier'),
    (lambda o: setattr(o, 'products', []), 'at least one product'),
    (lambda o: setattr(o.products[0], 'id', 'p1'), 'invalid id'),
    (lambda o: setattr(o.products[0], 'name', ''), 'missing a name'),
    (lambda o: setattr(o.products[0], 'quantity', -1), 'negative'),
    (lambda o: setattr(o.products[0], 'quantity', 1.5), 'whole number'),
    (lambda o: setattr(o.products[0], 'price', -0.01), 'negative'),
    (lambda o: setattr(o.products[0], 'price', float('inf')), 'finite'),
    (lambda o: setattr(o.products[0], 'price', float('nan')), 'finite'),
])
def test_validate_order_rejects(mutate, message):
    order = make_order()
    mutate(order)
    with pytest.raises(ValidationError, match=message):
        validate_order(order)

def test_zero_quantity_and_price_are_allowed():
    validate_order(make_order(products=[Product.new('Sample', 0, 0, 'misc', 'none')]))
