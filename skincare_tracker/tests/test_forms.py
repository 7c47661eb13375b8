"""Tests for the add/edit product form."""

from datetime import date

import pytest

from ..exceptions import ProductValidationError, TagError
from ..forms import ADD, EDIT, ProductForm, add_tag, remove_tag, validate_fields
from ..utils.shelf_life import shelf_life_hint, suggest_expiration, suggested_months
from .conftest import make_product

def error_fields(errors):
    return [error.field for error in errors]

@pytest.fixture
def filled_form():
    return ProductForm(
        brand='CeraVe',
        name='Hydrating Cleanser',
        type='Cleanser',
        date_opened='2025-01-01',
        expiration_date='2026-01-01',
        price=15.99,
        notes='  Gentle  ',
        tags=('daily',)
    )

class TestTags:
    def test_add_tag_trims(self):
        assert add_tag(['daily'], '  hydrating ') == ['daily', 'hydrating']

    def test_duplicate_tag_ignores_case(self):
        """Test a tag differing only in case is rejected."""
        with pytest.raises(TagError, match="This tag already exists"):
            add_tag(['Hydrating'], 'hydrating')

    def test_blank_tag_rejected(self):
        with pytest.raises(TagError, match="Please enter a tag"):
            add_tag([], '   ')

    def test_add_tag_keeps_input(self):
        tags = ['daily']
        add_tag(tags, 'night')
        assert tags == ['daily']

    def test_remove_tag_exact_match(self):
        """Test removal only drops the exact value."""
        assert remove_tag(['Hydrating', 'daily'], 'hydrating') == ['Hydrating', 'daily']
        assert remove_tag(['Hydrating', 'daily'], 'Hydrating') == ['daily']

    def test_form_tags(self, filled_form):
        form = filled_form.add_tag('AM')
        assert form.tags == ('daily', 'AM')
        assert filled_form.tags == ('daily',)

        with pytest.raises(TagError):
            form.add_tag('am')
        assert form.remove_tag('daily').tags == ('AM',)

class TestValidation:
    def test_empty_form(self):
        """Test required fields are reported."""
        errors = ProductForm().validate()
        assert error_fields(errors) == ['brand', 'name', 'type', 'expiration_date']
        assert errors[0].message == "Brand is required."
        assert errors[1].message == "Product name is required."

    def test_valid_form(self, filled_form):
        assert filled_form.validate() == []

    def test_expiration_before_opened(self, filled_form):
        errors = filled_form.with_changes(expiration_date='2024-12-01').validate()
        assert [str(e) for e in errors] == [
            "expiration_date: Expiration date cannot be earlier than the date opened"
        ]

    def test_finished_before_opened(self, filled_form):
        errors = filled_form.with_changes(date_finished='2024-12-31').validate()
        assert error_fields(errors) == ['date_finished']

    def test_same_day_is_allowed(self, filled_form):
        assert filled_form.with_changes(date_finished='2025-01-01').validate() == []

    def test_negative_price(self, filled_form):
        errors = filled_form.with_changes(price=-1).validate()
        assert [e.message for e in errors] == ["Price must be positive."]
        assert filled_form.with_changes(price=0).validate() == []

    def test_invalid_date(self, filled_form):
        """Test unreadable dates are rejected, not ignored."""
        errors = filled_form.with_changes(date_opened='31/01/2025').validate()
        assert error_fields(errors) == ['date_opened']
        assert "not a valid date" in errors[0].message

    def test_unknown_type(self, filled_form):
        errors = filled_form.with_changes(type='Perfume').validate()
        assert error_fields(errors) == ['type']

    def test_validate_fields_duplicate_tags(self):
        errors = validate_fields({
            'brand': 'Anua',
            'name': 'Heartleaf Toner',
            'type': 'Toner',
            'expiration_date': '2025-06-01',
            'tags': ['calming', 'Calming']
        })
        assert error_fields(errors) == ['tags']

class TestShelfLife:
    def test_add_mode_fills_expiration(self):
        """Test picking an opening date and type suggests an expiration."""
        form = ProductForm(mode=ADD).with_changes(type='Serum')
        assert form.expiration_date is None

        form = form.with_changes(date_opened='2025-01-15')
        assert form.expiration_date == '2025-07-15'

        form = form.with_changes(type='Cleanser')
        assert form.expiration_date == '2026-01-15'

    def test_explicit_expiration_wins(self):
        form = ProductForm().with_changes(type='Serum', date_opened='2025-01-15', expiration_date='2025-03-01')
        assert form.expiration_date == '2025-03-01'

    def test_type_without_suggestion_keeps_expiration(self):
        form = ProductForm().with_changes(type='Serum', date_opened='2025-01-15')
        form = form.with_changes(type='Other')
        assert form.expiration_date == '2025-07-15'

    def test_edit_mode_never_fills(self):
        product = make_product(type='Serum', date_opened='2025-01-15', expiration_date='2025-03-01')
        form = ProductForm.from_product(product).with_changes(date_opened='2025-02-01')
        assert form.mode == EDIT
        assert form.expiration_date == '2025-03-01'

    def test_month_end_is_clamped(self):
        assert suggest_expiration('2024-08-31', 'Serum') == date(2025, 2, 28)
        assert suggest_expiration('2024-02-29', 'Cleanser') == date(2025, 2, 28)

    def test_missing_inputs(self):
        assert suggest_expiration(None, 'Serum') is None
        assert suggest_expiration('2025-01-01', 'Other') is None
        assert suggested_months('Other') is None

    def test_hint(self):
        assert shelf_life_hint('Serum') == "Suggested shelf life: 6 months after opening"
        assert shelf_life_hint('Other') == ""
        assert ProductForm(type='Moisturizer').shelf_life_hint == "Suggested shelf life: 12 months after opening"

class TestPayload:
    def test_to_payload(self, filled_form):
        """Test the payload is cleaned up for the store."""
        payload = filled_form.to_payload()
        assert payload == {
            'brand': 'CeraVe',
            'name': 'Hydrating Cleanser',
            'type': 'Cleanser',
            'date_opened': '2025-01-01',
            'date_finished': None,
            'expiration_date': '2026-01-01',
            'price': 15.99,
            'notes': 'Gentle',
            'tags': ['daily'],
        }

    def test_blank_notes_become_none(self, filled_form):
        assert filled_form.with_changes(notes='   ').to_payload()['notes'] is None

    def test_invalid_form_raises(self):
        with pytest.raises(ProductValidationError) as exc_info:
            ProductForm(brand='CeraVe').to_payload()
        assert 'brand' not in error_fields(exc_info.value.errors)
        assert 'expiration_date' in error_fields(exc_info.value.errors)

    def test_from_product_round_trip(self):
        product = make_product(
            brand='COSRX', name='Snail Mucin Essence', type='Essence',
            expiration_date='2025-06-01', tags=['repair']
        )
        payload = ProductForm.from_product(product).to_payload()
        assert payload['brand'] == 'COSRX'
        assert payload['expiration_date'] == '2025-06-01'
        assert payload['notes'] is None
        assert payload['tags'] == ['repair']

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            ProductForm(mode='view')
