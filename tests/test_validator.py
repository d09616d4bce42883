"""
Form validation tests - required fields, numeric parsing and first-failure reporting.
"""

import pytest
from decimal import Decimal

from src.core.domains import CUSTOMERS, INVENTORY, SALES
from src.core.errors import ValidationFailure
from src.core.schema import TrayType
from src.core.validator import FieldKind, FieldSpec, validate_field, validate_form


@pytest.fixture
def inventory_form():
    return {
        "supplier_name": "  Kienyeji Farm  ",
        "tray_type": "full",
        "trays": "2",
        "quantity": "60",
        "delivery_date": "2026-10-01",
    }


class TestFieldParsing:
    """Test per-kind parsing rules."""

    def test_string_is_trimmed(self):
        assert validate_field(FieldSpec("name", "Name"), "  Amina ") == "Amina"

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_blank_string_is_missing(self, raw):
        assert validate_field(FieldSpec("name", "Name"), raw) is None

    @pytest.mark.parametrize("raw", ["0", "-3", "abc", "2.5", "NaN", ""])
    def test_positive_integer_rejects_invalid(self, raw):
        spec = FieldSpec("trays", "Trays", kind=FieldKind.INTEGER)
        assert validate_field(spec, raw) is None

    def test_integer_allowing_zero(self):
        spec = FieldSpec("pieces", "Pieces", kind=FieldKind.INTEGER, positive=False)
        assert validate_field(spec, "0") == 0
        assert validate_field(spec, "-1") is None

    @pytest.mark.parametrize("raw", ["NaN", "Infinity", "0", "-1.5", "twelve"])
    def test_decimal_rejects_invalid(self, raw):
        spec = FieldSpec("price", "Price", kind=FieldKind.DECIMAL)
        assert validate_field(spec, raw) is None

    def test_decimal_parses_exactly(self):
        spec = FieldSpec("price", "Price", kind=FieldKind.DECIMAL)
        assert validate_field(spec, " 12.50 ") == Decimal("12.50")

    def test_date_only_checks_presence(self):
        spec = FieldSpec("when", "When", kind=FieldKind.DATE)
        assert validate_field(spec, "next tuesday") == "next tuesday"
        assert validate_field(spec, " ") is None

    def test_choice_must_be_enum_member(self):
        spec = FieldSpec("tray_type", "Tray Type", kind=FieldKind.CHOICE, choices=TrayType)
        assert validate_field(spec, "Partial") is TrayType.PARTIAL
        assert validate_field(spec, TrayType.FULL) is TrayType.FULL
        assert validate_field(spec, "half") is None


class TestValidateForm:
    """Test whole-form validation."""

    def test_inventory_form_produces_typed_draft(self, inventory_form):
        draft = validate_form(inventory_form, INVENTORY.fields)

        assert draft == {
            "supplier_name": "Kienyeji Farm",
            "tray_type": TrayType.FULL,
            "trays": 2,
            "quantity": 60,
            "delivery_date": "2026-10-01",
        }

    def test_first_unmet_requirement_is_reported(self, inventory_form):
        inventory_form["supplier_name"] = ""
        inventory_form["quantity"] = "0"

        with pytest.raises(ValidationFailure) as excinfo:
            validate_form(inventory_form, INVENTORY.fields)

        assert excinfo.value.field == "supplier_name"
        assert str(excinfo.value) == "Please fill in all required fields (Supplier Name)"

    @pytest.mark.parametrize("field,value", [
        ("trays", "0"),
        ("quantity", "abc"),
        ("delivery_date", ""),
        ("tray_type", "jumbo"),
    ])
    def test_each_required_field_is_enforced(self, inventory_form, field, value):
        inventory_form[field] = value

        with pytest.raises(ValidationFailure) as excinfo:
            validate_form(inventory_form, INVENTORY.fields)
        assert excinfo.value.field == field

    def test_missing_key_counts_as_blank(self):
        with pytest.raises(ValidationFailure) as excinfo:
            validate_form({"name": "Amina"}, CUSTOMERS.fields)
        assert excinfo.value.field == "phone"

    def test_optional_fields_become_none(self):
        draft = validate_form({"name": "Amina", "phone": "0712", "location": "  "}, CUSTOMERS.fields)
        assert draft["location"] is None
        assert draft["notes"] is None

    def test_sale_draft(self):
        draft = validate_form({
            "customer_name": "Hotel Baraka",
            "full_trays": "3",
            "pieces": "0",
            "price_per_tray": "450",
            "price_per_piece": "15",
            "sale_date": "2026-10-19",
        }, SALES.fields)

        assert draft["full_trays"] == 3
        assert draft["pieces"] == 0
        assert draft["price_per_tray"] == Decimal("450")
        assert draft["delivery_date"] is None
