"""
Tests for the input validators.
"""

import pytest

from core.errors import InvalidInput
from core.validation import (
    Validator,
    require_fields,
    validate_email,
    validate_phone_number,
)


class TestEmail:
    @pytest.mark.parametrize("email", ["a@b.com", "first.last@sub.example.org", "x+tag@d.io"])
    def test_accepts_valid(self, email):
        validate_email(email)

    @pytest.mark.parametrize(
        "email",
        ["", "plainaddress", "a@b", "@b.com", "a@.com", "a b@c.com", "a@b .com", "a@b.com\n", None, 42],
    )
    def test_rejects_invalid(self, email):
        with pytest.raises(InvalidInput) as info:
            validate_email(email)
        assert info.value.field == "email"

    def test_custom_field_name(self):
        with pytest.raises(InvalidInput) as info:
            validate_email("nope", field="contact")
        assert info.value.field == "contact"


class TestPhone:
    @pytest.mark.parametrize("phone", ["+15551234567", "15551234567", "12", "+123456789012345"])
    def test_accepts_valid(self, phone):
        validate_phone_number(phone)

    @pytest.mark.parametrize(
        "phone",
        [
            "", "1", "+0123456", "0123456", "+1234567890123456", "555-123-4567", "+1 555", "abc",
            "+15551234567\n", "12\n", None,
        ],
    )
    def test_rejects_invalid(self, phone):
        with pytest.raises(InvalidInput):
            validate_phone_number(phone)


class TestRequireFields:
    def test_all_present(self):
        require_fields({"customer": "cus_1", "amount": 500, "currency": "usd"}, ["customer", "amount", "currency"])

    @pytest.mark.parametrize("value", ["", 0, None, False])
    def test_falsy_counts_as_missing(self, value):
        with pytest.raises(InvalidInput) as info:
            require_fields({"customer": "cus_1", "amount": value}, ["customer", "amount"])
        assert info.value.field == "amount"

    def test_absent_key(self):
        with pytest.raises(InvalidInput) as info:
            require_fields({}, ["email"])
        assert "missing required field" in str(info.value)

    def test_reports_first_missing(self):
        with pytest.raises(InvalidInput) as info:
            require_fields({"b": 1}, ["a", "b", "c"])
        assert info.value.field == "a"

    @pytest.mark.parametrize("data", [None, "string", ["email"], 3])
    def test_rejects_non_mapping(self, data):
        with pytest.raises(InvalidInput) as info:
            require_fields(data, [])
        assert info.value.field == "data"

    def test_empty_required_list_allows_empty_mapping(self):
        require_fields({}, [])


def test_validator_facade_delegates():
    validator = Validator()
    validator.email("a@b.com")
    validator.phone_number("+15551234567")
    validator.data({"id": "in_1"}, ["id"])
    with pytest.raises(InvalidInput):
        validator.data({"id": ""}, ["id"])
