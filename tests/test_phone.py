import re

import pytest

from app.core.exceptions import InvalidPhoneNumber
from app.core.phone import normalize_phone_to_digits, phone_to_email


class TestNormalizePhoneToDigits:
    @pytest.mark.parametrize("raw", [
        "+62 812-345-678",
        "62812345678",
        "+62 (812) 345 678",
        "62.812.345.678",
        " 62812345678 ",
    ])
    def test_separators_do_not_change_result(self, raw):
        assert normalize_phone_to_digits(raw) == "62812345678"

    def test_leading_zero_becomes_country_code(self):
        assert normalize_phone_to_digits("0812345678") == "62812345678"
        assert normalize_phone_to_digits("0812-345-678") == "62812345678"

    @pytest.mark.parametrize("raw", ["12345", "628123456789012345", "", "abc", "+"])
    def test_out_of_range_lengths_rejected(self, raw):
        with pytest.raises(InvalidPhoneNumber) as exc_info:
            normalize_phone_to_digits(raw)
        assert exc_info.value.status_code == 400

    def test_boundary_lengths_accepted(self):
        assert normalize_phone_to_digits("12345678") == "12345678"
        assert normalize_phone_to_digits("123456789012345") == "123456789012345"

    @pytest.mark.parametrize("raw", ["0812345678", "+62 812-345-678", "4915112345678"])
    def test_normalizing_twice_is_stable(self, raw):
        once = normalize_phone_to_digits(raw)
        assert normalize_phone_to_digits(once) == once


class TestPhoneToEmail:
    def test_email_shape(self):
        email = phone_to_email("0812345678")
        assert email == "p62812345678@oceanfolx.org"
        assert re.fullmatch(r"p\d+@oceanfolx\.org", email)

    def test_formatting_variants_share_one_identity(self):
        assert phone_to_email("+62 812-345-678") == phone_to_email("0812345678")

    def test_invalid_phone_has_no_email(self):
        with pytest.raises(InvalidPhoneNumber):
            phone_to_email("12345")
