"""
Check PDF Generator Unit Tests
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from exports.check_pdf import (
    CheckData,
    CheckSettings,
    generate_check_filename,
    generate_check_pdf,
    number_to_words,
)


@pytest.fixture
def settings() -> CheckSettings:
    return CheckSettings(
        business_name="Main Street Grill",
        business_address_line1="12 Main St",
        business_city="Springfield",
        business_state="IL",
        business_zip="62701",
        bank_name="First Bank",
    )


def make_check(number: int = 1001, **overrides) -> CheckData:
    defaults = {
        "check_number": number,
        "payee_name": "Jane Doe",
        "amount_cents": 123456,
        "issue_date": date(2024, 1, 22),
        "memo": "Week of Jan 15",
    }
    defaults.update(overrides)
    return CheckData(**defaults)


class TestNumberToWords:
    @pytest.mark.parametrize(
        "amount,expected",
        [
            (1234.56, "One Thousand Two Hundred Thirty-Four and 56/100"),
            (Decimal("0.05"), "Zero and 05/100"),
            (0, "Zero and 00/100"),
            (15, "Fifteen and 00/100"),
            (100, "One Hundred and 00/100"),
            (1_000_000, "One Million and 00/100"),
            (2_005_019.99, "Two Million Five Thousand Nineteen and 99/100"),
        ],
    )
    def test_words(self, amount, expected):
        assert number_to_words(amount) == expected

    def test_negative_uses_absolute_value(self):
        assert number_to_words(-40) == "Forty and 00/100"


class TestGenerateCheckPdf:
    def test_single_check(self, settings):
        pdf = generate_check_pdf(settings, [make_check()])

        assert pdf.startswith(b"%PDF")
        for text in (
            b"PAY TO THE",
            b"ORDER OF",
            b"DOLLARS",
            b"AUTHORIZED SIGNATURE",
            b"PAYEE RECORD",
            b"COMPANY RECORD",
            b"Jane Doe",
            b"Main Street Grill",
            b"First Bank",
        ):
            assert text in pdf

    def test_one_page_per_check(self, settings):
        checks = [make_check(1001), make_check(1002, payee_name="John Roe")]

        pdf = generate_check_pdf(settings, checks)

        assert pdf.count(b"PAYEE RECORD") == 2
        assert b"John Roe" in pdf

    def test_invalid_check_number(self):
        with pytest.raises(ValueError):
            make_check(0)


class TestCheckFilename:
    def test_single(self):
        name = generate_check_filename("Main St. Grill", [1001], now=datetime(2024, 1, 22, 8, 0, 5))

        assert name == "check-main-st--grill-1001-2024-01-22-080005.pdf"

    def test_range(self):
        name = generate_check_filename("Grill", [1001, 1002, 1003], now=datetime(2024, 1, 22))

        assert name == "checks-grill-1001-to-1003-2024-01-22-000000.pdf"
