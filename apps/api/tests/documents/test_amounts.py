"""
Unit tests for amount formatting on printable documents.
"""

from decimal import Decimal

import pytest

from division_sms.documents.amounts import (
    format_amount,
    format_amount_in_words,
    format_peso,
    number_to_words,
    to_decimal,
)


class TestNumberToWords:
    @pytest.mark.parametrize(
        ("number", "words"),
        [
            (0, "zero"),
            (7, "seven"),
            (15, "fifteen"),
            (40, "forty"),
            (99, "ninety nine"),
            (100, "one hundred"),
            (105, "one hundred five"),
            (1200, "one thousand two hundred"),
            (45_678, "forty five thousand six hundred seventy eight"),
            (2_000_001, "two million one"),
        ],
    )
    def test_spelled_out(self, number, words):
        assert number_to_words(number) == words

    def test_one_billion_is_out_of_range(self):
        with pytest.raises(ValueError):
            number_to_words(1_000_000_000)

    def test_negative_is_out_of_range(self):
        with pytest.raises(ValueError):
            number_to_words(-1)


class TestFormatAmountInWords:
    def test_with_cents(self):
        assert format_amount_in_words(Decimal("1200.50")) == "ONE THOUSAND TWO HUNDRED & 50/100"

    def test_whole_amount_has_no_cents_suffix(self):
        assert format_amount_in_words(25000) == "TWENTY FIVE THOUSAND"

    def test_single_digit_cents(self):
        assert format_amount_in_words("10.05") == "TEN & 5/100"

    def test_none_is_zero(self):
        assert format_amount_in_words(None) == "ZERO"


class TestFormatAmount:
    def test_thousands_separator_and_two_decimals(self):
        assert format_amount(Decimal("1234567.5")) == "1,234,567.50"

    def test_peso_sign(self):
        assert format_peso(1234.5) == "₱1,234.50"

    def test_to_decimal_rounds_half_up(self):
        assert to_decimal("2.345") == Decimal("2.35")
        assert to_decimal(None) == Decimal("0.00")
