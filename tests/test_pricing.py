from decimal import Decimal

from app.shared.formatting import format_datetime, format_price
from app.shared.pricing import apply_discount, compute_profit_percentage, round_money
from app.shared.validators import is_valid_cuit, is_valid_phone


def test_profit_percentage():
    assert compute_profit_percentage(100, 150) == 50.0
    assert compute_profit_percentage(300, 500) == 66.67


def test_profit_percentage_zero_prices():
    assert compute_profit_percentage(0, 150) == 0
    assert compute_profit_percentage(100, 0) == 0
    assert compute_profit_percentage(None, 150) == 0


def test_percentage_discount():
    result = apply_discount(1000, 10, is_percentage=True)
    assert result.discount_amount == 100.0
    assert result.final_total == 900.0


def test_fixed_discount():
    result = apply_discount(1000, 250, is_percentage=False)
    assert result.discount_amount == 250.0
    assert result.final_total == 750.0


def test_discount_never_exceeds_total():
    assert apply_discount(100, 500, is_percentage=False) == (100.0, 0.0)
    assert apply_discount(100, 150, is_percentage=True) == (100.0, 0.0)


def test_discount_without_value_or_total():
    assert apply_discount(1000, 0) == (0.0, 1000.0)
    assert apply_discount(1000, -5) == (0.0, 1000.0)
    assert apply_discount(0, 10) == (0.0, 0.0)


def test_total_equals_subtotal_minus_discount_after_rounding():
    for total, value in [(333.33, 15), (99.99, 33.333), (0.05, 50), (1234.565, 7.5)]:
        result = apply_discount(total, value)
        expected = round_money(total) - round_money(Decimal(str(result.discount_amount)))
        assert Decimal(str(result.final_total)) == expected


def test_format_price():
    assert format_price(1500) == "$1.500,00"
    assert format_price(1234567.891) == "$1.234.567,89"
    assert format_price(None) == "$0,00"
    assert format_price(-20) == "-$20,00"


def test_format_datetime():
    from datetime import datetime

    assert format_datetime(datetime(2024, 8, 15, 9, 5)) == "15/08/2024 09:05"


def test_phone_validation():
    assert is_valid_phone("11 2345-6789")
    assert is_valid_phone("+54 11 2345 6789")
    assert not is_valid_phone("12345")
    assert not is_valid_phone("")


def test_cuit_validation():
    assert is_valid_cuit("20-12345678-6")
    assert not is_valid_cuit("20-12345678-5")
    assert not is_valid_cuit("2012345")
