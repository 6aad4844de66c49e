from inventory.formatting import (
    EMPTY,
    format_date,
    format_emission,
    format_exponential,
    format_factor,
    format_month,
    format_number,
)


def test_format_number_groups_and_trims():
    assert format_number(1234.5) == "1,234.5"
    assert format_number(1234.567) == "1,234.57"
    assert format_number(3) == "3"
    assert format_number(3, 2, 2) == "3.00"
    assert format_number(12.5, 0, 0) == "12"
    assert format_number(None) == EMPTY
    assert format_number(float("nan")) == EMPTY


def test_format_factor_small_values_get_five_decimals():
    assert format_factor(0.00062) == "0.00062"
    assert format_factor(2.68) == "2.68"
    assert format_factor(1430) == "1,430.00"


def test_format_exponential_and_emission():
    assert format_exponential(0.00005) == "5.00000e-05"
    assert format_emission(1234.5) == "1,234.50"


def test_format_date_and_month():
    assert format_date("2024-03-15") == "2024/03/15"
    assert format_date("") == EMPTY
    assert format_month(3) == "M03"
