import pytest

from inventory.calculations import (
    LITRES_PER_GALLON,
    actual_person_days,
    combustion_emissions,
    freight_emissions,
    fugitive_emissions,
    kg_to_t,
    septic_emissions,
    to_litres,
    total_emissions_t,
    travel_emissions,
)
from inventory.factors import (
    CABIN_REQUIRED_SOURCE,
    CONTENT_FACTORS,
    DEFAULT_FREIGHT_FACTOR,
    LOGISTICS_FREIGHT_FACTORS,
    MOBILE_FACTORS,
    OFFICE_FREIGHT_FACTORS,
    STATIONARY_FACTORS,
    TRAVEL_FACTOR_SOURCE,
    freight_factor,
    travel_factor,
)


def test_to_litres():
    assert to_litres(10, "L") == 10
    assert to_litres(10, "gal") == pytest.approx(37.8541)
    assert LITRES_PER_GALLON == 3.78541


def test_combustion_emissions_sums_three_gases():
    diesel = STATIONARY_FACTORS["Diesel"]
    expected = 100 * 2.68 * 1 + 100 * 0.00005 * 27.2 + 100 * 0.00012 * 273
    assert combustion_emissions(100, diesel) == pytest.approx(expected)


def test_stationary_and_mobile_tables_share_numbers_not_sources():
    for fuel, factor in STATIONARY_FACTORS.items():
        mobile = MOBILE_FACTORS[fuel]
        assert (factor.co2, factor.ch4, factor.n2o) == (mobile.co2, mobile.ch4, mobile.n2o)
        assert factor.source != mobile.source
        assert (factor.co2_gwp, factor.ch4_gwp, factor.n2o_gwp) == (1, 27.2, 273)


def test_travel_factor_plane_needs_cabin():
    factor = travel_factor("plane", None)
    assert factor.factor == 0
    assert factor.source == CABIN_REQUIRED_SOURCE

    economy = travel_factor("plane", "economy")
    assert economy.factor == 0.092
    assert economy.gwp == 1.9


def test_travel_factor_unknown_key_uses_default_source():
    factor = travel_factor("boat", None)
    assert factor.factor == 0
    assert factor.source == TRAVEL_FACTOR_SOURCE
    assert travel_factor("hsr", "economy").factor == 0.015


def test_travel_emissions_applies_gwp_to_total_only():
    footprint, total = travel_emissions(2, 1000, travel_factor("plane", "business"))
    assert footprint == pytest.approx(2 * 1000 * 0.134)
    assert total == pytest.approx(footprint * 1.9)

    footprint, total = travel_emissions(3, 100, travel_factor("car", None))
    assert footprint == total == pytest.approx(3 * 100 * 0.185)


def test_fugitive_emissions_uses_gwp():
    assert fugitive_emissions(2, CONTENT_FACTORS["R134a"]) == pytest.approx(2860)
    assert fugitive_emissions(4.5, CONTENT_FACTORS["CO2"]) == pytest.approx(4.5)
    assert CONTENT_FACTORS["R600a"].gwp == 3


@pytest.mark.parametrize(
    "employees, workdays, leave, expected",
    [(10, 20, 15, 185), (2, 3, 10, 0), (0, 0, 0, 0)],
)
def test_actual_person_days_never_negative(employees, workdays, leave, expected):
    assert actual_person_days(employees, workdays, leave) == expected


def test_septic_emissions():
    assert septic_emissions(1000) == pytest.approx(1000 * 0.00062 * 27.2)


def test_freight_factor_lookup_and_fallback():
    assert freight_factor(LOGISTICS_FREIGHT_FACTORS, "7.5T heavy truck", "Diesel") == 0.131
    assert freight_factor(OFFICE_FREIGHT_FACTORS, "Electric delivery van", "Electricity") == 0.055
    assert freight_factor(LOGISTICS_FREIGHT_FACTORS, "7.5T heavy truck", "Jet fuel") == DEFAULT_FREIGHT_FACTOR
    assert DEFAULT_FREIGHT_FACTOR == 0.102


def test_freight_emissions():
    weight_t, kg = freight_emissions(320, 0.85, 170, 0.149)
    assert weight_t == pytest.approx(0.272)
    assert kg == pytest.approx(0.272 * 170 * 0.149)


def test_totals_in_tonnes():
    assert kg_to_t(2500) == 2.5
    assert total_emissions_t([500, 1500, 0]) == 2.0
    assert total_emissions_t([]) == 0
