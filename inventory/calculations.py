# inventory/calculations.py
from typing import Iterable, Tuple

from .factors import SEPTIC_CH4_FACTOR, SEPTIC_CH4_GWP, FactorEntry, GasFactor

LITRES_PER_GALLON = 3.78541


def to_litres(quantity: float, unit: str) -> float:
    return quantity * LITRES_PER_GALLON if unit == "gal" else quantity


def combustion_emissions(quantity_l: float, factor: GasFactor) -> float:
    """kg CO2e for a fuel quantity in litres: sum over CO2, CH4 and N2O of q * EF * GWP."""
    return (
        quantity_l * factor.co2 * factor.co2_gwp
        + quantity_l * factor.ch4 * factor.ch4_gwp
        + quantity_l * factor.n2o * factor.n2o_gwp
    )


def travel_emissions(passengers: float, distance_km: float, factor: FactorEntry) -> Tuple[float, float]:
    """Return (footprint, total) in kg CO2e. Total applies the GWP uplift when there is one."""
    footprint = passengers * distance_km * factor.factor
    gwp = factor.gwp if factor.gwp is not None else 1.0
    return footprint, footprint * gwp


def fugitive_emissions(quantity_kg: float, factor: FactorEntry) -> float:
    return quantity_kg * factor.factor * (factor.gwp if factor.gwp is not None else 1.0)


def actual_person_days(employees: float, workdays: float, leave_days: float) -> float:
    total = employees * workdays - leave_days
    return total if total > 0 else 0.0


def septic_emissions(person_days: float) -> float:
    return person_days * SEPTIC_CH4_FACTOR * SEPTIC_CH4_GWP


def freight_emissions(
    quantity: float, unit_weight_kg: float, distance_km: float, factor: float
) -> Tuple[float, float]:
    """Return (total weight in tonnes, kg CO2e) for shipping ``quantity`` items."""
    weight_t = (quantity * unit_weight_kg) / 1000.0
    return weight_t, weight_t * distance_km * factor


def kg_to_t(kg: float) -> float:
    return kg / 1000.0


def total_emissions_t(emissions_kg: Iterable[float]) -> float:
    return kg_to_t(sum(emissions_kg))
