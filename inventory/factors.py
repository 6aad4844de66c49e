# inventory/factors.py
from dataclasses import dataclass
from typing import Dict, Optional

# -------------------------------------------------------------------
# Emission factor tables
# (kg of gas per activity unit; GWP converts the gas to CO2e)
# -------------------------------------------------------------------

CO2_GWP = 1.0
CH4_GWP = 27.2
N2O_GWP = 273.0


@dataclass(frozen=True)
class GasFactor:
    """Per-gas factors for a fuel, each with its own unit label and GWP."""

    co2: float
    ch4: float
    n2o: float
    source: str
    co2_unit: str = "kg CO₂ / L"
    ch4_unit: str = "kg CH₄ / L"
    n2o_unit: str = "kg N₂O / L"
    co2_gwp: float = CO2_GWP
    ch4_gwp: float = CH4_GWP
    n2o_gwp: float = N2O_GWP


@dataclass(frozen=True)
class FactorEntry:
    """Single factor with unit, GWP multiplier and citation."""

    factor: float
    source: str
    unit: str = ""
    gwp: Optional[float] = None
    factor_type: str = ""


# ---- Combustion (stationary + mobile) ----

FUEL_TYPES = ("Unleaded 92", "Unleaded 95", "Unleaded 98", "Diesel")

STATIONARY_FACTOR_SOURCE = "EPA stationary combustion emission factors (2024)"
MOBILE_FACTOR_SOURCE = "EPA mobile fuel combustion emission factors (2024)"

# (co2, ch4, n2o) in kg per litre
_FUEL_GASES = {
    "Unleaded 92": (2.32, 0.00021, 0.00021),
    "Unleaded 95": (2.28, 0.0002, 0.00019),
    "Unleaded 98": (2.26, 0.00019, 0.00019),
    "Diesel": (2.68, 0.00005, 0.00012),
}


def _combustion_table(source: str) -> Dict[str, GasFactor]:
    return {
        fuel: GasFactor(co2=co2, ch4=ch4, n2o=n2o, source=source)
        for fuel, (co2, ch4, n2o) in _FUEL_GASES.items()
    }


STATIONARY_FACTORS = _combustion_table(STATIONARY_FACTOR_SOURCE)
MOBILE_FACTORS = _combustion_table(MOBILE_FACTOR_SOURCE)


# ---- Business travel (kg CO2e per passenger-km) ----

TRAVEL_FACTOR_SOURCE = "Transport emission factor database (2024 edition)"
CABIN_REQUIRED_SOURCE = "Select a cabin class to resolve the emission factor"
AIR_SOURCE = "Civil aviation emission factor reference (2024)"

TRAVEL_FACTORS: Dict[str, FactorEntry] = {
    # GWP on flights is the radiative forcing uplift
    "plane|economy": FactorEntry(0.092, AIR_SOURCE, "kg CO₂e / pkm", gwp=1.9),
    "plane|business": FactorEntry(0.134, AIR_SOURCE, "kg CO₂e / pkm", gwp=1.9),
    "plane|first": FactorEntry(0.181, AIR_SOURCE, "kg CO₂e / pkm", gwp=1.9),
    "hsr": FactorEntry(0.015, "High-speed rail energy efficiency report 2023", "kg CO₂e / pkm"),
    "train": FactorEntry(0.045, "Railway emission disclosure 2023", "kg CO₂e / pkm"),
    "car": FactorEntry(0.185, "Highway authority vehicle emission factors 2024", "kg CO₂e / pkm"),
    "metro": FactorEntry(0.028, "Metro electricity emission factor notice 2023", "kg CO₂e / pkm"),
}


def travel_factor(transportation: str, cabin_class: Optional[str]) -> FactorEntry:
    if transportation == "plane":
        if not cabin_class:
            return FactorEntry(0.0, CABIN_REQUIRED_SOURCE)
        return TRAVEL_FACTORS.get(f"plane|{cabin_class}", FactorEntry(0.0, TRAVEL_FACTOR_SOURCE))
    return TRAVEL_FACTORS.get(transportation, FactorEntry(0.0, TRAVEL_FACTOR_SOURCE))


# ---- Fugitive emissions (kg CO2e per kg substance) ----

FUGITIVE_FACTOR_SOURCE = "Fugitive emission calculation factors (2024)"

CONTENT_FACTORS: Dict[str, FactorEntry] = {
    "CO2": FactorEntry(1.0, FUGITIVE_FACTOR_SOURCE, "kg CO₂e / kg substance", gwp=1.0, factor_type="National"),
    "R134a": FactorEntry(1.0, FUGITIVE_FACTOR_SOURCE, "kg CO₂e / kg substance", gwp=1430.0, factor_type="IPCC"),
    "R600a": FactorEntry(1.0, FUGITIVE_FACTOR_SOURCE, "kg CO₂e / kg substance", gwp=3.0, factor_type="IPCC"),
}


# ---- Septic tank ----

SEPTIC_FACTOR_SOURCE = "EPA septic tank wastewater emission factors (2024)"
SEPTIC_CH4_FACTOR = 0.00062  # kg CH4 / person-day
SEPTIC_CH4_GWP = CH4_GWP
SEPTIC_FACTOR = FactorEntry(SEPTIC_CH4_FACTOR, SEPTIC_FACTOR_SOURCE, "kg CH₄ / person-day", gwp=SEPTIC_CH4_GWP)


# ---- Upstream freight of consumables (kg CO2e per tonne-km) ----

DEFAULT_FREIGHT_FACTOR = 0.102

LOGISTICS_FACTOR_SOURCE = "Transport emission factor database (2024 edition)"
LOGISTICS_FREIGHT_FACTORS: Dict[str, float] = {
    "3.5T light truck|Unleaded 92": 0.168,
    "3.5T light truck|Unleaded 95": 0.171,
    "3.5T light truck|Diesel": 0.149,
    "7.5T heavy truck|Diesel": 0.131,
    "Refrigerated container truck|Diesel": 0.189,
    "Refrigerated container truck|Jet fuel": 0.215,
}

OFFICE_FACTOR_SOURCE = "Corporate transport emission factors (2024)"
OFFICE_FREIGHT_FACTORS: Dict[str, float] = {
    "Sub-3.5T light truck|Unleaded 92": 0.168,
    "Sub-3.5T light truck|Unleaded 95": 0.171,
    "Sub-3.5T light truck|Unleaded 98": 0.176,
    "Sub-3.5T light truck|Diesel": 0.149,
    "5T document van|Diesel": 0.138,
    "5T document van|Unleaded 95": 0.174,
    "Electric delivery van|Electricity": 0.055,
}


def freight_factor(table: Dict[str, float], vehicle: str, fuel_type: str) -> float:
    return table.get(f"{vehicle}|{fuel_type}", DEFAULT_FREIGHT_FACTOR)
