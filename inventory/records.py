# inventory/records.py
"""
Typed activity records, one class per emission-source page.

Every class offers:
- ``from_row(row, base_url)``: build a record from a CSV row, or return None
  when the row is malformed;
- ``from_form(...)``: build a record from user input, raising
  RecordValidationError with a message fit for display;
- ``table_row()``: the display values of one table line.
"""
import datetime as dt
import math
import re
from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterable, List, Optional, Sequence, Tuple

from .attachments import (
    Attachment,
    parse_attachment_list,
    parse_labelled_attachment_list,
)
from .calculations import (
    actual_person_days,
    combustion_emissions,
    freight_emissions,
    fugitive_emissions,
    septic_emissions,
    to_litres,
    travel_emissions,
)
from .csv_loader import CsvRow
from .exceptions import RecordValidationError
from .factors import (
    CONTENT_FACTORS,
    FUEL_TYPES,
    LOGISTICS_FACTOR_SOURCE,
    LOGISTICS_FREIGHT_FACTORS,
    MOBILE_FACTORS,
    OFFICE_FACTOR_SOURCE,
    OFFICE_FREIGHT_FACTORS,
    SEPTIC_FACTOR,
    STATIONARY_FACTORS,
    FactorEntry,
    GasFactor,
    freight_factor,
    travel_factor,
)
from .formatting import (
    EMPTY,
    format_date,
    format_emission,
    format_exponential,
    format_factor,
    format_month,
    format_number,
)

DEFAULT_ATTACHMENT_URL = "attachments/"
MONTHS = tuple(range(1, 13))


# -------------------------------------------------------------------
# Value parsing
# -------------------------------------------------------------------

def _text(row: CsvRow, key: str) -> str:
    return (row.get(key) or "").strip()


def _number(value, thousands: bool = False) -> Optional[float]:
    """Finite float or None. Blank strings are not numbers."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if thousands:
            value = value.replace(",", "")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _integer(value) -> Optional[int]:
    number = _number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _month(value) -> Optional[int]:
    month = _integer(value)
    return month if month in MONTHS else None


def _non_negative(value) -> Optional[float]:
    number = _number(value)
    return number if number is not None and number >= 0 else None


def _notes(value: Optional[str]) -> str:
    return (value or "").strip()


def _require(condition, message: str) -> None:
    if not condition:
        raise RecordValidationError(message)


def attachment_names(attachments: Iterable[Attachment]) -> str:
    names = [attachment.name for attachment in attachments]
    return ", ".join(names) if names else EMPTY


def _gas_columns(factor: GasFactor) -> Dict[str, str]:
    return {
        "CO₂ factor": format_factor(factor.co2),
        "CO₂ unit": factor.co2_unit,
        "CO₂ GWP": format_number(factor.co2_gwp),
        "CH₄ factor": format_exponential(factor.ch4),
        "CH₄ unit": factor.ch4_unit,
        "CH₄ GWP": format_number(factor.ch4_gwp),
        "N₂O factor": format_exponential(factor.n2o),
        "N₂O unit": factor.n2o_unit,
        "N₂O GWP": format_number(factor.n2o_gwp),
    }


# -------------------------------------------------------------------
# Stationary combustion
# -------------------------------------------------------------------

STATIONARY_SITE = "Central Operations HQ"
STATIONARY_DEPOTS = (
    "Taichung Operations Center",
    "Changhua Distribution Point",
    "Nantou Backup Warehouse",
)
QUANTITY_UNITS = ("L", "gal")


@dataclass(frozen=True)
class CombustionActivity:
    id: str
    name: str
    equipment_code: str
    supported_fuels: Tuple[str, ...]


STATIONARY_ACTIVITIES = (
    CombustionActivity("GEN-001", "Taichung emergency generator", "GEN-001", ("Diesel",)),
    CombustionActivity("GEN-002", "Warehouse backup generator", "GEN-002", ("Unleaded 92", "Unleaded 95")),
    CombustionActivity("BO-101", "Boiler burner", "BO-101", ("Diesel", "Unleaded 98")),
)


def find_activity(activity_id: Optional[str]) -> Optional[CombustionActivity]:
    for activity in STATIONARY_ACTIVITIES:
        if activity.id == activity_id:
            return activity
    return None


def fuels_for_activity(activity_id: Optional[str]) -> Tuple[str, ...]:
    """Fuels the activity burns; every fuel when no activity is selected."""
    activity = find_activity(activity_id)
    return activity.supported_fuels if activity else FUEL_TYPES


@dataclass
class StationaryCombustionRecord:
    depot: str
    activity_id: str
    fuel_type: str
    month: int
    quantity: float
    unit: str
    data_source: str = ""
    notes: str = ""
    attachments: List[Attachment] = field(default_factory=list)

    @property
    def activity(self) -> Optional[CombustionActivity]:
        return find_activity(self.activity_id)

    @property
    def factor(self) -> Optional[GasFactor]:
        return STATIONARY_FACTORS.get(self.fuel_type)

    @property
    def quantity_litres(self) -> float:
        return to_litres(self.quantity, self.unit)

    @property
    def emissions_kg(self) -> Optional[float]:
        factor = self.factor
        if factor is None:
            return None
        return combustion_emissions(self.quantity_litres, factor)

    @classmethod
    def from_row(cls, row: CsvRow, base_url: str = DEFAULT_ATTACHMENT_URL):
        depot = _text(row, "depot")
        activity_id = _text(row, "activityId")
        fuel_type = _text(row, "fuelType")
        unit = _text(row, "unit")
        month = _month(row.get("month"))
        quantity = _non_negative(row.get("quantity"))

        if not depot or not activity_id or fuel_type not in FUEL_TYPES or unit not in QUANTITY_UNITS:
            return None
        if month is None or quantity is None:
            return None

        return cls(
            depot=depot,
            activity_id=activity_id,
            fuel_type=fuel_type,
            month=month,
            quantity=quantity,
            unit=unit,
            data_source=_text(row, "dataSource"),
            notes=_text(row, "notes"),
            attachments=parse_attachment_list(row.get("attachments"), base_url),
        )

    @classmethod
    def from_form(
        cls,
        depot: str,
        activity_id: str,
        fuel_type: str,
        month,
        quantity,
        unit: str,
        data_source: str,
        notes: str = "",
        attachments: Optional[List[Attachment]] = None,
    ):
        _require((depot or "").strip(), "Select a depot.")
        _require(find_activity(activity_id), "Select an activity from the list.")
        _require(
            fuel_type in fuels_for_activity(activity_id),
            "The selected fuel type is not used by this activity.",
        )
        month = _month(month)
        _require(month is not None, "Select a month between 1 and 12.")
        quantity = _non_negative(quantity)
        _require(quantity is not None, "Fuel quantity must be a number of 0 or more.")
        _require(unit in QUANTITY_UNITS, "Select a unit (L or gal).")
        _require((data_source or "").strip(), "Enter the data source.")

        return cls(
            depot=depot.strip(),
            activity_id=activity_id,
            fuel_type=fuel_type,
            month=month,
            quantity=quantity,
            unit=unit,
            data_source=data_source.strip(),
            notes=_notes(notes),
            attachments=list(attachments or []),
        )

    def table_row(self) -> Dict[str, str]:
        activity = self.activity
        factor = self.factor
        row = {
            "Site": STATIONARY_SITE,
            "Depot": self.depot,
            "Activity": activity.name if activity else self.activity_id,
            "Equipment code": activity.equipment_code if activity else EMPTY,
            "Fuel type": self.fuel_type,
            "Month": format_month(self.month),
            "Quantity": format_number(self.quantity),
            "Unit": self.unit,
        }
        if factor is not None:
            row.update(_gas_columns(factor))
            row["Emissions (kg CO₂e)"] = format_emission(self.emissions_kg)
        else:
            for column in list(_gas_columns(STATIONARY_FACTORS["Diesel"])) + ["Emissions (kg CO₂e)"]:
                row[column] = EMPTY
        row.update({
            "Data source": self.data_source or EMPTY,
            "Factor source": factor.source if factor else EMPTY,
            "Attachments": attachment_names(self.attachments),
            "Notes": self.notes or EMPTY,
        })
        return row


# -------------------------------------------------------------------
# Mobile sources
# -------------------------------------------------------------------

MOBILE_DEFAULT_STATION = "Northern Operations HQ"


@dataclass(frozen=True)
class Depot:
    name: str
    station: str
    vehicles: Tuple[str, ...]


MOBILE_DEPOTS = (
    Depot("Taipei Fleet Center", MOBILE_DEFAULT_STATION, ("TPE-001", "TPE-002", "TPE-105")),
    Depot("Xinzhuang Logistics Point", MOBILE_DEFAULT_STATION, ("XZ-301", "XZ-318")),
    Depot("Taoyuan Delivery Point", MOBILE_DEFAULT_STATION, ("TY-210", "TY-226")),
)


def station_for_depot(depot: str) -> str:
    for definition in MOBILE_DEPOTS:
        if definition.name == depot:
            return definition.station
    return ""


def vehicles_for_depot(depot: Optional[str]) -> Tuple[str, ...]:
    for definition in MOBILE_DEPOTS:
        if definition.name == depot:
            return definition.vehicles
    return ()


@dataclass
class MobileSourceRecord:
    station: str
    depot: str
    vehicle: str
    fuel_type: str
    month: int
    volume: float
    data_source: str = ""
    notes: str = ""
    attachments: List[Attachment] = field(default_factory=list)

    @property
    def factor(self) -> GasFactor:
        return MOBILE_FACTORS[self.fuel_type]

    @property
    def emissions_kg(self) -> float:
        return combustion_emissions(self.volume, self.factor)

    @classmethod
    def from_row(cls, row: CsvRow, base_url: str = DEFAULT_ATTACHMENT_URL):
        depot = _text(row, "depot")
        vehicle = _text(row, "vehicle")
        fuel_type = _text(row, "fuelType")
        month = _month(row.get("month"))
        volume = _non_negative(row.get("volume"))

        if not depot or not vehicle or fuel_type not in FUEL_TYPES:
            return None
        if month is None or volume is None:
            return None

        return cls(
            station=_text(row, "station") or station_for_depot(depot) or MOBILE_DEFAULT_STATION,
            depot=depot,
            vehicle=vehicle,
            fuel_type=fuel_type,
            month=month,
            volume=volume,
            data_source=_text(row, "dataSource"),
            notes=_text(row, "notes"),
            attachments=parse_attachment_list(row.get("attachments"), base_url),
        )

    @classmethod
    def from_form(
        cls,
        depot: str,
        vehicle: str,
        fuel_type: str,
        month,
        volume,
        data_source: str,
        notes: str = "",
        attachments: Optional[List[Attachment]] = None,
    ):
        month = _month(month)
        volume = _non_negative(volume)
        _require(
            (depot or "").strip() and (vehicle or "").strip() and fuel_type and month is not None
            and volume is not None and (data_source or "").strip(),
            "Fill in every required field. Fuel volume cannot be negative.",
        )
        _require(fuel_type in FUEL_TYPES, "The fuel type is not allowed. Select another one.")

        depot = depot.strip()
        return cls(
            station=station_for_depot(depot) or MOBILE_DEFAULT_STATION,
            depot=depot,
            vehicle=vehicle.strip(),
            fuel_type=fuel_type,
            month=month,
            volume=volume,
            data_source=data_source.strip(),
            notes=_notes(notes),
            attachments=list(attachments or []),
        )

    def table_row(self) -> Dict[str, str]:
        factor = self.factor
        row = {
            "Station": self.station,
            "Depot": self.depot,
            "Vehicle": self.vehicle,
            "Fuel type": self.fuel_type,
            "Month": format_month(self.month),
            "Volume (L)": format_number(self.volume),
        }
        row.update(_gas_columns(factor))
        row.update({
            "Emissions (kg CO₂e)": format_emission(self.emissions_kg),
            "Factor source": factor.source,
            "Attachments": attachment_names(self.attachments),
            "Data source": self.data_source or EMPTY,
            "Notes": self.notes or EMPTY,
        })
        return row


# -------------------------------------------------------------------
# Fugitive emissions
# -------------------------------------------------------------------

FUGITIVE_STATION = "Taoyuan Smart Logistics Park"
FUGITIVE_DEPOTS = ("North 1 Storage Area", "North 2 Maintenance Area", "Cold Chain Plant Room")


@dataclass(frozen=True)
class FugitiveActivity:
    id: str
    name: str
    model: str


FUGITIVE_ACTIVITIES = (
    FugitiveActivity("FE-WTR-01", "Water dispenser refrigerant top-up", "AquaPure-500"),
    FugitiveActivity("FE-EXT-CO2", "CO₂ extinguisher refill", "SafeGuard-CO2-10"),
    FugitiveActivity("FE-EXT-DRY", "Dry powder extinguisher leak refill", "SafeGuard-DP-8"),
    FugitiveActivity("FE-SPARE-01", "Backup extinguisher service", "ReserveShield-6"),
)


def find_fugitive_activity(activity_id: Optional[str]) -> Optional[FugitiveActivity]:
    activity_id = (activity_id or "").strip()
    for activity in FUGITIVE_ACTIVITIES:
        if activity.id == activity_id:
            return activity
    return None


@dataclass
class FugitiveRecord:
    depot: str
    activity_id: str
    content_type: str
    quantity_kg: float
    data_source: str = EMPTY
    notes: str = ""
    attachments: List[Attachment] = field(default_factory=list)
    station: str = FUGITIVE_STATION

    @property
    def activity(self) -> FugitiveActivity:
        return find_fugitive_activity(self.activity_id)

    @property
    def activity_name(self) -> str:
        return self.activity.name

    @property
    def model(self) -> str:
        return self.activity.model

    @property
    def factor(self) -> FactorEntry:
        return CONTENT_FACTORS[self.content_type]

    @property
    def emissions_kg(self) -> float:
        return fugitive_emissions(self.quantity_kg, self.factor)

    @classmethod
    def from_row(cls, row: CsvRow, base_url: str = DEFAULT_ATTACHMENT_URL):
        activity = find_fugitive_activity(row.get("activityId"))
        content_type = _text(row, "contentType")
        quantity = _non_negative(row.get("quantityKg"))

        if activity is None or content_type not in CONTENT_FACTORS or quantity is None:
            return None

        return cls(
            depot=_text(row, "depot") or FUGITIVE_DEPOTS[0],
            activity_id=activity.id,
            content_type=content_type,
            quantity_kg=quantity,
            data_source=_text(row, "dataSource") or EMPTY,
            notes=_text(row, "notes"),
            attachments=parse_attachment_list(row.get("attachments"), base_url),
        )

    @classmethod
    def from_form(
        cls,
        activity_id: str,
        content_type: str,
        quantity_kg,
        depot: str = "",
        data_source: str = "",
        notes: str = "",
        attachments: Optional[List[Attachment]] = None,
    ):
        activity = find_fugitive_activity(activity_id)
        _require(activity, "Select an activity from the list.")
        _require(content_type in CONTENT_FACTORS, "Select a content type.")
        quantity = _non_negative(quantity_kg)
        _require(quantity is not None, "Quantity (kg) must be a number of 0 or more.")

        return cls(
            depot=(depot or "").strip() or FUGITIVE_DEPOTS[0],
            activity_id=activity.id,
            content_type=content_type,
            quantity_kg=quantity,
            data_source=(data_source or "").strip() or EMPTY,
            notes=_notes(notes),
            attachments=list(attachments or []),
        )

    def table_row(self) -> Dict[str, str]:
        factor = self.factor
        return {
            "Station": self.station,
            "Depot": self.depot,
            "Activity": self.activity_name,
            "Equipment model": self.model,
            "Quantity (kg)": format_number(self.quantity_kg, 0, 3),
            "Content type": self.content_type,
            "Emission factor": format_emission(factor.factor),
            "Factor unit": factor.unit,
            "GWP": format_number(factor.gwp),
            "Emissions (kg CO₂e)": format_emission(self.emissions_kg),
            "Data source": self.data_source,
            "Factor source": factor.source,
            "Factor type": factor.factor_type,
            "Attachments": attachment_names(self.attachments),
            "Notes": self.notes or EMPTY,
        }


# -------------------------------------------------------------------
# Septic tank
# -------------------------------------------------------------------

SEPTIC_STATION = "Northern Operations HQ"
SEPTIC_DEPOTS = ("Taipei Operations Center", "Xinzhuang Logistics Point", "Taoyuan Distribution Center")


@dataclass
class SepticTankRecord:
    depot: str
    month: int
    employees: float
    workdays: float
    leave_days: float
    data_source: str = ""
    notes: str = ""
    attachments: List[Attachment] = field(default_factory=list)
    station: str = SEPTIC_STATION

    @property
    def person_days(self) -> float:
        return actual_person_days(self.employees, self.workdays, self.leave_days)

    @property
    def emissions_kg(self) -> float:
        return septic_emissions(self.person_days)

    @classmethod
    def from_row(cls, row: CsvRow, base_url: str = DEFAULT_ATTACHMENT_URL):
        depot = _text(row, "depot")
        month = _month(row.get("month"))
        employees = _non_negative(row.get("employees"))
        workdays = _non_negative(row.get("workdays"))
        leave_days = _non_negative(row.get("leaveDays"))

        if not depot or None in (month, employees, workdays, leave_days):
            return None

        return cls(
            station=_text(row, "station") or SEPTIC_STATION,
            depot=depot,
            month=month,
            employees=employees,
            workdays=workdays,
            leave_days=leave_days,
            data_source=_text(row, "dataSource"),
            notes=_text(row, "notes"),
            attachments=parse_attachment_list(row.get("attachments"), base_url),
        )

    @classmethod
    def from_form(
        cls,
        depot: str,
        month,
        employees,
        workdays,
        leave_days,
        data_source: str,
        notes: str = "",
        attachments: Optional[List[Attachment]] = None,
    ):
        _require((depot or "").strip(), "Select a depot.")
        month = _month(month)
        _require(month is not None, "Select a month between 1 and 12.")
        values = [_non_negative(value) for value in (employees, workdays, leave_days)]
        _require(
            None not in values,
            "Employees, workdays and leave days must be numbers of 0 or more.",
        )
        _require((data_source or "").strip(), "Enter the data source.")

        employees, workdays, leave_days = values
        return cls(
            depot=depot.strip(),
            month=month,
            employees=employees,
            workdays=workdays,
            leave_days=leave_days,
            data_source=data_source.strip(),
            notes=_notes(notes),
            attachments=list(attachments or []),
        )

    def table_row(self) -> Dict[str, str]:
        return {
            "Station": self.station,
            "Depot": self.depot,
            "Month": format_month(self.month),
            "Employees": format_number(self.employees, 0, 0),
            "Workdays": format_number(self.workdays, 0, 0),
            "Leave days": format_emission(self.leave_days),
            "Person-days": format_emission(self.person_days),
            "CH₄ factor": format_factor(SEPTIC_FACTOR.factor),
            "CH₄ GWP": format_emission(SEPTIC_FACTOR.gwp),
            "Emissions (kg CO₂e)": format_emission(self.emissions_kg),
            "Data source": self.data_source or EMPTY,
            "Factor source": SEPTIC_FACTOR.source,
            "Attachments": attachment_names(self.attachments),
            "Notes": self.notes or EMPTY,
        }


# -------------------------------------------------------------------
# Indirect electricity
# -------------------------------------------------------------------

ELECTRICITY_DEFAULT_STATION = "Northern Operations Station"
SITE_OPTIONS = ("Taipei HQ", "Hsinchu R&D Center", "Taichung Operations Office")


def electricity_id(index: int) -> str:
    return f"electricity-{index}"


def _electricity_notes(value: Optional[str]) -> str:
    notes = (value or "").strip()
    return "" if notes == "-" else notes


@dataclass
class ElectricityRecord:
    id: str
    station: str
    site: str
    start_date: str
    end_date: str
    usage_self: float
    usage_shared: float
    notes: str = ""
    attachments: List[Attachment] = field(default_factory=list)

    @property
    def total_usage(self) -> float:
        return self.usage_self + self.usage_shared

    @classmethod
    def from_row(cls, row: CsvRow, index: int, base_url: str = DEFAULT_ATTACHMENT_URL):
        """Rows are never discarded; gaps fall back to defaults."""
        return cls(
            id=electricity_id(index),
            station=_text(row, "Station") or ELECTRICITY_DEFAULT_STATION,
            site=_text(row, "Site") or SITE_OPTIONS[0],
            start_date=_text(row, "StartDate"),
            end_date=_text(row, "EndDate"),
            usage_self=_number(row.get("UsageSelf")) or 0.0,
            usage_shared=_number(row.get("UsageShared")) or 0.0,
            notes=_electricity_notes(row.get("Notes")),
            attachments=parse_attachment_list(row.get("Attachments"), base_url),
        )

    @classmethod
    def from_form(
        cls,
        record_id: str,
        site: str,
        start_date: Optional[dt.date],
        end_date: Optional[dt.date],
        usage_self,
        usage_shared,
        notes: str = "",
        attachments: Optional[List[Attachment]] = None,
    ):
        _require(
            start_date and end_date and start_date <= end_date,
            "Check the billing period. The end date cannot be earlier than the start date.",
        )
        usage_self = _non_negative(usage_self)
        usage_shared = _non_negative(usage_shared)
        _require(
            usage_self is not None and usage_shared is not None,
            "Office electricity usage must be a number of 0 or more.",
        )

        return cls(
            id=record_id,
            station=ELECTRICITY_DEFAULT_STATION,
            site=site or SITE_OPTIONS[0],
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            usage_self=usage_self,
            usage_shared=usage_shared,
            notes=_notes(notes),
            attachments=list(attachments or []),
        )

    def table_row(self) -> Dict[str, str]:
        return {
            "Station": self.station,
            "Site": self.site,
            "Billing start": format_date(self.start_date),
            "Billing end": format_date(self.end_date),
            "Self-use (kWh)": format_number(self.usage_self, 0, 1),
            "Shared (kWh)": format_number(self.usage_shared, 0, 1),
            "Total (kWh)": format_number(self.total_usage, 0, 1),
            "Attachments": attachment_names(self.attachments),
            "Notes": self.notes or "-",
        }


# -------------------------------------------------------------------
# Upstream consumables freight
# -------------------------------------------------------------------

@dataclass(frozen=True)
class ConsumableItem:
    name: str
    weight_kg: float


@dataclass(frozen=True)
class FreightCatalog:
    site_name: str
    depots: Tuple[str, ...]
    vehicles: Tuple[str, ...]
    fuels: Tuple[str, ...]
    items: Tuple[ConsumableItem, ...]
    factors: Dict[str, float]
    factor_source: str
    attachment_separators: str = ";"

    def item_weight(self, name: Optional[str]) -> Optional[float]:
        for item in self.items:
            if item.name == name:
                return item.weight_kg
        return None


LOGISTICS_CATALOG = FreightCatalog(
    site_name="Taipei Logistics Center",
    depots=("North 1 Storage Center", "Taoyuan Transfer Warehouse", "Kaohsiung Distribution Point"),
    vehicles=("3.5T light truck", "7.5T heavy truck", "Refrigerated container truck"),
    fuels=("Unleaded 92", "Unleaded 95", "Diesel", "Jet fuel"),
    items=(
        ConsumableItem("Corrugated box (large)", 0.85),
        ConsumableItem("Corrugated box (medium)", 0.65),
        ConsumableItem("Bubble wrap filler", 0.08),
        ConsumableItem("Pallet", 12.0),
        ConsumableItem("Insulated cooler bag", 0.45),
    ),
    factors=LOGISTICS_FREIGHT_FACTORS,
    factor_source=LOGISTICS_FACTOR_SOURCE,
)

OFFICE_CATALOG = FreightCatalog(
    site_name="Northern Operations HQ",
    depots=("Songshan Office Center", "Banqiao Logistics Point", "Taoyuan Document Warehouse"),
    vehicles=("Sub-3.5T light truck", "5T document van", "Electric delivery van"),
    fuels=("Unleaded 92", "Unleaded 95", "Unleaded 98", "Diesel", "Electricity"),
    items=(
        ConsumableItem("A4 copy paper (5,000 sheets/box)", 12.5),
        ConsumableItem("A3 copy paper (3,000 sheets/box)", 13.2),
        ConsumableItem("High-yield toner cartridge", 0.95),
        ConsumableItem("Binding supplies kit", 2.1),
        ConsumableItem("Stationery refill pack", 5.6),
        ConsumableItem("Computer accessories box", 7.8),
    ),
    factors=OFFICE_FREIGHT_FACTORS,
    factor_source=OFFICE_FACTOR_SOURCE,
    attachment_separators=";,",
)


@dataclass
class ConsumableRecord:
    location: str
    month: int
    item: str
    vehicle: str
    fuel_type: str
    origin: str
    destination: str
    quantity: float
    unit_weight_kg: float
    distance_km: float
    data_source: str = ""
    factor_source: str = ""
    notes: str = ""
    attachments: List[Attachment] = field(default_factory=list)

    catalog: ClassVar[FreightCatalog] = LOGISTICS_CATALOG

    def __post_init__(self):
        if not self.factor_source:
            self.factor_source = self.catalog.factor_source

    @property
    def factor(self) -> float:
        return freight_factor(self.catalog.factors, self.vehicle, self.fuel_type)

    @property
    def weight_t(self) -> float:
        return freight_emissions(self.quantity, self.unit_weight_kg, self.distance_km, self.factor)[0]

    @property
    def emissions_kg(self) -> float:
        return freight_emissions(self.quantity, self.unit_weight_kg, self.distance_km, self.factor)[1]

    @classmethod
    def from_row(cls, row: CsvRow, base_url: str = DEFAULT_ATTACHMENT_URL):
        text = {
            key: _text(row, key)
            for key in ("location", "item", "vehicle", "fuelType", "origin", "destination")
        }
        if not all(text.values()):
            return None

        month = _integer(row.get("month"))
        quantity = _number(row.get("quantity"))
        unit_weight = _number(row.get("unitWeightKg"))
        distance = _number(row.get("distanceKm"))
        if month is None or month < 1 or None in (quantity, unit_weight, distance):
            return None

        return cls(
            location=text["location"],
            month=month,
            item=text["item"],
            vehicle=text["vehicle"],
            fuel_type=text["fuelType"],
            origin=text["origin"],
            destination=text["destination"],
            quantity=quantity,
            unit_weight_kg=unit_weight,
            distance_km=distance,
            data_source=_text(row, "dataSource"),
            factor_source=_text(row, "factorSource") or cls.catalog.factor_source,
            notes=_text(row, "notes"),
            attachments=parse_attachment_list(
                row.get("attachments"), base_url, cls.catalog.attachment_separators
            ),
        )

    @classmethod
    def from_form(
        cls,
        location: str,
        month,
        item: str,
        vehicle: str,
        fuel_type: str,
        origin: str,
        destination: str,
        quantity,
        unit_weight_kg,
        distance_km,
        data_source: str = "",
        notes: str = "",
        attachments: Optional[List[Attachment]] = None,
    ):
        _require(
            all((value or "").strip() for value in (location, item, vehicle, fuel_type)),
            "Select the site, item, vehicle and fuel type.",
        )
        month = _integer(month)
        _require(month is not None and month >= 1, "Select a month.")

        numbers = []
        for value, label in (
            (quantity, "Item quantity"),
            (unit_weight_kg, "Unit weight"),
            (distance_km, "Transport distance"),
        ):
            number = _non_negative(value)
            _require(number is not None, f"{label} must be a number of 0 or more.")
            numbers.append(number)

        return cls(
            location=location.strip(),
            month=month,
            item=item.strip(),
            vehicle=vehicle.strip(),
            fuel_type=fuel_type.strip(),
            origin=(origin or "").strip(),
            destination=(destination or "").strip(),
            quantity=numbers[0],
            unit_weight_kg=numbers[1],
            distance_km=numbers[2],
            data_source=(data_source or "").strip(),
            notes=_notes(notes),
            attachments=list(attachments or []),
        )

    def table_row(self) -> Dict[str, str]:
        return {
            "Site": self.catalog.site_name,
            "Depot": self.location,
            "Month": format_month(self.month),
            "Item": self.item,
            "Vehicle": self.vehicle,
            "Fuel type": self.fuel_type,
            "Origin": self.origin or EMPTY,
            "Destination": self.destination or EMPTY,
            "Quantity": format_number(self.quantity),
            "Unit weight (kg)": format_number(self.unit_weight_kg, 0, 3),
            "Total weight (t)": format_number(self.weight_t, 0, 3),
            "Distance (km)": format_number(self.distance_km),
            "Factor (kg CO₂e / tkm)": format_number(self.factor, 3, 3),
            "Emissions (kg CO₂e)": format_emission(self.emissions_kg),
            "Data source": self.data_source or EMPTY,
            "Factor source": self.factor_source,
            "Attachments": attachment_names(self.attachments),
            "Notes": self.notes or EMPTY,
        }


@dataclass
class LogisticsConsumableRecord(ConsumableRecord):
    catalog: ClassVar[FreightCatalog] = LOGISTICS_CATALOG


@dataclass
class OfficeConsumableRecord(ConsumableRecord):
    catalog: ClassVar[FreightCatalog] = OFFICE_CATALOG


# -------------------------------------------------------------------
# Business travel
# -------------------------------------------------------------------

COMPANY_NAME = "Green Route Technology Co., Ltd."
TRANSPORT_OPTIONS = {
    "plane": "Plane",
    "hsr": "High-speed rail",
    "train": "Train",
    "car": "Car",
    "metro": "Metro",
}
CABIN_OPTIONS = {
    "economy": "Economy",
    "business": "Business",
    "first": "First",
}

_TRAVEL_ID = re.compile(r"^rec-(\d+)$")


def max_travel_index(records: Iterable["BusinessTravelRecord"]) -> int:
    highest = 0
    for record in records:
        match = _TRAVEL_ID.match(record.id)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest


def travel_id(index: int) -> str:
    return f"rec-{index}"


def _fallback_number(value, fallback: float) -> float:
    number = _number(value)
    return fallback if number is None or number < 0 else number


@dataclass
class BusinessTravelRecord:
    id: str
    site: str
    departure_date: str
    transportation: str
    origin: str
    destination: str
    daily_trips: float
    passengers: float
    distance_km: float
    cabin_class: Optional[str] = None
    company: str = COMPANY_NAME
    data_source: str = ""
    notes: str = ""
    attachments: List[Attachment] = field(default_factory=list)

    @property
    def factor(self) -> FactorEntry:
        return travel_factor(self.transportation, self.cabin_class)

    @property
    def footprint_kg(self) -> float:
        return travel_emissions(self.passengers, self.distance_km, self.factor)[0]

    @property
    def emissions_kg(self) -> float:
        return travel_emissions(self.passengers, self.distance_km, self.factor)[1]

    @staticmethod
    def _cabin(transportation: str, cabin_class: Optional[str]) -> Optional[str]:
        cabin_class = (cabin_class or "").strip()
        if transportation == "plane" and cabin_class in CABIN_OPTIONS:
            return cabin_class
        return None

    @classmethod
    def from_row(cls, row: CsvRow, base_url: str = DEFAULT_ATTACHMENT_URL):
        record_id = _text(row, "id")
        site = _text(row, "site")
        origin = _text(row, "origin")
        destination = _text(row, "destination")
        transportation = _text(row, "transportation")
        daily_trips = _non_negative(row.get("dailyTrips"))
        passengers = _number(row.get("passengers"))
        distance = _non_negative(row.get("distanceKm"))

        if not record_id or not site or not origin or not destination:
            return None
        if transportation not in TRANSPORT_OPTIONS:
            return None
        if daily_trips is None or distance is None or passengers is None or passengers <= 0:
            return None

        return cls(
            id=record_id,
            company=_text(row, "company") or COMPANY_NAME,
            site=site,
            departure_date=_text(row, "departureDate"),
            transportation=transportation,
            cabin_class=cls._cabin(transportation, row.get("cabinClass")),
            origin=origin,
            destination=destination,
            daily_trips=daily_trips,
            passengers=passengers,
            distance_km=distance,
            data_source=_text(row, "dataSource"),
            notes=_text(row, "notes"),
            attachments=parse_attachment_list(row.get("attachments"), base_url),
        )

    @classmethod
    def from_form(
        cls,
        record_id: str,
        transportation: str,
        site: str = "",
        departure_date: Optional[dt.date] = None,
        cabin_class: Optional[str] = None,
        origin: str = "",
        destination: str = "",
        daily_trips=None,
        passengers=None,
        distance_km=None,
        data_source: str = "",
        notes: str = "",
        attachments: Optional[List[Attachment]] = None,
    ):
        _require(transportation in TRANSPORT_OPTIONS, "Select a transport mode.")
        _require(
            transportation != "plane" or (cabin_class or "").strip(),
            "A cabin class is required for flights.",
        )
        passengers = _fallback_number(passengers, 1)
        _require(passengers > 0, "Passengers must be greater than 0.")

        return cls(
            id=record_id,
            site=(site or "").strip() or SITE_OPTIONS[0],
            departure_date=departure_date.isoformat() if departure_date else "",
            transportation=transportation,
            cabin_class=cls._cabin(transportation, cabin_class),
            origin=(origin or "").strip(),
            destination=(destination or "").strip(),
            daily_trips=_fallback_number(daily_trips, 0),
            passengers=passengers,
            distance_km=_fallback_number(distance_km, 0),
            data_source=(data_source or "").strip(),
            notes=_notes(notes),
            attachments=list(attachments or []),
        )

    def table_row(self) -> Dict[str, str]:
        factor = self.factor
        return {
            "ID": self.id,
            "Company": self.company,
            "Site": self.site,
            "Departure": format_date(self.departure_date),
            "Transport": TRANSPORT_OPTIONS.get(self.transportation, self.transportation),
            "Cabin": CABIN_OPTIONS.get(self.cabin_class, EMPTY),
            "Origin": self.origin,
            "Destination": self.destination,
            "Daily trips": format_number(self.daily_trips),
            "Passengers": format_number(self.passengers),
            "Distance (km)": format_emission(self.distance_km),
            "Factor (kg CO₂e / pkm)": format_number(factor.factor, 3, 3),
            "GWP": format_number(factor.gwp) if factor.gwp is not None else EMPTY,
            "Footprint (kg CO₂e)": format_emission(self.footprint_kg),
            "Emissions (kg CO₂e)": format_emission(self.emissions_kg),
            "Factor source": factor.source,
            "Data source": self.data_source or EMPTY,
            "Attachments": attachment_names(self.attachments),
            "Notes": self.notes or EMPTY,
        }


# -------------------------------------------------------------------
# Purchased goods & services: forklifts
# -------------------------------------------------------------------

_FORKLIFT_REQUIRED = (
    "site_name",
    "depot_name",
    "model",
    "usage",
    "purchase_date",
    "energy_type",
    "annual_usage",
    "usage_unit",
    "emission_factor",
    "emission_factor_unit",
    "gwp",
    "emissions",
    "data_source",
    "factor_source",
)


@dataclass
class ForkliftRecord:
    site_name: str
    depot_name: str
    model: str
    usage: str
    purchase_date: str
    energy_type: str
    annual_usage: float
    usage_unit: str
    emission_factor: float
    emission_factor_unit: str
    gwp: float
    emissions: float
    data_source: str
    factor_source: str
    notes: str = ""
    attachments: List[Attachment] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: CsvRow, base_url: str = DEFAULT_ATTACHMENT_URL):
        values = {key: _text(row, key) for key in _FORKLIFT_REQUIRED}
        if not all(values.values()):
            return None

        numbers = {
            key: _number(values[key], thousands=True)
            for key in ("annual_usage", "emission_factor", "gwp", "emissions")
        }
        if None in numbers.values():
            return None

        return cls(
            site_name=values["site_name"],
            depot_name=values["depot_name"],
            model=values["model"],
            usage=values["usage"],
            purchase_date=values["purchase_date"],
            energy_type=values["energy_type"],
            annual_usage=numbers["annual_usage"],
            usage_unit=values["usage_unit"],
            emission_factor=numbers["emission_factor"],
            emission_factor_unit=values["emission_factor_unit"],
            gwp=numbers["gwp"],
            emissions=numbers["emissions"],
            data_source=values["data_source"],
            factor_source=values["factor_source"],
            notes=_text(row, "notes"),
            attachments=parse_labelled_attachment_list(row.get("attachments"), base_url),
        )

    def table_row(self) -> Dict[str, str]:
        return {
            "Site": self.site_name,
            "Depot": self.depot_name,
            "Model": self.model,
            "Usage": self.usage,
            "Purchase date": format_date(self.purchase_date),
            "Energy type": self.energy_type,
            "Annual usage": format_number(self.annual_usage),
            "Usage unit": self.usage_unit,
            "Emission factor": format_factor(self.emission_factor),
            "Factor unit": self.emission_factor_unit,
            "GWP": format_number(self.gwp),
            "Emissions (kg CO₂e)": format_emission(self.emissions),
            "Data source": self.data_source,
            "Factor source": self.factor_source,
            "Attachments": attachment_names(self.attachments),
            "Notes": self.notes or EMPTY,
        }


def table_rows(records: Sequence) -> List[Dict[str, str]]:
    return [record.table_row() for record in records]
