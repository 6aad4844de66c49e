"""The bundled CSV files load with the expected kept / discarded counts."""

import itertools
import os

import pytest

from inventory.csv_loader import load_csv_rows
from inventory.factors import DEFAULT_FREIGHT_FACTOR
from inventory.records import (
    ELECTRICITY_DEFAULT_STATION,
    FUGITIVE_DEPOTS,
    BusinessTravelRecord,
    ElectricityRecord,
    ForkliftRecord,
    FugitiveRecord,
    LogisticsConsumableRecord,
    MobileSourceRecord,
    OfficeConsumableRecord,
    SepticTankRecord,
    StationaryCombustionRecord,
    max_travel_index,
)
from inventory.store import RecordStore
from inventory.summary import InventorySummaryRecord


def _seed(data_dir, file_name, parser):
    store = RecordStore(file_name)
    store.seed(load_csv_rows(os.path.join(data_dir, file_name)), parser)
    return store


@pytest.mark.parametrize(
    "file_name, parser, kept, discarded",
    [
        ("stationary-combustion.csv", StationaryCombustionRecord.from_row, 4, 1),
        ("mobile-combustion-activities.csv", MobileSourceRecord.from_row, 4, 1),
        ("fugitive-emissions-activities.csv", FugitiveRecord.from_row, 3, 1),
        ("septic-tank-activities.csv", SepticTankRecord.from_row, 3, 1),
        ("upstream-logistics-consumables.csv", LogisticsConsumableRecord.from_row, 3, 1),
        ("upstream-office-consumables.csv", OfficeConsumableRecord.from_row, 4, 0),
        ("business-travel.csv", BusinessTravelRecord.from_row, 4, 1),
        ("purchased-forklift-activities.csv", ForkliftRecord.from_row, 3, 1),
        ("inventory-summary.csv", InventorySummaryRecord.from_row, 5, 1),
    ],
)
def test_seed_counts(data_dir, file_name, parser, kept, discarded):
    store = _seed(data_dir, file_name, parser)
    assert len(store) == kept
    assert store.discarded == discarded


def test_electricity_seed_keeps_every_row(data_dir):
    counter = itertools.count(1)
    store = _seed(
        data_dir,
        "purchased-electricity-activities.csv",
        lambda row: ElectricityRecord.from_row(row, next(counter)),
    )
    assert [record.id for record in store] == ["electricity-1", "electricity-2", "electricity-3"]
    assert store[0].notes == ""
    assert store[0].attachments[0].url == "https://files.example.com/bill-2024-01.pdf"
    assert store[1].usage_shared == 0
    assert store[2].station == ELECTRICITY_DEFAULT_STATION


def test_fugitive_seed_defaults(data_dir):
    store = _seed(data_dir, "fugitive-emissions-activities.csv", FugitiveRecord.from_row)
    assert store[2].depot == FUGITIVE_DEPOTS[0]
    assert store[2].data_source == "—"


def test_office_seed_attachments_and_fallback_factor(data_dir):
    store = _seed(data_dir, "upstream-office-consumables.csv", OfficeConsumableRecord.from_row)
    assert [a.name for a in store[0].attachments] == ["po-0211.pdf", "delivery-0212.pdf"]
    assert store[0].item == "A4 copy paper (5,000 sheets/box)"
    assert store[3].factor == DEFAULT_FREIGHT_FACTOR


def test_travel_seed(data_dir):
    store = _seed(data_dir, "business-travel.csv", BusinessTravelRecord.from_row)
    assert max_travel_index(store) == 7
    assert store[3].cabin_class is None
    assert store[2].company == "Green Route Technology Co., Ltd."


def test_forklift_seed_attachments(data_dir):
    store = _seed(data_dir, "purchased-forklift-activities.csv", ForkliftRecord.from_row)
    assert [a.name for a in store[0].attachments] == ["Energy report", "maintenance-2024.pdf"]
    assert store[1].annual_usage == 6150.5
