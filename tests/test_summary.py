import datetime as dt
import io

import pandas as pd
import pytest

from inventory.summary import (
    EMISSION_SOURCE_LINKS,
    InventorySummaryRecord,
    SummaryFilters,
    apply_filters,
    default_year,
    emission_source_page,
    format_status,
    status_counts,
    summary_frame,
    to_csv,
    unique_values,
)
from inventory.workflow import AuditStatus


def _row(**overrides):
    row = {
        "year": "2024",
        "country": "Taiwan",
        "region": "North",
        "site": "Taipei HQ",
        "emission_sources": "Stationary combustion| Business travel |",
        "status": "Submitted",
    }
    row.update(overrides)
    return row


@pytest.fixture
def records():
    rows = [
        _row(),
        _row(site="Taoyuan", status="L1Approved"),
        _row(year="2023", status="L2Approved"),
        _row(year="2023", country="Japan", region="Kanto", site="Tokyo", status="Draft"),
    ]
    return [InventorySummaryRecord.from_row(row) for row in rows]


def test_from_row_splits_sources():
    record = InventorySummaryRecord.from_row(_row())
    assert record.emission_sources == ("Stationary combustion", "Business travel")
    assert record.status == AuditStatus.SUBMITTED
    assert record.year == 2024


@pytest.mark.parametrize(
    "overrides",
    [{"status": "Pending"}, {"year": "twenty"}, {"site": ""}, {"emission_sources": " "}],
)
def test_from_row_rejects_incomplete_rows(overrides):
    assert InventorySummaryRecord.from_row(_row(**overrides)) is None


def test_filters_combine(records):
    assert len(apply_filters(records, SummaryFilters())) == 4
    assert len(apply_filters(records, SummaryFilters(year=2023))) == 2
    assert [r.site for r in apply_filters(records, SummaryFilters(year=2023, country="Japan"))] == ["Tokyo"]
    assert apply_filters(records, SummaryFilters(status=AuditStatus.L1_APPROVED))[0].site == "Taoyuan"
    assert apply_filters(records, SummaryFilters(site="Nowhere")) == []


def test_default_year_prefers_previous_year():
    assert default_year([2022, 2023, 2024], dt.date(2024, 5, 1)) == 2023
    assert default_year([2021, 2022], dt.date(2024, 5, 1)) == 2022
    assert default_year([], dt.date(2024, 5, 1)) is None


def test_unique_values(records):
    assert unique_values(records, "year") == [2023, 2024]
    assert unique_values(records, "country") == ["Japan", "Taiwan"]


def test_format_status_and_links():
    assert format_status(AuditStatus.SUBMITTED) == "Submitted (50%)"
    assert format_status(AuditStatus.L2_APPROVED) == "L2Approved (100%)"
    assert emission_source_page("Septic tank") == "pages/4_Septic_Tank.py"
    assert emission_source_page("Leased asset energy use") is None
    assert set(EMISSION_SOURCE_LINKS.values()) >= {"pages/9_Forklift.py", "pages/8_Business_Travel.py"}


def test_frames(records):
    frame = summary_frame(records)
    assert list(frame.columns) == ["Year", "Country", "Region", "Site", "Emission sources", "Status"]
    assert frame.iloc[0]["Emission sources"] == "Stationary combustion, Business travel"
    assert summary_frame([]).empty

    counts = status_counts(records)
    assert counts["Inventories"].tolist() == [1, 1, 1, 1]
    assert counts["Status"].tolist()[0] == "Draft (0%)"


def test_to_csv_round_trips_through_from_row(records):
    frame = pd.read_csv(io.BytesIO(to_csv(records)), dtype=str)
    assert frame.loc[0, "emission_sources"] == "Stationary combustion|Business travel"
    assert frame.loc[0, "status"] == "Submitted"
    parsed = [InventorySummaryRecord.from_row(row) for row in frame.to_dict("records")]
    assert parsed == records
