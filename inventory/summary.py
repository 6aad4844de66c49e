# inventory/summary.py
import datetime as dt
from dataclasses import asdict, dataclass, fields
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .csv_loader import CsvRow
from .workflow import STATUS_PERCENTAGE, AuditStatus, parse_status

EMISSION_SOURCE_SEPARATOR = "|"

# Emission source name -> page script that edits it
EMISSION_SOURCE_LINKS: Dict[str, str] = {
    "Stationary combustion": "pages/1_Stationary_Combustion.py",
    "Mobile sources": "pages/2_Mobile_Sources.py",
    "Company fleet fuel use": "pages/2_Mobile_Sources.py",
    "Employee commuting": "pages/2_Mobile_Sources.py",
    "Fugitive emissions": "pages/3_Fugitive_Emissions.py",
    "Process fugitive emissions": "pages/3_Fugitive_Emissions.py",
    "Purchased refrigerant": "pages/3_Fugitive_Emissions.py",
    "Septic tank": "pages/4_Septic_Tank.py",
    "Indirect emissions from imported electricity": "pages/5_Indirect_Electricity.py",
    "Upstream logistics consumables": "pages/6_Logistics_Consumables.py",
    "Upstream office consumables": "pages/7_Office_Consumables.py",
    "Business travel": "pages/8_Business_Travel.py",
    "Product use emissions": "pages/9_Forklift.py",
}


@dataclass(frozen=True)
class InventorySummaryRecord:
    year: int
    country: str
    region: str
    site: str
    emission_sources: tuple
    status: AuditStatus

    @classmethod
    def from_row(cls, row: CsvRow) -> Optional["InventorySummaryRecord"]:
        year_text = (row.get("year") or "").strip()
        country = (row.get("country") or "").strip()
        region = (row.get("region") or "").strip()
        site = (row.get("site") or "").strip()
        sources_text = (row.get("emission_sources") or "").strip()
        status = parse_status(row.get("status") or "")

        if not (year_text and country and region and site and sources_text) or status is None:
            return None

        try:
            year = int(year_text)
        except ValueError:
            return None

        sources = tuple(
            source.strip()
            for source in sources_text.split(EMISSION_SOURCE_SEPARATOR)
            if source.strip()
        )
        return cls(year, country, region, site, sources, status)


@dataclass(frozen=True)
class SummaryFilters:
    year: Optional[int] = None
    country: Optional[str] = None
    region: Optional[str] = None
    site: Optional[str] = None
    status: Optional[AuditStatus] = None

    def matches(self, record: InventorySummaryRecord) -> bool:
        for f in fields(self):
            wanted = getattr(self, f.name)
            if wanted in (None, ""):
                continue
            if getattr(record, f.name) != wanted:
                return False
        return True


def apply_filters(
    records: Iterable[InventorySummaryRecord], filters: SummaryFilters
) -> List[InventorySummaryRecord]:
    return [record for record in records if filters.matches(record)]


def default_year(years: Iterable[int], today: Optional[dt.date] = None) -> Optional[int]:
    """Previous calendar year when present, otherwise the most recent one."""
    years = sorted(set(years))
    if not years:
        return None
    today = today or dt.date.today()
    previous = today.year - 1
    return previous if previous in years else years[-1]


def unique_values(records: Iterable[InventorySummaryRecord], field_name: str) -> list:
    return sorted({getattr(record, field_name) for record in records})


def format_status(status: AuditStatus) -> str:
    return f"{status.value} ({STATUS_PERCENTAGE[status]}%)"


def emission_source_page(name: str) -> Optional[str]:
    return EMISSION_SOURCE_LINKS.get(name)


def summary_frame(records: Sequence[InventorySummaryRecord]) -> pd.DataFrame:
    columns = ["Year", "Country", "Region", "Site", "Emission sources", "Status"]
    if not records:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(
        [
            {
                "Year": record.year,
                "Country": record.country,
                "Region": record.region,
                "Site": record.site,
                "Emission sources": ", ".join(record.emission_sources),
                "Status": format_status(record.status),
            }
            for record in records
        ],
        columns=columns,
    )


def status_counts(records: Iterable[InventorySummaryRecord]) -> pd.DataFrame:
    counts = {status: 0 for status in AuditStatus}
    for record in records:
        counts[record.status] += 1
    return pd.DataFrame(
        [
            {"Status": format_status(status), "Inventories": count}
            for status, count in counts.items()
        ]
    )


def to_csv(records: Sequence[InventorySummaryRecord]) -> bytes:
    rows = []
    for record in records:
        row = asdict(record)
        row["emission_sources"] = EMISSION_SOURCE_SEPARATOR.join(record.emission_sources)
        row["status"] = record.status.value
        rows.append(row)
    frame = pd.DataFrame(
        rows, columns=["year", "country", "region", "site", "emission_sources", "status"]
    )
    return frame.to_csv(index=False).encode("utf-8")
