# inventory/csv_loader.py
import io
import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from .exceptions import CsvLoadError

logger = logging.getLogger(__name__)

CsvRow = Dict[str, str]

BOM = "\ufeff"
QUOTE = '"'


def _close_quotes(lines: List[str]) -> List[str]:
    """Close a quote left open at the end of a line so it cannot swallow the lines after it."""
    closed = []
    for number, line in enumerate(lines, start=1):
        if line.count(QUOTE) % 2:
            logger.warning("CSV line %d has an unbalanced quote; closing it at the end of the line", number)
            line += QUOTE
        closed.append(line)
    return closed


def _read_frame(text: str, **kwargs) -> pd.DataFrame:
    return pd.read_csv(
        io.StringIO(text),
        header=None,
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        skipinitialspace=True,
        engine="python",
        **kwargs,
    )


def parse_csv(text: str) -> List[CsvRow]:
    """
    Parse CSV text into a list of header-keyed rows.

    Every record is one physical line. Quoted fields may hold commas and
    doubled quotes, and a quote may follow leading spaces. Header names and
    values are trimmed, short rows are padded with "", extra values are
    dropped with a warning and rows that are entirely blank are skipped.
    When a header name repeats, the last value wins.
    """
    text = text.removeprefix(BOM).replace("\r\n", "\n")
    lines = _close_quotes([line for line in text.split("\n") if line.strip()])
    if not lines:
        return []

    width = len(_read_frame(lines[0]).columns)
    too_long = []

    def _truncate(fields):
        too_long.append(fields)
        return fields[:width]

    frame = _read_frame("\n".join(lines), on_bad_lines=_truncate)
    if too_long:
        logger.warning(
            "%d CSV row(s) had more than %d values; the extra values were dropped",
            len(too_long),
            width,
        )

    frame = frame.fillna("").astype(str).apply(lambda column: column.str.strip())
    header, *records = frame.values.tolist()

    rows = []
    for values in records:
        if not any(values):
            continue
        row: CsvRow = {}
        for name, value in zip(header, values):
            row[name] = value
        rows.append(row)
    return rows


def load_csv_rows(path: str | Path) -> List[CsvRow]:
    """Read a UTF-8 CSV file and parse it with :func:`parse_csv`."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CsvLoadError(path, str(e)) from e

    try:
        rows = parse_csv(text)
    except pd.errors.ParserError as e:
        raise CsvLoadError(path, str(e)) from e

    logger.debug("Loaded %d rows from %s", len(rows), path)
    return rows
