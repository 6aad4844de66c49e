# inventory/store.py
import logging
from typing import Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

from .attachments import Attachment
from .csv_loader import CsvRow

logger = logging.getLogger(__name__)

R = TypeVar("R")

RowParser = Callable[[CsvRow], Optional[R]]


class RecordStore(Generic[R]):
    """Ordered, in-memory list of one page's activity records."""

    def __init__(self, name: str, records: Optional[Iterable[R]] = None):
        self.name = name
        self._records: List[R] = list(records or [])
        self.discarded = 0

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[R]:
        return iter(self._records)

    def __getitem__(self, index: int) -> R:
        return self._records[index]

    @property
    def records(self) -> List[R]:
        return list(self._records)

    def seed(self, rows: Iterable[CsvRow], parser: RowParser) -> int:
        """Replace the records with the parsed rows. Returns how many were kept."""
        records = []
        discarded = 0
        for row in rows:
            record = parser(row)
            if record is None:
                discarded += 1
                continue
            records.append(record)

        self._records = records
        self.discarded = discarded
        if discarded:
            logger.warning("%s: discarded %d malformed CSV row(s)", self.name, discarded)
        logger.info("%s: loaded %d record(s)", self.name, len(records))
        return len(records)

    def add(self, record: R) -> R:
        self._records.append(record)
        logger.info("%s: record added (%d total)", self.name, len(self._records))
        return record

    def prepend(self, record: R) -> R:
        self._records.insert(0, record)
        logger.info("%s: record added at top (%d total)", self.name, len(self._records))
        return record

    def attach(self, index: int, attachments: Iterable[Attachment]) -> R:
        record = self._records[index]
        new = list(attachments)
        record.attachments.extend(new)
        logger.info("%s: %d attachment(s) added to record %d", self.name, len(new), index)
        return record

    def remove_attachment(self, index: int, attachment_index: int) -> Attachment:
        record = self._records[index]
        removed = record.attachments.pop(attachment_index)
        logger.info("%s: attachment '%s' removed from record %d", self.name, removed.name, index)
        return removed
