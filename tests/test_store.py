import logging

import pytest

from inventory.attachments import Attachment
from inventory.records import SepticTankRecord
from inventory.store import RecordStore


def _septic(depot="Taipei Operations Center", month=1):
    return SepticTankRecord(depot=depot, month=month, employees=10, workdays=20, leave_days=0)


def test_seed_counts_discarded_rows(caplog):
    rows = [
        {"depot": "Taipei Operations Center", "month": "1", "employees": "4", "workdays": "20", "leaveDays": "2"},
        {"depot": "Taipei Operations Center", "month": "13", "employees": "4", "workdays": "20", "leaveDays": "2"},
        {"depot": "", "month": "2", "employees": "4", "workdays": "20", "leaveDays": "2"},
    ]
    store = RecordStore("Septic tank")
    with caplog.at_level(logging.WARNING, logger="inventory.store"):
        kept = store.seed(rows, SepticTankRecord.from_row)

    assert kept == 1
    assert len(store) == 1
    assert store.discarded == 2
    assert "discarded 2 malformed" in caplog.text


def test_seed_replaces_existing_records():
    store = RecordStore("Septic tank", [_septic(), _septic(month=2)])
    store.seed([], SepticTankRecord.from_row)
    assert len(store) == 0
    assert store.discarded == 0


def test_add_and_prepend_keep_order():
    store = RecordStore("Septic tank", [_septic(month=1)])
    store.add(_septic(month=2))
    store.prepend(_septic(month=3))
    assert [record.month for record in store] == [3, 1, 2]
    assert store[0].month == 3


def test_records_is_a_copy():
    store = RecordStore("Septic tank", [_septic()])
    store.records.clear()
    assert len(store) == 1


def test_attach_and_remove_attachment():
    store = RecordStore("Septic tank", [_septic()])
    store.attach(0, [Attachment("a.pdf", data=b"1"), Attachment("b.pdf", data=b"2")])
    assert [a.name for a in store[0].attachments] == ["a.pdf", "b.pdf"]

    removed = store.remove_attachment(0, 0)
    assert removed.name == "a.pdf"
    assert [a.name for a in store[0].attachments] == ["b.pdf"]

    with pytest.raises(IndexError):
        store.remove_attachment(0, 5)
