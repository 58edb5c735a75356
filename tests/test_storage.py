import json
from datetime import date
from decimal import Decimal

import pytest

from jobcost.errors import DatasetError, ValidationError
from jobcost.models import PaymentStatus, ProjectStatus, TimeEntry
from jobcost.seed import demo_store
from jobcost.storage import RecordStore


def test_duplicate_ids_are_rejected():
    store = demo_store()

    with pytest.raises(ValidationError, match="Duplicate time entry id t1"):
        store.add_time_entry(TimeEntry("t1", "p2", "w1", Decimal("1"), date(2025, 12, 13)))

    assert len(store.records_for("p2").time_entries) == 0


def test_records_for_unknown_project_is_empty_and_not_indexed():
    store = demo_store()

    records = store.records_for("p404")

    assert records.time_entries == []
    assert "p404" not in store._by_project


def test_record_count():
    # 2 workers, 2 materials, 2 projects, 2 usage, 2 time, 2 expenses, 1 receipt, 3 tasks, 2 payments
    assert demo_store().record_count() == 18


def test_from_dict_accepts_camel_case_keys():
    content = {
        "projects": [
            {"id": "p1", "name": "Bath", "address": "1 Oak", "clientName": "Sam", "status": "active", "price": 9000}
        ],
        "workers": [{"id": "w1", "name": "Lee Park", "initials": "LP", "hourlyRate": 40.5, "projectIds": ["p1"]}],
        "materials": [{"id": "m1", "name": "Tile", "unitPrice": "3.25", "stockQty": 400}],
        "timeEntries": [{"id": "t1", "projectId": "p1", "workerId": "w1", "hours": 6, "date": "2025-12-01"}],
        "materialUsage": [{"id": "u1", "projectId": "p1", "materialId": "m1", "quantity": 100, "date": "2025-12-01"}],
        "payments": [{"id": "pay1", "projectId": "p1", "amount": 3000, "status": "paid", "date": "2025-12-02"}],
        "tasks": [{"id": "k1", "projectId": "p1", "title": "Grout", "assigneeIds": ["w1"], "status": "completed", "dueDate": ""}],
        "ignored": [1, 2, 3],
    }

    store = RecordStore.from_dict(content)

    assert store.projects["p1"].status is ProjectStatus.ACTIVE
    assert store.projects["p1"].client_name == "Sam"
    assert store.workers["w1"].hourly_rate == Decimal("40.5")
    assert store.workers["w1"].project_ids == ("p1",)
    assert store.materials["m1"].unit_price == Decimal("3.25")
    assert store.time_entries["t1"].date == date(2025, 12, 1)
    assert store.payments["pay1"].status is PaymentStatus.PAID
    assert store.tasks["k1"].due_date is None
    assert [usage.id for usage in store.records_for("p1").material_usage] == ["u1"]


def test_unknown_project_status_is_kept():
    store = RecordStore.from_dict(
        {"projects": [{"id": "p1", "name": "Roof", "address": "2 Oak", "client_name": "Al", "status": "on_hold", "price": 1}]}
    )

    assert store.projects["p1"].status == "on_hold"


@pytest.mark.parametrize(
    "content",
    [
        [],
        {"projects": [{"id": "p1", "name": "Roof"}]},
        {"timeEntries": [{"id": "t1", "projectId": "p1", "workerId": "w1", "hours": "lots", "date": "2025-12-01"}]},
        {"payments": [{"id": "x", "projectId": "p1", "amount": 1, "status": "bounced", "date": "2025-12-01"}]},
        {"receipts": [{"id": "r1", "projectId": "p1", "fileName": "a.pdf", "amount": 1, "date": "yesterday"}]},
        {"projects": 5},
        {"workers": {"id": "w1", "name": "Lee"}},
        {"timeEntries": "t1"},
        {"tasks": ["task1"]},
    ],
)
def test_invalid_dataset_rows(content):
    with pytest.raises(DatasetError):
        RecordStore.from_dict(content)


def test_from_file_errors(tmp_path):
    with pytest.raises(DatasetError, match="not found"):
        RecordStore.from_file(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(DatasetError, match="not valid JSON"):
        RecordStore.from_file(broken)

    latin = tmp_path / "latin1.json"
    latin.write_bytes(b"\xff\xfe{}")
    with pytest.raises(DatasetError, match="not UTF-8"):
        RecordStore.from_file(latin)


def test_written_dataset_loads_back(tmp_path):
    path = demo_store().write(tmp_path / "data" / "jobs.json")

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["workers"][0]["hourly_rate"] == "45"
    assert raw["tasks"][0]["status"] == "in_progress"

    store = RecordStore.from_file(path)
    assert store.record_count() == 18
    assert store.receipts["r1"].amount == Decimal("450")
    assert store.tasks["task1"].due_date == date(2025, 12, 14)


def test_null_collection_loads_as_empty():
    store = RecordStore.from_dict({"projects": None, "workers": []})

    assert store.record_count() == 0


def test_records_for_returns_a_copy_of_the_index():
    store = demo_store()

    snapshot = store.records_for("p1")
    snapshot.time_entries.append(TimeEntry("t-x", "p1", "w1", Decimal("100"), date(2025, 12, 13)))
    snapshot.payments.clear()

    assert [entry.id for entry in store.records_for("p1").time_entries] == ["t1", "t2"]
    assert [payment.id for payment in store.records_for("p1").payments] == ["pay1"]
