import random
import string
from datetime import date
from decimal import Decimal

import pytest

from jobcost.models import ManualExpense, Project, ProjectStatus
from jobcost.seed import demo_store
from jobcost.summary import build_summary, status_label


def summarize(store, project_id):
    return build_summary(
        store.projects[project_id],
        store.time_entries.values(),
        store.material_usage.values(),
        store.manual_expenses.values(),
        store.receipts.values(),
        store.workers,
        store.materials,
    )


@pytest.mark.parametrize(
    "status, label",
    [
        (ProjectStatus.ACTIVE, "In Progress"),
        ("active", "In Progress"),
        (ProjectStatus.COMPLETED, "Completed"),
        ("completed", "Completed"),
        (ProjectStatus.PENDING, "Pending"),
        ("on_hold", "Pending"),
        ("ACTIVE", "Pending"),
        ("", "Pending"),
        (None, "Pending"),
        (42, "Pending"),
    ],
)
def test_status_label(status, label):
    assert status_label(status) == label


def test_status_label_is_total_over_arbitrary_strings():
    rng = random.Random(3)
    alphabet = string.printable + "éß中"
    for _ in range(200):
        value = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 12)))
        assert status_label(value) in {"In Progress", "Completed", "Pending"}


def test_build_summary_for_kitchen_job():
    row = summarize(demo_store(), "p1")

    assert row.labor_cost == Decimal("622.5")
    assert row.material_cost == Decimal("450")
    assert row.manual_expense_cost == Decimal("220")
    assert row.receipt_cost == Decimal("450")
    assert row.total_cost == Decimal("1742.5")
    assert row.profit == Decimal("23257.5")
    assert row.is_positive
    assert row.status_label == "In Progress"
    assert row.display() == {
        "labor": "$622.50",
        "material": "$450.00",
        "total": "$1,742.50",
        "price": "$25,000.00",
        "profit": "$23,257.50",
    }


def test_project_without_records_keeps_full_price_as_profit():
    store = demo_store()
    store.add_project(Project("p3", "Porch", "1 Elm", "Lee", "pending", Decimal("4000")))

    row = summarize(store, "p3")

    assert row.total_cost == 0
    assert row.profit == Decimal("4000")
    assert row.is_positive


def test_break_even_counts_as_positive_and_loss_does_not():
    store = demo_store()
    store.add_project(Project("p3", "Fence", "2 Elm", "Lee", ProjectStatus.ACTIVE, Decimal("500")))
    store.add_manual_expense(ManualExpense("e3", "p3", "Posts", Decimal("500"), date(2025, 12, 1)))

    even = summarize(store, "p3")
    assert even.profit == 0
    assert even.is_positive

    store.add_manual_expense(ManualExpense("e4", "p3", "Gate", Decimal("0.01"), date(2025, 12, 2)))
    loss = summarize(store, "p3")
    assert loss.profit == Decimal("-0.01")
    assert not loss.is_positive
    assert loss.display()["profit"] == "-$0.01"
