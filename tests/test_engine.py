from datetime import date
from decimal import Decimal

import pytest

from jobcost.costs import labor_cost
from jobcost.engine import DashboardEngine
from jobcost.errors import ProjectNotFoundError
from jobcost.models import Project, ProjectStatus, TimeEntry
from jobcost.seed import demo_store


def build_engine() -> DashboardEngine:
    return DashboardEngine(demo_store())


def test_compute_project_summary_matches_scenario():
    summary = build_engine().compute_project_summary("p1")

    assert summary.total_cost == Decimal("1742.5")
    assert summary.profit == Decimal("23257.5")


def test_unknown_project_is_not_found_rather_than_zero():
    engine = build_engine()

    with pytest.raises(ProjectNotFoundError) as excinfo:
        engine.compute_project_summary("p404")

    assert isinstance(excinfo.value, LookupError)
    assert excinfo.value.project_id == "p404"
    with pytest.raises(ProjectNotFoundError):
        engine.project_payments("p404")


def test_project_with_no_records_returns_zero_summary():
    engine = build_engine()
    engine.store.add_project(Project("p3", "Garage", "3 Elm", "Ray", ProjectStatus.COMPLETED, Decimal("12000")))

    summary = engine.compute_project_summary("p3")
    payments = engine.project_payments("p3")

    assert summary.total_cost == 0
    assert summary.profit == Decimal("12000")
    assert summary.status_label == "Completed"
    assert payments.paid_total == 0
    assert payments.outstanding == Decimal("12000")


def test_all_summaries_follow_project_insertion_order():
    engine = build_engine()
    engine.store.add_project(Project("a0", "Attic", "4 Elm", "Ann", ProjectStatus.ACTIVE, Decimal("100")))

    assert [row.project_id for row in engine.compute_all_summaries()] == ["p1", "p2", "a0"]


def test_indexed_summary_agrees_with_full_scan():
    engine = build_engine()
    store = engine.store

    for project_id in store.projects:
        assert engine.compute_project_summary(project_id).labor_cost == labor_cost(
            project_id, store.time_entries.values(), store.workers
        )


def test_figures_are_recomputed_after_each_mutation():
    engine = build_engine()
    before = engine.compute_portfolio_stats()

    engine.store.add_time_entry(TimeEntry("t3", "p2", "w1", Decimal("2"), date(2025, 12, 13)))
    assert engine.record_mutation_applied() == 1

    after = engine.compute_portfolio_stats()
    assert after.total_expenses == before.total_expenses + Decimal("90")
    assert after.total_profit == before.total_profit - Decimal("90")
    assert engine.compute_project_summary("p2").labor_cost == Decimal("90")


def test_rate_change_applies_to_existing_entries():
    engine = build_engine()
    engine.store.workers["w2"].hourly_rate = Decimal("40")

    assert engine.compute_project_summary("p1").labor_cost == Decimal("660")


def test_portfolio_scenario_two_projects():
    stats = build_engine().compute_portfolio_stats()

    assert stats.active_project_count == 1
    assert stats.total_revenue == Decimal("33500")


def test_project_detail_and_listings():
    engine = build_engine()

    detail = engine.project_detail("p1")

    assert [entry.id for entry in detail.time_entries] == ["t1", "t2"]
    assert [task.id for task in detail.tasks] == ["task1", "task2"]
    assert [payment.id for payment in detail.payments] == ["pay1"]
    assert len(engine.worker_hours()) == 2
    assert len(engine.material_expenses()) == 2


def test_changing_project_detail_does_not_move_summary():
    engine = build_engine()

    detail = engine.project_detail("p1")
    detail.time_entries.append(TimeEntry("t-x", "p1", "w1", Decimal("10"), date(2025, 12, 13)))
    detail.receipts.clear()

    summary = engine.compute_project_summary("p1")
    assert summary.labor_cost == Decimal("622.5")
    assert summary.receipt_cost == Decimal("450")
