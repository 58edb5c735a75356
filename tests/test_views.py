from decimal import Decimal

import pytest

from jobcost.engine import DashboardEngine
from jobcost.seed import demo_store
from jobcost.views import (
    format_currency,
    format_hours,
    format_material_expenses,
    format_portfolio,
    format_project,
    format_summary_table,
    format_worker_hours,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("0"), "$0.00"),
        (Decimal("1234.5"), "$1,234.50"),
        (Decimal("-1234.5"), "-$1,234.50"),
        (Decimal("0.005"), "$0.01"),
        (Decimal("-0.004"), "$0.00"),
        (2.675, "$2.68"),
        (1000000, "$1,000,000.00"),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_format_hours():
    assert format_hours(Decimal("7.5")) == "7.5 hrs"
    assert format_hours(Decimal("8.00")) == "8 hrs"


def test_summary_table_lists_each_project():
    engine = DashboardEngine(demo_store())

    lines = format_summary_table(engine.compute_all_summaries()).splitlines()

    assert lines[0] == "Project Summary"
    assert lines[2].startswith("Miller Kitchen Renovation")
    assert "In Progress" in lines[2]
    assert lines[2].endswith("$23,257.50")
    assert "Pending" in lines[3]


def test_summary_table_without_projects():
    assert format_summary_table([]).splitlines()[-1] == "No projects."


def test_project_shows_profit_or_loss():
    engine = DashboardEngine(demo_store())

    text = format_project(engine.compute_project_summary("p1"), engine.project_payments("p1"))

    assert "Profit:         $23,257.50" in text
    assert "Outstanding:    $15,000.00" in text

    engine.store.projects["p2"].price = Decimal("100")
    loss = format_project(engine.compute_project_summary("p2"), engine.project_payments("p2"))
    assert "Loss:           -$300.00" in loss


def test_portfolio_and_listings():
    engine = DashboardEngine(demo_store())

    assert "Outstanding:       $21,500.00" in format_portfolio(engine.compute_portfolio_stats())
    worker_lines = format_worker_hours(engine.worker_hours()).splitlines()
    assert worker_lines[2].startswith("MR  Mike Ross")
    assert worker_lines[3].endswith("$262.50")
    material_lines = format_material_expenses(engine.material_expenses()).splitlines()
    assert material_lines[-1].endswith("$280.00")
