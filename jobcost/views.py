from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Iterable

from .models import Number, to_decimal

if TYPE_CHECKING:
    from .portfolio import MaterialExpenseRow, PortfolioStats, ProjectPayments, WorkerHoursRow
    from .summary import SummaryRow

CENTS = Decimal("0.01")


def format_currency(value: Number) -> str:
    """US dollars with two decimals, e.g. ``-$1,234.50``."""

    amount = to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_hours(value: Number) -> str:
    return f"{to_decimal(value).normalize():f} hrs"


def format_summary_table(rows: Iterable[SummaryRow]) -> str:
    lines = [
        "Project Summary",
        f"{'Project':<28}  {'Status':<11}  {'Price':>12}  {'Labor':>11}  {'Material':>11}  {'Total':>12}  {'Profit':>12}",
    ]
    count = 0
    for row in rows:
        count += 1
        lines.append(
            f"{row.name[:28]:<28}  {row.status_label:<11}  {format_currency(row.price):>12}  "
            f"{format_currency(row.labor_cost):>11}  {format_currency(row.material_cost):>11}  "
            f"{format_currency(row.total_cost):>12}  {format_currency(row.profit):>12}"
        )
    if not count:
        lines.append("No projects.")
    return "\n".join(lines)


def format_project(row: SummaryRow, payments: ProjectPayments) -> str:
    result_label = "Profit:" if row.is_positive else "Loss:"
    lines = [
        f"{row.name} ({row.project_id})",
        f"Address:        {row.address}",
        f"Status:         {row.status_label}",
        f"Contract price: {format_currency(row.price)}",
        f"Labor:          {format_currency(row.labor_cost)}",
        f"Materials:      {format_currency(row.material_cost)}",
        f"Expenses:       {format_currency(row.manual_expense_cost)}",
        f"Receipts:       {format_currency(row.receipt_cost)}",
        f"Total cost:     {format_currency(row.total_cost)}",
        f"{result_label:<16}{format_currency(row.profit)}",
        f"Paid to date:   {format_currency(payments.paid_total)}",
        f"Outstanding:    {format_currency(payments.outstanding)}",
    ]
    return "\n".join(lines)


def format_portfolio(stats: PortfolioStats) -> str:
    return "\n".join(
        [
            "Portfolio",
            f"Active projects:   {stats.active_project_count}",
            f"Workers logging:   {stats.distinct_working_worker_count}",
            f"Total revenue:     {format_currency(stats.total_revenue)}",
            f"Total expenses:    {format_currency(stats.total_expenses)}",
            f"Total profit:      {format_currency(stats.total_profit)}",
            f"Payments received: {format_currency(stats.total_payments_received)}",
            f"Outstanding:       {format_currency(stats.outstanding_portfolio)}",
        ]
    )


def format_worker_hours(rows: Iterable[WorkerHoursRow]) -> str:
    lines = ["Worker Hours", f"{'':<3} {'Worker':<20}  {'Project':<28}  {'Hours':>10}  {'Earnings':>11}"]
    for row in rows:
        lines.append(
            f"{row.initials:<3} {row.worker_name[:20]:<20}  {row.project_name[:28]:<28}  "
            f"{format_hours(row.hours):>10}  {format_currency(row.earnings):>11}"
        )
    return "\n".join(lines)


def format_material_expenses(rows: Iterable[MaterialExpenseRow]) -> str:
    lines = ["Material Expenses", f"{'Material':<24}  {'Project':<28}  {'Cost':>11}"]
    for row in rows:
        lines.append(f"{row.material_name[:24]:<24}  {row.project_name[:28]:<28}  {format_currency(row.cost):>11}")
    return "\n".join(lines)
