from __future__ import annotations
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping

from .costs import ZERO, Lookup, entry_earnings, index_by_id, usage_cost
from .models import Material, MaterialUsage, Payment, Project, ProjectStatus, TimeEntry, Worker
from .summary import SummaryRow
from .views import format_currency

UNKNOWN_WORKER = "Unknown Worker"
UNKNOWN_PROJECT = "Unknown Project"
UNKNOWN_MATERIAL = "Unknown Material"
UNKNOWN_INITIALS = "NA"


@dataclass(frozen=True)
class PortfolioStats:
    active_project_count: int
    distinct_working_worker_count: int
    total_revenue: Decimal
    total_profit: Decimal
    total_expenses: Decimal
    total_payments_received: Decimal
    outstanding_portfolio: Decimal

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProjectPayments:
    project_id: str
    paid_total: Decimal
    outstanding: Decimal


@dataclass(frozen=True)
class WorkerHoursRow:
    initials: str
    worker_name: str
    project_name: str
    hours: Decimal
    earnings: Decimal


@dataclass(frozen=True)
class MaterialExpenseRow:
    material_name: str
    project_name: str
    cost: Decimal


@dataclass(frozen=True)
class DashboardCard:
    label: str
    status: str
    value: str
    tone: str
    icon: str


def active_project_count(projects: Iterable[Project]) -> int:
    return sum(1 for project in projects if project.status == ProjectStatus.ACTIVE)


def distinct_working_worker_count(time_entries: Iterable[TimeEntry]) -> int:
    """Workers who have ever logged time, regardless of check-in state."""

    return len({entry.worker_id for entry in time_entries})


def total_revenue(projects: Iterable[Project]) -> Decimal:
    return sum((project.price for project in projects), ZERO)


def paid_total(project_id: str, payments: Iterable[Payment]) -> Decimal:
    return sum((payment.amount for payment in payments if payment.project_id == project_id), ZERO)


def outstanding(project: Project, payments: Iterable[Payment]) -> Decimal:
    return project.price - paid_total(project.id, payments)


def project_payment_status(project: Project, payments: Iterable[Payment]) -> ProjectPayments:
    paid = paid_total(project.id, payments)
    return ProjectPayments(project_id=project.id, paid_total=paid, outstanding=project.price - paid)


def compute_portfolio_stats(
    projects: Iterable[Project],
    summaries: Iterable[SummaryRow],
    payments: Iterable[Payment],
    time_entries: Iterable[TimeEntry],
) -> PortfolioStats:
    project_list = list(projects)
    summary_list = list(summaries)
    revenue = total_revenue(project_list)
    received = sum((payment.amount for payment in payments), ZERO)
    return PortfolioStats(
        active_project_count=active_project_count(project_list),
        distinct_working_worker_count=distinct_working_worker_count(time_entries),
        total_revenue=revenue,
        total_profit=sum((row.profit for row in summary_list), ZERO),
        total_expenses=sum((row.total_cost for row in summary_list), ZERO),
        total_payments_received=received,
        outstanding_portfolio=revenue - received,
    )


def worker_hours_rows(
    time_entries: Iterable[TimeEntry],
    workers: Lookup[Worker],
    projects: Mapping[str, Project],
) -> List[WorkerHoursRow]:
    by_id = index_by_id(workers)
    rows: List[WorkerHoursRow] = []
    for entry in time_entries:
        worker = by_id.get(entry.worker_id)
        project = projects.get(entry.project_id)
        rows.append(
            WorkerHoursRow(
                initials=worker.initials if worker else UNKNOWN_INITIALS,
                worker_name=worker.name if worker else UNKNOWN_WORKER,
                project_name=project.name if project else UNKNOWN_PROJECT,
                hours=entry.hours,
                earnings=entry_earnings(entry, by_id),
            )
        )
    return rows


def material_expense_rows(
    material_usage: Iterable[MaterialUsage],
    materials: Lookup[Material],
    projects: Mapping[str, Project],
) -> List[MaterialExpenseRow]:
    by_id = index_by_id(materials)
    rows: List[MaterialExpenseRow] = []
    for usage in material_usage:
        material = by_id.get(usage.material_id)
        project = projects.get(usage.project_id)
        rows.append(
            MaterialExpenseRow(
                material_name=material.name if material else UNKNOWN_MATERIAL,
                project_name=project.name if project else UNKNOWN_PROJECT,
                cost=usage_cost(usage, by_id),
            )
        )
    return rows


def material_used_quantity(material_id: str, material_usage: Iterable[MaterialUsage]) -> Decimal:
    return sum((usage.quantity for usage in material_usage if usage.material_id == material_id), ZERO)


def assigned_project_names(worker: Worker, projects: Iterable[Project]) -> List[str]:
    """Names of the worker's assigned projects, in project order; unknown ids are skipped."""

    assigned = set(worker.project_ids)
    return [project.name for project in projects if project.id in assigned]


def dashboard_cards(stats: PortfolioStats) -> List[DashboardCard]:
    return [
        DashboardCard("Projects", "Active", str(stats.active_project_count), "blue", "PR"),
        DashboardCard("Workers", "Working", str(stats.distinct_working_worker_count), "green", "WK"),
        DashboardCard("Revenue", "Revenue", format_currency(stats.total_revenue), "purple", "RV"),
        DashboardCard("Profit/Loss", "Profit", format_currency(stats.total_profit), "amber", "PL"),
    ]
