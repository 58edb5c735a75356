from __future__ import annotations
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, Union

from .costs import Lookup, cost_breakdown
from .models import ManualExpense, Material, MaterialUsage, Project, ProjectStatus, Receipt, TimeEntry, Worker
from .views import format_currency

STATUS_LABELS = {
    ProjectStatus.ACTIVE.value: "In Progress",
    ProjectStatus.COMPLETED.value: "Completed",
}
DEFAULT_STATUS_LABEL = "Pending"


def status_label(status: Union[ProjectStatus, str, None]) -> str:
    """Display label for a project status; anything unrecognised reads as pending."""

    if isinstance(status, ProjectStatus):
        status = status.value
    if not isinstance(status, str):
        return DEFAULT_STATUS_LABEL
    return STATUS_LABELS.get(status, DEFAULT_STATUS_LABEL)


@dataclass(frozen=True)
class SummaryRow:
    project_id: str
    name: str
    address: str
    status_label: str
    price: Decimal
    labor_cost: Decimal
    material_cost: Decimal
    manual_expense_cost: Decimal
    receipt_cost: Decimal
    total_cost: Decimal
    profit: Decimal
    is_positive: bool

    def display(self) -> Dict[str, str]:
        return {
            "labor": format_currency(self.labor_cost),
            "material": format_currency(self.material_cost),
            "total": format_currency(self.total_cost),
            "price": format_currency(self.price),
            "profit": format_currency(self.profit),
        }

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_summary(
    project: Project,
    time_entries: Iterable[TimeEntry],
    material_usage: Iterable[MaterialUsage],
    manual_expenses: Iterable[ManualExpense],
    receipts: Iterable[Receipt],
    workers: Lookup[Worker],
    materials: Lookup[Material],
) -> SummaryRow:
    costs = cost_breakdown(
        project.id,
        time_entries,
        material_usage,
        manual_expenses,
        receipts,
        workers,
        materials,
    )
    total_cost = costs.total_cost
    profit = project.price - total_cost
    return SummaryRow(
        project_id=project.id,
        name=project.name,
        address=project.address,
        status_label=status_label(project.status),
        price=project.price,
        labor_cost=costs.labor_cost,
        material_cost=costs.material_cost,
        manual_expense_cost=costs.manual_expense_cost,
        receipt_cost=costs.receipt_cost,
        total_cost=total_cost,
        profit=profit,
        # break-even counts as positive
        is_positive=profit >= 0,
    )
