"""Per-project cost aggregation.

Every function here is pure and total: records that match nothing add zero,
and time entries or usage rows pointing at a worker or material that no longer
exists are skipped rather than treated as errors. Rates and unit prices are
read at call time, so a rate change applies to historical entries as well.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping, Optional, TypeVar, Union

from .models import ManualExpense, Material, MaterialUsage, Receipt, TimeEntry, Worker

ZERO = Decimal("0")

R = TypeVar("R", Worker, Material)
Lookup = Union[Mapping[str, R], Iterable[R]]


def index_by_id(records: Lookup) -> Mapping[str, R]:
    if isinstance(records, Mapping):
        return records
    return {record.id: record for record in records}


def entry_earnings(entry: TimeEntry, workers: Lookup[Worker]) -> Decimal:
    worker: Optional[Worker] = index_by_id(workers).get(entry.worker_id)
    if worker is None:
        return ZERO
    return entry.hours * worker.hourly_rate


def usage_cost(usage: MaterialUsage, materials: Lookup[Material]) -> Decimal:
    material: Optional[Material] = index_by_id(materials).get(usage.material_id)
    if material is None:
        return ZERO
    return usage.quantity * material.unit_price


def labor_cost(project_id: str, time_entries: Iterable[TimeEntry], workers: Lookup[Worker]) -> Decimal:
    by_id = index_by_id(workers)
    return sum(
        (entry_earnings(entry, by_id) for entry in time_entries if entry.project_id == project_id),
        ZERO,
    )


def material_cost(project_id: str, material_usage: Iterable[MaterialUsage], materials: Lookup[Material]) -> Decimal:
    by_id = index_by_id(materials)
    return sum(
        (usage_cost(usage, by_id) for usage in material_usage if usage.project_id == project_id),
        ZERO,
    )


def manual_expense_cost(project_id: str, manual_expenses: Iterable[ManualExpense]) -> Decimal:
    return sum((expense.amount for expense in manual_expenses if expense.project_id == project_id), ZERO)


def receipt_cost(project_id: str, receipts: Iterable[Receipt]) -> Decimal:
    return sum((receipt.amount for receipt in receipts if receipt.project_id == project_id), ZERO)


@dataclass(frozen=True)
class CostBreakdown:
    labor_cost: Decimal = ZERO
    material_cost: Decimal = ZERO
    manual_expense_cost: Decimal = ZERO
    receipt_cost: Decimal = ZERO

    @property
    def total_cost(self) -> Decimal:
        return self.labor_cost + self.material_cost + self.manual_expense_cost + self.receipt_cost


def cost_breakdown(
    project_id: str,
    time_entries: Iterable[TimeEntry],
    material_usage: Iterable[MaterialUsage],
    manual_expenses: Iterable[ManualExpense],
    receipts: Iterable[Receipt],
    workers: Lookup[Worker],
    materials: Lookup[Material],
) -> CostBreakdown:
    return CostBreakdown(
        labor_cost=labor_cost(project_id, time_entries, workers),
        material_cost=material_cost(project_id, material_usage, materials),
        manual_expense_cost=manual_expense_cost(project_id, manual_expenses),
        receipt_cost=receipt_cost(project_id, receipts),
    )
