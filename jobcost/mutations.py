"""Append-only mutations on the record store.

This is the boundary where input is validated: the cost engine assumes every
record it sees already satisfies the entity invariants.
"""

from __future__ import annotations
import secrets
import string
import time
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable, Iterable, Optional, Protocol

from .core.logging import get_logger
from .engine import DashboardEngine
from .errors import ProjectNotFoundError, UnknownReferenceError, ValidationError
from .models import (
    ManualExpense,
    MaterialUsage,
    Number,
    Payment,
    PaymentStatus,
    Receipt,
    Task,
    TaskStatus,
    TimeEntry,
    to_decimal,
)
from .storage import RecordStore

logger = get_logger(__name__)

Clock = Callable[[], date]

_BASE36 = string.digits + string.ascii_lowercase


class IdAllocator(Protocol):
    def allocate(self, prefix: str) -> str:
        ...


def _base36(value: int) -> str:
    digits = []
    while True:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
        if not value:
            return "".join(reversed(digits))


class PrefixedIdAllocator:
    """``<prefix>-<millis in base36>-<4 random chars>``, e.g. ``time-m4x1q2a0-k3f9``."""

    def __init__(self, now_ms: Callable[[], int] = lambda: time.time_ns() // 1_000_000) -> None:
        self.now_ms = now_ms

    def allocate(self, prefix: str) -> str:
        suffix = "".join(secrets.choice(_BASE36) for _ in range(4))
        return f"{prefix}-{_base36(self.now_ms())}-{suffix}"


def _positive(value: Number, field: str) -> Decimal:
    try:
        amount = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be a number") from exc
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return amount


def _required_text(value: Optional[str], field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field} is required")
    return text


class MutationGateway:
    def __init__(
        self,
        store: RecordStore,
        engine: DashboardEngine | None = None,
        ids: IdAllocator | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.store = store
        self.engine = engine
        self.ids = ids or PrefixedIdAllocator()
        self.clock = clock or date.today

    def _require_project(self, project_id: str) -> None:
        if project_id not in self.store.projects:
            raise ProjectNotFoundError(project_id)

    def _applied(self, kind: str, record_id: str, project_id: str) -> None:
        logger.info("record_appended", kind=kind, record_id=record_id, project_id=project_id)
        if self.engine is not None:
            self.engine.record_mutation_applied()

    def add_time_entry(self, project_id: str, *, worker_id: str, hours: Number, on: date | None = None) -> TimeEntry:
        self._require_project(project_id)
        if worker_id not in self.store.workers:
            raise UnknownReferenceError("worker", worker_id)
        entry = TimeEntry(
            id=self.ids.allocate("time"),
            project_id=project_id,
            worker_id=worker_id,
            hours=_positive(hours, "hours"),
            date=on or self.clock(),
        )
        self.store.add_time_entry(entry)
        self._applied("time_entry", entry.id, project_id)
        return entry

    def add_material_usage(
        self, project_id: str, *, material_id: str, quantity: Number, on: date | None = None
    ) -> MaterialUsage:
        self._require_project(project_id)
        if material_id not in self.store.materials:
            raise UnknownReferenceError("material", material_id)
        usage = MaterialUsage(
            id=self.ids.allocate("use"),
            project_id=project_id,
            material_id=material_id,
            quantity=_positive(quantity, "quantity"),
            date=on or self.clock(),
        )
        self.store.add_material_usage(usage)
        self._applied("material_usage", usage.id, project_id)
        return usage

    def add_manual_expense(
        self, project_id: str, *, description: str, amount: Number, on: date | None = None
    ) -> ManualExpense:
        self._require_project(project_id)
        expense = ManualExpense(
            id=self.ids.allocate("exp"),
            project_id=project_id,
            description=_required_text(description, "description"),
            amount=_positive(amount, "amount"),
            date=on or self.clock(),
        )
        self.store.add_manual_expense(expense)
        self._applied("manual_expense", expense.id, project_id)
        return expense

    def add_receipt(self, project_id: str, *, file_name: str, amount: Number, on: date | None = None) -> Receipt:
        self._require_project(project_id)
        receipt = Receipt(
            id=self.ids.allocate("rec"),
            project_id=project_id,
            file_name=_required_text(file_name, "file name"),
            amount=_positive(amount, "amount"),
            date=on or self.clock(),
        )
        self.store.add_receipt(receipt)
        self._applied("receipt", receipt.id, project_id)
        return receipt

    def add_payment(
        self,
        project_id: str,
        *,
        amount: Number,
        status: PaymentStatus | str = PaymentStatus.PARTIAL,
        on: date | None = None,
    ) -> Payment:
        self._require_project(project_id)
        try:
            payment_status = PaymentStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown payment status {status!r}") from exc
        payment = Payment(
            id=self.ids.allocate("pay"),
            project_id=project_id,
            amount=_positive(amount, "amount"),
            status=payment_status,
            date=on or self.clock(),
        )
        self.store.add_payment(payment)
        self._applied("payment", payment.id, project_id)
        return payment

    def add_task(
        self,
        project_id: str,
        *,
        title: str,
        assignee_ids: Iterable[str] = (),
        due_date: date | None = None,
        notes: str | None = None,
    ) -> Task:
        self._require_project(project_id)
        assignees = tuple(assignee_ids)
        for worker_id in assignees:
            if worker_id not in self.store.workers:
                raise UnknownReferenceError("worker", worker_id)
        task = Task(
            id=self.ids.allocate("task"),
            project_id=project_id,
            title=_required_text(title, "title"),
            assignee_ids=assignees,
            status=TaskStatus.NOT_STARTED,
            due_date=due_date,
            notes=(notes or "").strip() or None,
        )
        self.store.add_task(task)
        self._applied("task", task.id, project_id)
        return task

    def set_task_status(self, task_id: str, status: TaskStatus | str) -> Task:
        # Any status may follow any other; there is no enforced workflow.
        task = self.store.tasks.get(task_id)
        if task is None:
            raise UnknownReferenceError("task", task_id)
        try:
            task.status = TaskStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown task status {status!r}") from exc
        logger.info("task_status_set", task_id=task_id, status=task.status.value)
        if self.engine is not None:
            self.engine.record_mutation_applied()
        return task
