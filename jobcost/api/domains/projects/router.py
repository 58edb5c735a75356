import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from jobcost.api.deps import get_engine, get_gateway
from jobcost.engine import DashboardEngine
from jobcost.models import ManualExpense, MaterialUsage, Payment, PaymentStatus, Receipt, Task, TaskStatus, TimeEntry
from jobcost.mutations import MutationGateway
from jobcost.summary import SummaryRow

router = APIRouter(prefix="/projects", tags=["projects"])


class SummaryOut(BaseModel):
    project_id: str
    name: str
    address: str
    status_label: str
    price: float
    labor_cost: float
    material_cost: float
    manual_expense_cost: float
    receipt_cost: float
    total_cost: float
    profit: float
    is_positive: bool
    display: dict[str, str]


class ProjectDetailOut(SummaryOut):
    paid_total: float
    outstanding: float


class TimeEntryCreate(BaseModel):
    worker_id: str
    hours: Decimal = Field(..., gt=0)
    date: datetime.date | None = None


class TimeEntryOut(BaseModel):
    id: str
    project_id: str
    worker_id: str
    hours: float
    date: datetime.date


class MaterialUsageCreate(BaseModel):
    material_id: str
    quantity: Decimal = Field(..., gt=0)
    date: datetime.date | None = None


class MaterialUsageOut(BaseModel):
    id: str
    project_id: str
    material_id: str
    quantity: float
    date: datetime.date


class ExpenseCreate(BaseModel):
    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    date: datetime.date | None = None


class ExpenseOut(BaseModel):
    id: str
    project_id: str
    description: str
    amount: float
    date: datetime.date


class ReceiptCreate(BaseModel):
    file_name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    date: datetime.date | None = None


class ReceiptOut(BaseModel):
    id: str
    project_id: str
    file_name: str
    amount: float
    date: datetime.date


class PaymentCreate(BaseModel):
    amount: Decimal = Field(..., gt=0)
    status: PaymentStatus = PaymentStatus.PARTIAL
    date: datetime.date | None = None


class PaymentOut(BaseModel):
    id: str
    project_id: str
    amount: float
    status: PaymentStatus
    date: datetime.date


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    assignee_ids: list[str] = []
    due_date: datetime.date | None = None
    notes: str | None = None


class TaskOut(BaseModel):
    id: str
    project_id: str
    title: str
    assignee_ids: list[str]
    status: TaskStatus
    due_date: datetime.date | None = None
    notes: str | None = None


class ProjectRecordsOut(BaseModel):
    time_entries: list[TimeEntryOut]
    material_usage: list[MaterialUsageOut]
    manual_expenses: list[ExpenseOut]
    receipts: list[ReceiptOut]
    payments: list[PaymentOut]
    tasks: list[TaskOut]


def _summary_fields(row: SummaryRow) -> dict:
    return {
        "project_id": row.project_id,
        "name": row.name,
        "address": row.address,
        "status_label": row.status_label,
        "price": float(row.price),
        "labor_cost": float(row.labor_cost),
        "material_cost": float(row.material_cost),
        "manual_expense_cost": float(row.manual_expense_cost),
        "receipt_cost": float(row.receipt_cost),
        "total_cost": float(row.total_cost),
        "profit": float(row.profit),
        "is_positive": row.is_positive,
        "display": row.display(),
    }


def _time_entry_out(entry: TimeEntry) -> TimeEntryOut:
    return TimeEntryOut(
        id=entry.id, project_id=entry.project_id, worker_id=entry.worker_id, hours=float(entry.hours), date=entry.date
    )


def _usage_out(usage: MaterialUsage) -> MaterialUsageOut:
    return MaterialUsageOut(
        id=usage.id,
        project_id=usage.project_id,
        material_id=usage.material_id,
        quantity=float(usage.quantity),
        date=usage.date,
    )


def _expense_out(expense: ManualExpense) -> ExpenseOut:
    return ExpenseOut(
        id=expense.id,
        project_id=expense.project_id,
        description=expense.description,
        amount=float(expense.amount),
        date=expense.date,
    )


def _receipt_out(receipt: Receipt) -> ReceiptOut:
    return ReceiptOut(
        id=receipt.id,
        project_id=receipt.project_id,
        file_name=receipt.file_name,
        amount=float(receipt.amount),
        date=receipt.date,
    )


def _payment_out(payment: Payment) -> PaymentOut:
    return PaymentOut(
        id=payment.id,
        project_id=payment.project_id,
        amount=float(payment.amount),
        status=payment.status,
        date=payment.date,
    )


def task_out(task: Task) -> TaskOut:
    return TaskOut(
        id=task.id,
        project_id=task.project_id,
        title=task.title,
        assignee_ids=list(task.assignee_ids),
        status=task.status,
        due_date=task.due_date,
        notes=task.notes,
    )


@router.get("", response_model=list[SummaryOut])
def list_projects(engine: DashboardEngine = Depends(get_engine)) -> list[SummaryOut]:
    return [SummaryOut(**_summary_fields(row)) for row in engine.compute_all_summaries()]


@router.get("/{project_id}", response_model=ProjectDetailOut)
def get_project(project_id: str, engine: DashboardEngine = Depends(get_engine)) -> ProjectDetailOut:
    row = engine.compute_project_summary(project_id)
    payments = engine.project_payments(project_id)
    return ProjectDetailOut(
        **_summary_fields(row),
        paid_total=float(payments.paid_total),
        outstanding=float(payments.outstanding),
    )


@router.get("/{project_id}/records", response_model=ProjectRecordsOut)
def get_project_records(project_id: str, engine: DashboardEngine = Depends(get_engine)) -> ProjectRecordsOut:
    records = engine.project_detail(project_id)
    return ProjectRecordsOut(
        time_entries=[_time_entry_out(entry) for entry in records.time_entries],
        material_usage=[_usage_out(usage) for usage in records.material_usage],
        manual_expenses=[_expense_out(expense) for expense in records.manual_expenses],
        receipts=[_receipt_out(receipt) for receipt in records.receipts],
        payments=[_payment_out(payment) for payment in records.payments],
        tasks=[task_out(task) for task in records.tasks],
    )


@router.post("/{project_id}/time-entries", response_model=TimeEntryOut, status_code=201)
def create_time_entry(
    project_id: str, payload: TimeEntryCreate, gateway: MutationGateway = Depends(get_gateway)
) -> TimeEntryOut:
    entry = gateway.add_time_entry(project_id, worker_id=payload.worker_id, hours=payload.hours, on=payload.date)
    return _time_entry_out(entry)


@router.post("/{project_id}/material-usage", response_model=MaterialUsageOut, status_code=201)
def create_material_usage(
    project_id: str, payload: MaterialUsageCreate, gateway: MutationGateway = Depends(get_gateway)
) -> MaterialUsageOut:
    usage = gateway.add_material_usage(
        project_id, material_id=payload.material_id, quantity=payload.quantity, on=payload.date
    )
    return _usage_out(usage)


@router.post("/{project_id}/expenses", response_model=ExpenseOut, status_code=201)
def create_expense(project_id: str, payload: ExpenseCreate, gateway: MutationGateway = Depends(get_gateway)) -> ExpenseOut:
    expense = gateway.add_manual_expense(
        project_id, description=payload.description, amount=payload.amount, on=payload.date
    )
    return _expense_out(expense)


@router.post("/{project_id}/receipts", response_model=ReceiptOut, status_code=201)
def create_receipt(project_id: str, payload: ReceiptCreate, gateway: MutationGateway = Depends(get_gateway)) -> ReceiptOut:
    receipt = gateway.add_receipt(project_id, file_name=payload.file_name, amount=payload.amount, on=payload.date)
    return _receipt_out(receipt)


@router.post("/{project_id}/payments", response_model=PaymentOut, status_code=201)
def create_payment(project_id: str, payload: PaymentCreate, gateway: MutationGateway = Depends(get_gateway)) -> PaymentOut:
    payment = gateway.add_payment(project_id, amount=payload.amount, status=payload.status, on=payload.date)
    return _payment_out(payment)


@router.post("/{project_id}/tasks", response_model=TaskOut, status_code=201)
def create_task(project_id: str, payload: TaskCreate, gateway: MutationGateway = Depends(get_gateway)) -> TaskOut:
    task = gateway.add_task(
        project_id,
        title=payload.title,
        assignee_ids=payload.assignee_ids,
        due_date=payload.due_date,
        notes=payload.notes,
    )
    return task_out(task)
