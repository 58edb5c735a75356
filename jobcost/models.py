from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple, Union


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PENDING = "pending"


class PaymentStatus(str, Enum):
    PAID = "paid"
    PARTIAL = "partial"
    UNPAID = "unpaid"


class TaskStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a numeric value to Decimal without picking up binary float noise."""

    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def _optional_decimal(value: Optional[Number]) -> Optional[Decimal]:
    return None if value is None else to_decimal(value)


def coerce_project_status(value: Union[ProjectStatus, str, None]) -> Union[ProjectStatus, str, None]:
    # Unknown values are kept verbatim; the label lookup treats them as pending.
    if isinstance(value, ProjectStatus) or value is None:
        return value
    try:
        return ProjectStatus(value)
    except ValueError:
        return value


@dataclass
class Project:
    id: str
    name: str
    address: str
    client_name: str
    status: Union[ProjectStatus, str]
    price: Decimal
    progress: Optional[int] = None
    client_contact: Optional[str] = None
    stage: Optional[str] = None

    def __post_init__(self) -> None:
        self.price = to_decimal(self.price)
        self.status = coerce_project_status(self.status)


@dataclass
class Worker:
    id: str
    name: str
    hourly_rate: Decimal
    initials: str
    phone: Optional[str] = None
    email: Optional[str] = None
    project_ids: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        self.hourly_rate = to_decimal(self.hourly_rate)
        self.project_ids = tuple(self.project_ids)


@dataclass
class Material:
    id: str
    name: str
    unit_price: Decimal
    stock_qty: Optional[Decimal] = None
    low_stock_threshold: Optional[Decimal] = None
    supplier: Optional[str] = None

    def __post_init__(self) -> None:
        self.unit_price = to_decimal(self.unit_price)
        self.stock_qty = _optional_decimal(self.stock_qty)
        self.low_stock_threshold = _optional_decimal(self.low_stock_threshold)


@dataclass
class TimeEntry:
    id: str
    project_id: str
    worker_id: str
    hours: Decimal
    date: date

    def __post_init__(self) -> None:
        self.hours = to_decimal(self.hours)


@dataclass
class MaterialUsage:
    id: str
    project_id: str
    material_id: str
    quantity: Decimal
    date: date

    def __post_init__(self) -> None:
        self.quantity = to_decimal(self.quantity)


@dataclass
class ManualExpense:
    id: str
    project_id: str
    description: str
    amount: Decimal
    date: date

    def __post_init__(self) -> None:
        self.amount = to_decimal(self.amount)


@dataclass
class Receipt:
    id: str
    project_id: str
    file_name: str
    amount: Decimal
    date: date

    def __post_init__(self) -> None:
        self.amount = to_decimal(self.amount)


@dataclass
class Payment:
    id: str
    project_id: str
    amount: Decimal
    status: PaymentStatus
    date: date

    def __post_init__(self) -> None:
        self.amount = to_decimal(self.amount)
        self.status = PaymentStatus(self.status)


@dataclass
class Task:
    id: str
    project_id: str
    title: str
    assignee_ids: Tuple[str, ...] = field(default_factory=tuple)
    status: TaskStatus = TaskStatus.NOT_STARTED
    due_date: Optional[date] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        self.assignee_ids = tuple(self.assignee_ids)
        self.status = TaskStatus(self.status)
