from __future__ import annotations
import json
import re
from collections import defaultdict
from dataclasses import asdict, dataclass, field, fields
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from .core.logging import get_logger
from .errors import DatasetError, ValidationError
from .models import ManualExpense, Material, MaterialUsage, Payment, Project, Receipt, Task, TimeEntry, Worker

logger = get_logger(__name__)

T = TypeVar("T")

# dataset key -> (record type, store method, fields holding ISO dates)
COLLECTIONS: Dict[str, tuple] = {
    "projects": (Project, "add_project", ()),
    "workers": (Worker, "add_worker", ()),
    "materials": (Material, "add_material", ()),
    "time_entries": (TimeEntry, "add_time_entry", ("date",)),
    "material_usage": (MaterialUsage, "add_material_usage", ("date",)),
    "manual_expenses": (ManualExpense, "add_manual_expense", ("date",)),
    "receipts": (Receipt, "add_receipt", ("date",)),
    "payments": (Payment, "add_payment", ("date",)),
    "tasks": (Task, "add_task", ("due_date",)),
}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


@dataclass
class ProjectRecords:
    """Transactional records of one project, in append order."""

    time_entries: List[TimeEntry] = field(default_factory=list)
    material_usage: List[MaterialUsage] = field(default_factory=list)
    manual_expenses: List[ManualExpense] = field(default_factory=list)
    receipts: List[Receipt] = field(default_factory=list)
    payments: List[Payment] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)


PROJECT_RECORD_FIELDS = tuple(f.name for f in fields(ProjectRecords))


class RecordStore:
    """Owns every record collection. Records are only ever appended.

    A per-project index is maintained on append so a single project's records
    can be read without scanning the full collections.
    """

    def __init__(self) -> None:
        self.projects: Dict[str, Project] = {}
        self.workers: Dict[str, Worker] = {}
        self.materials: Dict[str, Material] = {}
        self.time_entries: Dict[str, TimeEntry] = {}
        self.material_usage: Dict[str, MaterialUsage] = {}
        self.manual_expenses: Dict[str, ManualExpense] = {}
        self.receipts: Dict[str, Receipt] = {}
        self.payments: Dict[str, Payment] = {}
        self.tasks: Dict[str, Task] = {}
        self._by_project: Dict[str, ProjectRecords] = defaultdict(ProjectRecords)

    @classmethod
    def from_file(cls, path: Path) -> "RecordStore":
        if not path.exists():
            raise DatasetError(f"Dataset not found at {path}")
        try:
            content = json.loads(path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as exc:
            raise DatasetError(f"Dataset {path} is not UTF-8 text: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise DatasetError(f"Dataset {path} is not valid JSON: {exc}") from exc
        store = cls.from_dict(content)
        logger.info("dataset_loaded", path=str(path), projects=len(store.projects))
        return store

    @classmethod
    def from_dict(cls, content: Dict[str, Any]) -> "RecordStore":
        if not isinstance(content, dict):
            raise DatasetError("Dataset must be a JSON object")
        normalized = {_snake(key): value for key, value in content.items()}
        store = cls()
        for name, (record_type, method, date_fields) in COLLECTIONS.items():
            adder = getattr(store, method)
            rows = normalized.get(name)
            if rows is None:
                continue
            if not isinstance(rows, list):
                raise DatasetError(f"{name} must be a list")
            for index, row in enumerate(rows):
                try:
                    adder(_deserialize(record_type, row, date_fields))
                except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as exc:
                    raise DatasetError(f"Invalid {name} row {index}: {exc}") from exc
        return store

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {name: [_serialize(record) for record in getattr(self, name).values()] for name in COLLECTIONS}

    def write(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        return path

    def add_project(self, project: Project) -> None:
        self._insert(self.projects, project, "project")

    def add_worker(self, worker: Worker) -> None:
        self._insert(self.workers, worker, "worker")

    def add_material(self, material: Material) -> None:
        self._insert(self.materials, material, "material")

    def add_time_entry(self, entry: TimeEntry) -> None:
        self._insert(self.time_entries, entry, "time entry")
        self._by_project[entry.project_id].time_entries.append(entry)

    def add_material_usage(self, usage: MaterialUsage) -> None:
        self._insert(self.material_usage, usage, "material usage")
        self._by_project[usage.project_id].material_usage.append(usage)

    def add_manual_expense(self, expense: ManualExpense) -> None:
        self._insert(self.manual_expenses, expense, "manual expense")
        self._by_project[expense.project_id].manual_expenses.append(expense)

    def add_receipt(self, receipt: Receipt) -> None:
        self._insert(self.receipts, receipt, "receipt")
        self._by_project[receipt.project_id].receipts.append(receipt)

    def add_payment(self, payment: Payment) -> None:
        self._insert(self.payments, payment, "payment")
        self._by_project[payment.project_id].payments.append(payment)

    def add_task(self, task: Task) -> None:
        self._insert(self.tasks, task, "task")
        self._by_project[task.project_id].tasks.append(task)

    def get_project(self, project_id: str) -> Optional[Project]:
        return self.projects.get(project_id)

    def records_for(self, project_id: str) -> ProjectRecords:
        """Snapshot of one project's records; changing it leaves the index untouched."""

        if project_id not in self._by_project:
            return ProjectRecords()
        indexed = self._by_project[project_id]
        return ProjectRecords(**{name: list(getattr(indexed, name)) for name in PROJECT_RECORD_FIELDS})

    def record_count(self) -> int:
        return sum(len(getattr(self, name)) for name in COLLECTIONS)

    @staticmethod
    def _insert(collection: Dict[str, Any], record: Any, kind: str) -> None:
        if record.id in collection:
            raise ValidationError(f"Duplicate {kind} id {record.id}")
        collection[record.id] = record


def _deserialize(record_type: Type[T], row: Dict[str, Any], date_fields: tuple) -> T:
    allowed = {f.name for f in fields(record_type)}
    data = {key: value for key, value in ((_snake(k), v) for k, v in row.items()) if key in allowed}
    for name in date_fields:
        if data.get(name):
            data[name] = date.fromisoformat(data[name])
        elif name in data:
            data[name] = None
    return record_type(**data)


def _json_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value


def _serialize(record: Any) -> Dict[str, Any]:
    return {key: _json_value(value) for key, value in asdict(record).items()}
