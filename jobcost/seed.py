from datetime import date
from decimal import Decimal

from .models import (
    ManualExpense,
    Material,
    MaterialUsage,
    Payment,
    PaymentStatus,
    Project,
    ProjectStatus,
    Receipt,
    Task,
    TaskStatus,
    TimeEntry,
    Worker,
)
from .storage import RecordStore


def seed(store: RecordStore) -> RecordStore:
    """Load the demo kitchen-renovation and office-painting jobs."""

    store.add_worker(
        Worker(id="w1", name="Mike Ross", initials="MR", hourly_rate=Decimal("45"), phone="555-0101", project_ids=("p1",))
    )
    store.add_worker(
        Worker(id="w2", name="John Smith", initials="JS", hourly_rate=Decimal("35"), phone="555-0102", project_ids=("p1",))
    )

    store.add_material(Material(id="m1", name="Lumber 2x4", unit_price=Decimal("15"), stock_qty=Decimal("120")))
    store.add_material(Material(id="m2", name="Paint - Interior White", unit_price=Decimal("70"), stock_qty=Decimal("28")))

    store.add_project(
        Project(
            id="p1",
            name="Miller Kitchen Renovation",
            address="123 Oak Street, Springfield",
            client_name="Cathy Miller",
            status=ProjectStatus.ACTIVE,
            price=Decimal("25000"),
            stage="Installation",
            progress=62,
        )
    )
    store.add_project(
        Project(
            id="p2",
            name="Downtown Office Painting",
            address="456 Main Ave, Downtown",
            client_name="Downtown Holdings",
            status=ProjectStatus.PENDING,
            price=Decimal("8500"),
            stage="Planning",
            progress=20,
        )
    )

    store.add_material_usage(MaterialUsage(id="u1", project_id="p1", material_id="m1", quantity=Decimal("30"), date=date(2025, 12, 12)))
    store.add_material_usage(MaterialUsage(id="u2", project_id="p2", material_id="m2", quantity=Decimal("4"), date=date(2025, 12, 12)))

    store.add_time_entry(TimeEntry(id="t1", project_id="p1", worker_id="w1", hours=Decimal("8"), date=date(2025, 12, 12)))
    store.add_time_entry(TimeEntry(id="t2", project_id="p1", worker_id="w2", hours=Decimal("7.5"), date=date(2025, 12, 12)))

    store.add_manual_expense(
        ManualExpense(id="e1", project_id="p1", description="Dumpster rental", amount=Decimal("220"), date=date(2025, 12, 11))
    )
    store.add_manual_expense(
        ManualExpense(id="e2", project_id="p2", description="Permit filing fee", amount=Decimal("120"), date=date(2025, 12, 10))
    )

    store.add_receipt(Receipt(id="r1", project_id="p1", file_name="lumber-receipt.pdf", amount=Decimal("450"), date=date(2025, 12, 10)))

    store.add_task(
        Task(id="task1", project_id="p1", title="Install cabinets", assignee_ids=("w1",), status=TaskStatus.IN_PROGRESS, due_date=date(2025, 12, 14))
    )
    store.add_task(
        Task(id="task2", project_id="p1", title="Paint walls", assignee_ids=("w2",), status=TaskStatus.NOT_STARTED, due_date=date(2025, 12, 15))
    )
    store.add_task(
        Task(id="task3", project_id="p2", title="Color matching", assignee_ids=("w2",), status=TaskStatus.IN_PROGRESS, due_date=date(2025, 12, 16))
    )

    store.add_payment(Payment(id="pay1", project_id="p1", amount=Decimal("10000"), status=PaymentStatus.PARTIAL, date=date(2025, 12, 9)))
    store.add_payment(Payment(id="pay2", project_id="p2", amount=Decimal("2000"), status=PaymentStatus.PARTIAL, date=date(2025, 12, 8)))
    return store


def demo_store() -> RecordStore:
    return seed(RecordStore())
