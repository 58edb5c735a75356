from __future__ import annotations
from typing import List

from .core.logging import get_logger
from .errors import ProjectNotFoundError
from .models import Project
from .portfolio import (
    MaterialExpenseRow,
    PortfolioStats,
    ProjectPayments,
    WorkerHoursRow,
    compute_portfolio_stats,
    material_expense_rows,
    project_payment_status,
    worker_hours_rows,
)
from .storage import ProjectRecords, RecordStore
from .summary import SummaryRow, build_summary

logger = get_logger(__name__)


class DashboardEngine:
    """Derives summaries and dashboard figures from a record store.

    Nothing is cached: every call reads the store as it is now, so a rate or
    price change is reflected in every figure, including historical ones.
    """

    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.revision = 0

    def record_mutation_applied(self) -> int:
        self.revision += 1
        logger.debug("dashboard_stale", revision=self.revision, records=self.store.record_count())
        return self.revision

    def _project(self, project_id: str) -> Project:
        project = self.store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def _summarize(self, project: Project) -> SummaryRow:
        records = self.store.records_for(project.id)
        return build_summary(
            project,
            records.time_entries,
            records.material_usage,
            records.manual_expenses,
            records.receipts,
            self.store.workers,
            self.store.materials,
        )

    def compute_project_summary(self, project_id: str) -> SummaryRow:
        return self._summarize(self._project(project_id))

    def compute_all_summaries(self) -> List[SummaryRow]:
        rows = [self._summarize(project) for project in self.store.projects.values()]
        logger.debug("summaries_computed", projects=len(rows), revision=self.revision)
        return rows

    def compute_portfolio_stats(self) -> PortfolioStats:
        return compute_portfolio_stats(
            self.store.projects.values(),
            self.compute_all_summaries(),
            self.store.payments.values(),
            self.store.time_entries.values(),
        )

    def project_payments(self, project_id: str) -> ProjectPayments:
        project = self._project(project_id)
        return project_payment_status(project, self.store.records_for(project_id).payments)

    def project_detail(self, project_id: str) -> ProjectRecords:
        self._project(project_id)
        return self.store.records_for(project_id)

    def worker_hours(self) -> List[WorkerHoursRow]:
        return worker_hours_rows(self.store.time_entries.values(), self.store.workers, self.store.projects)

    def material_expenses(self) -> List[MaterialExpenseRow]:
        return material_expense_rows(self.store.material_usage.values(), self.store.materials, self.store.projects)
