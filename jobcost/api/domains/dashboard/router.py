from dataclasses import asdict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from jobcost.api.deps import get_engine
from jobcost.engine import DashboardEngine
from jobcost.portfolio import dashboard_cards
from jobcost.views import format_currency

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class PortfolioStatsOut(BaseModel):
    active_project_count: int
    distinct_working_worker_count: int
    total_revenue: float
    total_profit: float
    total_expenses: float
    total_payments_received: float
    outstanding_portfolio: float


class CardOut(BaseModel):
    label: str
    status: str
    value: str
    tone: str
    icon: str


class WorkerHoursOut(BaseModel):
    initials: str
    name: str
    project: str
    hours: float
    earnings: float
    earnings_display: str


class MaterialExpenseOut(BaseModel):
    name: str
    project: str
    cost: float
    cost_display: str


@router.get("/stats", response_model=PortfolioStatsOut)
def portfolio_stats(engine: DashboardEngine = Depends(get_engine)) -> PortfolioStatsOut:
    stats = engine.compute_portfolio_stats()
    return PortfolioStatsOut(
        active_project_count=stats.active_project_count,
        distinct_working_worker_count=stats.distinct_working_worker_count,
        total_revenue=float(stats.total_revenue),
        total_profit=float(stats.total_profit),
        total_expenses=float(stats.total_expenses),
        total_payments_received=float(stats.total_payments_received),
        outstanding_portfolio=float(stats.outstanding_portfolio),
    )


@router.get("/cards", response_model=list[CardOut])
def cards(engine: DashboardEngine = Depends(get_engine)) -> list[CardOut]:
    return [CardOut(**asdict(card)) for card in dashboard_cards(engine.compute_portfolio_stats())]


@router.get("/worker-hours", response_model=list[WorkerHoursOut])
def worker_hours(engine: DashboardEngine = Depends(get_engine)) -> list[WorkerHoursOut]:
    return [
        WorkerHoursOut(
            initials=row.initials,
            name=row.worker_name,
            project=row.project_name,
            hours=float(row.hours),
            earnings=float(row.earnings),
            earnings_display=format_currency(row.earnings),
        )
        for row in engine.worker_hours()
    ]


@router.get("/material-expenses", response_model=list[MaterialExpenseOut])
def material_expenses(engine: DashboardEngine = Depends(get_engine)) -> list[MaterialExpenseOut]:
    return [
        MaterialExpenseOut(
            name=row.material_name,
            project=row.project_name,
            cost=float(row.cost),
            cost_display=format_currency(row.cost),
        )
        for row in engine.material_expenses()
    ]
