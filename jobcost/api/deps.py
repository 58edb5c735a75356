from fastapi import Request

from jobcost.checkin import CheckInLog
from jobcost.engine import DashboardEngine
from jobcost.mutations import MutationGateway
from jobcost.storage import RecordStore


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_engine(request: Request) -> DashboardEngine:
    return request.app.state.engine


def get_gateway(request: Request) -> MutationGateway:
    return request.app.state.gateway


def get_checkins(request: Request) -> CheckInLog:
    return request.app.state.checkins
