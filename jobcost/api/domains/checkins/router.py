from fastapi import APIRouter, Depends
from pydantic import BaseModel

from jobcost.api.deps import get_checkins
from jobcost.checkin import CheckAction, CheckInLog, CheckLogEntry

router = APIRouter(prefix="/checkins", tags=["checkins"])


class CheckInRequest(BaseModel):
    worker_id: str
    action: CheckAction


class CheckLogOut(BaseModel):
    id: str
    worker_id: str
    action: CheckAction
    time: str
    checked_in: bool


def _out(entry: CheckLogEntry) -> CheckLogOut:
    # state recorded by this entry, not the worker's current state
    return CheckLogOut(
        id=entry.id,
        worker_id=entry.worker_id,
        action=entry.action,
        time=entry.time,
        checked_in=entry.action == CheckAction.IN,
    )


@router.get("", response_model=list[CheckLogOut])
def recent_activity(log: CheckInLog = Depends(get_checkins)) -> list[CheckLogOut]:
    return [_out(entry) for entry in log.entries()]


@router.post("", response_model=CheckLogOut, status_code=201)
def toggle_check(payload: CheckInRequest, log: CheckInLog = Depends(get_checkins)) -> CheckLogOut:
    return _out(log.toggle(payload.worker_id, payload.action))
