from fastapi import APIRouter, Depends
from pydantic import BaseModel

from jobcost.api.deps import get_gateway
from jobcost.api.domains.projects.router import TaskOut, task_out
from jobcost.models import TaskStatus
from jobcost.mutations import MutationGateway

router = APIRouter(prefix="/tasks", tags=["tasks"])


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


@router.patch("/{task_id}", response_model=TaskOut)
def update_task_status(
    task_id: str, payload: TaskStatusUpdate, gateway: MutationGateway = Depends(get_gateway)
) -> TaskOut:
    return task_out(gateway.set_task_status(task_id, payload.status))
