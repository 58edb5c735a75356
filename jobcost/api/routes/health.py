from fastapi import APIRouter, Depends

from jobcost.api.deps import get_engine
from jobcost.engine import DashboardEngine

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Liveness probe")
def healthcheck(engine: DashboardEngine = Depends(get_engine)) -> dict[str, str | int]:
    return {"status": "ok", "revision": engine.revision}
