from fastapi import APIRouter, Depends
from pydantic import BaseModel

from jobcost.api.deps import get_store
from jobcost.portfolio import assigned_project_names, material_used_quantity
from jobcost.storage import RecordStore

router = APIRouter(tags=["catalog"])


class WorkerOut(BaseModel):
    id: str
    name: str
    initials: str
    hourly_rate: float
    phone: str | None = None
    email: str | None = None
    project_ids: list[str] = []
    project_names: list[str] = []


class MaterialOut(BaseModel):
    id: str
    name: str
    unit_price: float
    stock_qty: float | None = None
    low_stock_threshold: float | None = None
    supplier: str | None = None
    used_qty: float = 0


def _optional_float(value) -> float | None:
    return None if value is None else float(value)


@router.get("/workers", response_model=list[WorkerOut])
def list_workers(store: RecordStore = Depends(get_store)) -> list[WorkerOut]:
    return [
        WorkerOut(
            id=worker.id,
            name=worker.name,
            initials=worker.initials,
            hourly_rate=float(worker.hourly_rate),
            phone=worker.phone,
            email=worker.email,
            project_ids=list(worker.project_ids),
            project_names=assigned_project_names(worker, store.projects.values()),
        )
        for worker in store.workers.values()
    ]


@router.get("/materials", response_model=list[MaterialOut])
def list_materials(store: RecordStore = Depends(get_store)) -> list[MaterialOut]:
    return [
        MaterialOut(
            id=material.id,
            name=material.name,
            unit_price=float(material.unit_price),
            stock_qty=_optional_float(material.stock_qty),
            low_stock_threshold=_optional_float(material.low_stock_threshold),
            supplier=material.supplier,
            used_qty=float(material_used_quantity(material.id, store.material_usage.values())),
        )
        for material in store.materials.values()
    ]
