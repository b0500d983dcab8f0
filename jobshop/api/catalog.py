# jobshop/api/catalog.py

from enum import Enum
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.engine import Engine

from jobshop.db.engine import get_engine
from jobshop.db.schema import machines, materials, services, staff
from jobshop.models.catalog import (
    MachineIn,
    MachineOut,
    MachineStatus,
    MachineUpdate,
    MaterialIn,
    MaterialOut,
    MaterialUpdate,
    ServiceIn,
    ServiceOut,
    ServiceUpdate,
    StaffIn,
    StaffOut,
    StaffUpdate,
)
from jobshop.services import catalog
from jobshop.services.crud import create_row, delete_row, require_row, update_row

materials_router = APIRouter(prefix="/materials", tags=["materials"])
services_router = APIRouter(prefix="/services", tags=["services"])
machines_router = APIRouter(prefix="/machines", tags=["machines"])
staff_router = APIRouter(prefix="/staff", tags=["staff"])


# Columns that can't be set to NULL; a null for these in a PATCH body is ignored
_NOT_NULL = {
    "name", "status", "is_available", "price",
    "purchase_price", "selling_price", "current_stock", "min_quantity",
    "outstanding_payment",
}


def patch_values(payload) -> dict:
    """Fields sent in the request, with enums as their stored strings."""
    values = {}
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None and key in _NOT_NULL:
            continue
        values[key] = value.value if isinstance(value, Enum) else value
    return values


# ---- Materials ----

@materials_router.get("/", response_model=List[MaterialOut])
def list_materials(
    low_stock: bool = Query(False, description="Only materials below their minimum quantity"),
    search: Optional[str] = Query(default=None, description="Name contains (case-insensitive)"),
    engine: Engine = Depends(get_engine),
) -> List[MaterialOut]:
    with engine.connect() as conn:
        return catalog.list_materials(conn, low_stock=low_stock, search=search)


@materials_router.get("/{material_id}", response_model=MaterialOut)
def get_material(material_id: int, engine: Engine = Depends(get_engine)) -> MaterialOut:
    with engine.connect() as conn:
        return catalog.row_to_material(require_row(conn, materials, "material", material_id))


@materials_router.post("/", response_model=MaterialOut, status_code=201)
def create_material(payload: MaterialIn, engine: Engine = Depends(get_engine)) -> MaterialOut:
    with engine.begin() as conn:
        row = create_row(conn, materials, payload.model_dump())
    return catalog.row_to_material(row)


@materials_router.patch("/{material_id}", response_model=MaterialOut)
def update_material(
    material_id: int, payload: MaterialUpdate, engine: Engine = Depends(get_engine)
) -> MaterialOut:
    with engine.begin() as conn:
        row = update_row(conn, materials, "material", material_id, patch_values(payload))
    return catalog.row_to_material(row)


@materials_router.delete("/{material_id}", status_code=204)
def delete_material(material_id: int, engine: Engine = Depends(get_engine)) -> Response:
    with engine.begin() as conn:
        delete_row(conn, materials, "material", material_id)
    return Response(status_code=204)


# ---- Services ----

@services_router.get("/", response_model=List[ServiceOut])
def list_services(engine: Engine = Depends(get_engine)) -> List[ServiceOut]:
    with engine.connect() as conn:
        return catalog.list_services(conn)


@services_router.get("/{service_id}", response_model=ServiceOut)
def get_service(service_id: int, engine: Engine = Depends(get_engine)) -> ServiceOut:
    with engine.connect() as conn:
        return catalog.row_to_service(require_row(conn, services, "service", service_id))


@services_router.post("/", response_model=ServiceOut, status_code=201)
def create_service(payload: ServiceIn, engine: Engine = Depends(get_engine)) -> ServiceOut:
    with engine.begin() as conn:
        row = create_row(conn, services, payload.model_dump())
    return catalog.row_to_service(row)


@services_router.patch("/{service_id}", response_model=ServiceOut)
def update_service(
    service_id: int, payload: ServiceUpdate, engine: Engine = Depends(get_engine)
) -> ServiceOut:
    """
    Changing a service's price does not touch orders already priced from it.
    """
    with engine.begin() as conn:
        row = update_row(conn, services, "service", service_id, patch_values(payload))
    return catalog.row_to_service(row)


@services_router.delete("/{service_id}", status_code=204)
def delete_service(service_id: int, engine: Engine = Depends(get_engine)) -> Response:
    with engine.begin() as conn:
        delete_row(conn, services, "service", service_id)
    return Response(status_code=204)


# ---- Machines ----

@machines_router.get("/", response_model=List[MachineOut])
def list_machines(
    status: Optional[MachineStatus] = Query(default=None),
    engine: Engine = Depends(get_engine),
) -> List[MachineOut]:
    with engine.connect() as conn:
        return catalog.list_machines(conn, status)


@machines_router.get("/{machine_id}", response_model=MachineOut)
def get_machine(machine_id: int, engine: Engine = Depends(get_engine)) -> MachineOut:
    with engine.connect() as conn:
        return catalog.row_to_machine(require_row(conn, machines, "machine", machine_id))


@machines_router.post("/", response_model=MachineOut, status_code=201)
def create_machine(payload: MachineIn, engine: Engine = Depends(get_engine)) -> MachineOut:
    with engine.begin() as conn:
        row = create_row(conn, machines, payload.model_dump(mode="json"))
    return catalog.row_to_machine(row)


@machines_router.patch("/{machine_id}", response_model=MachineOut)
def update_machine(
    machine_id: int, payload: MachineUpdate, engine: Engine = Depends(get_engine)
) -> MachineOut:
    with engine.begin() as conn:
        row = update_row(conn, machines, "machine", machine_id, patch_values(payload))
    return catalog.row_to_machine(row)


@machines_router.delete("/{machine_id}", status_code=204)
def delete_machine(machine_id: int, engine: Engine = Depends(get_engine)) -> Response:
    with engine.begin() as conn:
        delete_row(conn, machines, "machine", machine_id)
    return Response(status_code=204)


# ---- Staff ----

@staff_router.get("/", response_model=List[StaffOut])
def list_staff(
    available: Optional[bool] = Query(default=None),
    engine: Engine = Depends(get_engine),
) -> List[StaffOut]:
    with engine.connect() as conn:
        return catalog.list_staff(conn, available)


@staff_router.get("/{staff_id}", response_model=StaffOut)
def get_staff(staff_id: int, engine: Engine = Depends(get_engine)) -> StaffOut:
    with engine.connect() as conn:
        return catalog.row_to_staff(require_row(conn, staff, "staff", staff_id))


@staff_router.post("/", response_model=StaffOut, status_code=201)
def create_staff(payload: StaffIn, engine: Engine = Depends(get_engine)) -> StaffOut:
    with engine.begin() as conn:
        row = create_row(conn, staff, payload.model_dump())
    return catalog.row_to_staff(row)


@staff_router.patch("/{staff_id}", response_model=StaffOut)
def update_staff(
    staff_id: int, payload: StaffUpdate, engine: Engine = Depends(get_engine)
) -> StaffOut:
    with engine.begin() as conn:
        row = update_row(conn, staff, "staff", staff_id, patch_values(payload))
    return catalog.row_to_staff(row)


@staff_router.post("/{staff_id}/toggle-availability", response_model=StaffOut)
def toggle_availability(staff_id: int, engine: Engine = Depends(get_engine)) -> StaffOut:
    with engine.begin() as conn:
        return catalog.toggle_staff_availability(conn, staff_id)


@staff_router.delete("/{staff_id}", status_code=204)
def delete_staff(staff_id: int, engine: Engine = Depends(get_engine)) -> Response:
    with engine.begin() as conn:
        delete_row(conn, staff, "staff", staff_id)
    return Response(status_code=204)
