from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.gear.schemas import (
    GearTypeCreate, GearTypeResponse,
    InventoryCreate, InventoryUpdate, InventoryResponse,
    AssignmentCreate, AssignmentResponse
)
from app.modules.gear.service import GearService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/gear", tags=["gear"])


def get_gear_service(supabase: Client = Depends(get_service_supabase)) -> GearService:
    return GearService(supabase)


@router.post("/types", response_model=GearTypeResponse, status_code=201)
async def create_gear_type(
    type_data: GearTypeCreate,
    caller: Dict = Depends(require_permission("gear:manage")),
    service: GearService = Depends(get_gear_service)
):
    """Create a gear type"""
    return service.create_gear_type(type_data)


@router.get("/types", response_model=List[GearTypeResponse])
async def list_gear_types(
    caller: Dict = Depends(require_permission("gear:read")),
    service: GearService = Depends(get_gear_service)
):
    return service.list_gear_types()


@router.post("/inventory", response_model=InventoryResponse, status_code=201)
async def add_inventory(
    inventory_data: InventoryCreate,
    caller: Dict = Depends(require_permission("gear:manage")),
    service: GearService = Depends(get_gear_service)
):
    """Add stock of a gear type in one size"""
    return service.add_inventory(inventory_data)


@router.get("/inventory", response_model=List[InventoryResponse])
async def list_inventory(
    available_only: bool = False,
    caller: Dict = Depends(require_permission("gear:read")),
    service: GearService = Depends(get_gear_service)
):
    return service.list_inventory(available_only=available_only)


@router.put("/inventory/{inventory_id}", response_model=InventoryResponse)
async def update_inventory(
    inventory_id: str,
    inventory_data: InventoryUpdate,
    caller: Dict = Depends(require_permission("gear:manage")),
    service: GearService = Depends(get_gear_service)
):
    """Correct stock counts or notes"""
    return service.update_inventory(inventory_id, inventory_data)


@router.post("/assignments", response_model=AssignmentResponse, status_code=201)
async def assign_gear(
    assignment_data: AssignmentCreate,
    caller: Dict = Depends(require_permission("gear:assign")),
    service: GearService = Depends(get_gear_service)
):
    """Assign one unit to a participant"""
    return service.assign_gear(assignment_data, caller["id"])


@router.get("/assignments", response_model=List[AssignmentResponse])
async def list_assignments(
    participant_id: Optional[str] = None,
    caller: Dict = Depends(require_permission("gear:read")),
    service: GearService = Depends(get_gear_service)
):
    return service.list_assignments(participant_id=participant_id)


@router.delete("/assignments/{assignment_id}", status_code=204)
async def unassign_gear(
    assignment_id: str,
    caller: Dict = Depends(require_permission("gear:assign")),
    service: GearService = Depends(get_gear_service)
):
    """Return a unit to stock"""
    service.unassign_gear(assignment_id)
    return None
