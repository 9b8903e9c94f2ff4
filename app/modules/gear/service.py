import logging
from datetime import date
from supabase import Client
from app.core.exceptions import (
    SwimProgramError, NotFound, GearUnavailable, BackendUnavailable, ValidationFailed
)
from app.modules.gear.schemas import (
    GearTypeCreate, GearTypeResponse,
    InventoryCreate, InventoryUpdate, InventoryResponse,
    AssignmentCreate, AssignmentResponse
)
from typing import List, Optional

logger = logging.getLogger(__name__)

INVENTORY_SELECT = "*, gear_type:gear_types(*)"
STOCK_UPDATE_ATTEMPTS = 3


class GearService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_gear_type(self, type_data: GearTypeCreate) -> GearTypeResponse:
        try:
            result = self.supabase.table("gear_types").insert(type_data.model_dump()).execute()
        except Exception as e:
            raise BackendUnavailable(f"Failed to create gear type: {e}")
        return GearTypeResponse(**result.data[0])

    def list_gear_types(self) -> List[GearTypeResponse]:
        try:
            result = self.supabase.table("gear_types").select("*").order("name").execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        return [GearTypeResponse(**row) for row in result.data]

    def add_inventory(self, inventory_data: InventoryCreate) -> InventoryResponse:
        """Add stock; every unit starts available"""
        row = inventory_data.model_dump()
        row["quantity_available"] = inventory_data.quantity_total
        try:
            result = self.supabase.table("gear_inventory").insert(row).execute()
        except Exception as e:
            raise BackendUnavailable(f"Failed to add inventory: {e}")
        return InventoryResponse(**result.data[0])

    def list_inventory(self, available_only: bool = False) -> List[InventoryResponse]:
        try:
            query = self.supabase.table("gear_inventory").select(INVENTORY_SELECT)
            if available_only:
                query = query.gt("quantity_available", 0)
            result = query.order("created_at", desc=True).execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        return [InventoryResponse(**row) for row in result.data]

    def get_inventory(self, inventory_id: str) -> InventoryResponse:
        try:
            result = self.supabase.table("gear_inventory")\
                .select(INVENTORY_SELECT)\
                .eq("id", inventory_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        if not result.data:
            raise NotFound("Gear inventory not found")
        return InventoryResponse(**result.data[0])

    def update_inventory(self, inventory_id: str, inventory_data: InventoryUpdate) -> InventoryResponse:
        """Correct counts or notes. Units out on assignment stay counted."""
        update_data = inventory_data.model_dump(exclude_none=True)
        current = self.get_inventory(inventory_id)
        assigned = current.quantity_total - current.quantity_available
        total = update_data.get("quantity_total", current.quantity_total)
        if total < assigned:
            raise ValidationFailed(f"quantity_total cannot drop below the {assigned} unit(s) currently assigned")
        if "quantity_total" in update_data and "quantity_available" not in update_data:
            update_data["quantity_available"] = total - assigned
        if update_data.get("quantity_available", current.quantity_available) > total:
            raise ValidationFailed("quantity_available cannot exceed quantity_total")
        if not update_data:
            return current
        try:
            self.supabase.table("gear_inventory")\
                .update(update_data)\
                .eq("id", inventory_id)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        return self.get_inventory(inventory_id)

    def assign_gear(self, assignment_data: AssignmentCreate, assigned_by_user_id: str) -> AssignmentResponse:
        """Hand one unit to a participant: insert the assignment, then take the unit out of stock"""
        inventory = self.get_inventory(assignment_data.gear_inventory_id)
        if inventory.quantity_available <= 0:
            raise GearUnavailable()

        try:
            result = self.supabase.table("gear_assignments").insert({
                "participant_id": assignment_data.participant_id,
                "gear_inventory_id": inventory.id,
                "assigned_by_user_id": assigned_by_user_id,
                "assigned_date": date.today().isoformat(),
                "notes": assignment_data.notes,
            }).execute()
        except Exception as e:
            raise BackendUnavailable(f"Failed to assign gear: {e}")
        assignment = AssignmentResponse(**result.data[0])

        try:
            # Only succeeds if nobody changed the count since we read it
            updated = self.supabase.table("gear_inventory")\
                .update({"quantity_available": inventory.quantity_available - 1})\
                .eq("id", inventory.id)\
                .eq("quantity_available", inventory.quantity_available)\
                .execute()
            if not updated.data:
                raise GearUnavailable("Gear stock changed while assigning; reload and try again")
        except Exception as e:
            self._undo_assignment(assignment.id)
            if isinstance(e, SwimProgramError):
                raise
            raise BackendUnavailable(f"Failed to update gear stock: {e}")

        logger.info(f"Assigned inventory {inventory.id} to participant {assignment.participant_id}")
        return assignment

    def unassign_gear(self, assignment_id: str) -> bool:
        """Take gear back: delete the assignment and return the unit to stock"""
        try:
            result = self.supabase.table("gear_assignments")\
                .delete()\
                .eq("id", assignment_id)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        if not result.data:
            raise NotFound("Gear assignment not found")

        self._return_unit(result.data[0]["gear_inventory_id"])
        return True

    def list_assignments(self, participant_id: Optional[str] = None) -> List[AssignmentResponse]:
        try:
            query = self.supabase.table("gear_assignments").select("*")
            if participant_id:
                query = query.eq("participant_id", participant_id)
            result = query.order("assigned_date", desc=True).execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        return [AssignmentResponse(**row) for row in result.data]

    def _return_unit(self, inventory_id: str):
        """Increment availability, re-reading when another assignment changed the count first"""
        for _ in range(STOCK_UPDATE_ATTEMPTS):
            inventory = self.get_inventory(inventory_id)
            try:
                updated = self.supabase.table("gear_inventory")\
                    .update({"quantity_available": min(inventory.quantity_available + 1, inventory.quantity_total)})\
                    .eq("id", inventory.id)\
                    .eq("quantity_available", inventory.quantity_available)\
                    .execute()
            except Exception as e:
                raise BackendUnavailable(f"Assignment removed but stock was not updated: {e}")
            if updated.data:
                return
        logger.error(f"Stock for inventory {inventory_id} kept changing; returned unit not counted")
        raise BackendUnavailable("Assignment removed but stock kept changing; correct the inventory count")

    def _undo_assignment(self, assignment_id: str):
        try:
            self.supabase.table("gear_assignments").delete().eq("id", assignment_id).execute()
        except Exception as e:
            logger.error(f"Failed to remove assignment {assignment_id} after stock update failure: {e}")
