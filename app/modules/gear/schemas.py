from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date, datetime


class GearTypeCreate(BaseModel):
    name: str
    sponsor_name: Optional[str] = None
    description: Optional[str] = None


class GearTypeResponse(GearTypeCreate):
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InventoryCreate(BaseModel):
    gear_type_id: str
    size: str
    quantity_total: int = Field(ge=0)
    notes: Optional[str] = None


class InventoryUpdate(BaseModel):
    quantity_total: Optional[int] = Field(default=None, ge=0)
    quantity_available: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def available_within_total(self):
        if (
            self.quantity_total is not None
            and self.quantity_available is not None
            and self.quantity_available > self.quantity_total
        ):
            raise ValueError("quantity_available cannot exceed quantity_total")
        return self


class InventoryResponse(BaseModel):
    id: str
    gear_type_id: str
    size: str
    quantity_total: int
    quantity_available: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    gear_type: Optional[GearTypeResponse] = None

    class Config:
        from_attributes = True


class AssignmentCreate(BaseModel):
    participant_id: str
    gear_inventory_id: str
    notes: Optional[str] = None


class AssignmentResponse(BaseModel):
    id: str
    participant_id: str
    gear_inventory_id: str
    assigned_by_user_id: Optional[str] = None
    assigned_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
