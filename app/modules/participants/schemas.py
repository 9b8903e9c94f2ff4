from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from app.modules.users.schemas import ParticipantIntake


class ParticipantUpdate(ParticipantIntake):
    """Partial update; only fields present in the request are written."""
    full_name: Optional[str] = None
    notes: Optional[str] = None


class PhotoUpdate(BaseModel):
    profile_photo_url: str


class ParticipantResponse(ParticipantIntake):
    id: str
    user_id: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    profile_photo_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
