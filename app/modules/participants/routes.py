from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.participants.schemas import ParticipantUpdate, PhotoUpdate, ParticipantResponse
from app.modules.participants.service import ParticipantService
from app.core.dependencies import require_permission, require_role, get_current_caller
from app.core.exceptions import NotAuthorized
from app.config.permissions_config import PARTICIPANT, roles_for_permission
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/participants", tags=["participants"])


def get_participant_service(supabase: Client = Depends(get_service_supabase)) -> ParticipantService:
    return ParticipantService(supabase)


@router.get("", response_model=List[ParticipantResponse])
async def list_participants(
    limit: int = 100,
    offset: int = 0,
    caller: Dict = Depends(require_permission("participants:read")),
    service: ParticipantService = Depends(get_participant_service)
):
    """List participants"""
    return service.list_participants(limit=limit, offset=offset)


@router.get("/me", response_model=ParticipantResponse)
async def get_my_participant_record(
    caller: Dict = Depends(require_role(PARTICIPANT)),
    service: ParticipantService = Depends(get_participant_service)
):
    """The caller's own intake record"""
    return service.get_participant_for_user(caller["id"])


@router.get("/{participant_id}", response_model=ParticipantResponse)
async def get_participant(
    participant_id: str,
    caller: Dict = Depends(require_permission("participants:read")),
    service: ParticipantService = Depends(get_participant_service)
):
    """Get participant by ID"""
    return service.get_participant(participant_id)


@router.put("/{participant_id}", response_model=ParticipantResponse)
async def update_participant(
    participant_id: str,
    body: ParticipantUpdate,
    caller: Dict = Depends(require_permission("participants:update")),
    service: ParticipantService = Depends(get_participant_service)
):
    """Edit intake fields, notes and display name"""
    return service.update_participant(participant_id, body)


@router.put("/{participant_id}/photo", response_model=ParticipantResponse)
async def update_participant_photo(
    participant_id: str,
    body: PhotoUpdate,
    caller: Dict = Depends(get_current_caller),
    service: ParticipantService = Depends(get_participant_service)
):
    """Set the profile photo URL. Staff may set any; a participant only its own."""
    if caller["role"] not in roles_for_permission("participants:update"):
        if caller["role"] != PARTICIPANT or service.get_participant_id_for_user(caller["id"]) != participant_id:
            raise NotAuthorized("You can only change your own photo")
    return service.set_profile_photo(participant_id, body.profile_photo_url)
