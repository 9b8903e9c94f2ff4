from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.progress.schemas import (
    LevelCreate, LevelUpdate, LevelResponse,
    SkillCreate, SkillUpdate, SkillResponse,
    SkillAward, LevelAward, ProgressRecordResponse, ParticipantProgress
)
from app.modules.progress.service import ProgressService
from app.modules.participants.service import ParticipantService
from app.core.dependencies import require_permission, require_role
from app.config.permissions_config import PARTICIPANT
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/progress", tags=["progress"])


def get_progress_service(supabase: Client = Depends(get_service_supabase)) -> ProgressService:
    return ProgressService(supabase)


# Level endpoints
@router.post("/levels", response_model=LevelResponse, status_code=201)
async def create_level(
    level_data: LevelCreate,
    caller: Dict = Depends(require_permission("progress:manage")),
    service: ProgressService = Depends(get_progress_service)
):
    """Create a level"""
    return service.create_level(level_data)


@router.get("/levels", response_model=List[LevelResponse])
async def list_levels(
    caller: Dict = Depends(require_permission("progress:read")),
    service: ProgressService = Depends(get_progress_service)
):
    """List levels in program order"""
    return service.list_levels()


@router.put("/levels/{level_id}", response_model=LevelResponse)
async def update_level(
    level_id: str,
    level_data: LevelUpdate,
    caller: Dict = Depends(require_permission("progress:manage")),
    service: ProgressService = Depends(get_progress_service)
):
    return service.update_level(level_id, level_data)


@router.delete("/levels/{level_id}", status_code=204)
async def delete_level(
    level_id: str,
    caller: Dict = Depends(require_permission("progress:manage")),
    service: ProgressService = Depends(get_progress_service)
):
    service.delete_level(level_id)
    return None


# Skill endpoints
@router.post("/skills", response_model=SkillResponse, status_code=201)
async def create_skill(
    skill_data: SkillCreate,
    caller: Dict = Depends(require_permission("progress:manage")),
    service: ProgressService = Depends(get_progress_service)
):
    """Create a skill within a level"""
    return service.create_skill(skill_data)


@router.get("/skills", response_model=List[SkillResponse])
async def list_skills(
    level_id: Optional[str] = None,
    caller: Dict = Depends(require_permission("progress:read")),
    service: ProgressService = Depends(get_progress_service)
):
    """List skills in program order, optionally for one level"""
    return service.list_skills(level_id=level_id)


@router.put("/skills/{skill_id}", response_model=SkillResponse)
async def update_skill(
    skill_id: str,
    skill_data: SkillUpdate,
    caller: Dict = Depends(require_permission("progress:manage")),
    service: ProgressService = Depends(get_progress_service)
):
    return service.update_skill(skill_id, skill_data)


@router.delete("/skills/{skill_id}", status_code=204)
async def delete_skill(
    skill_id: str,
    caller: Dict = Depends(require_permission("progress:manage")),
    service: ProgressService = Depends(get_progress_service)
):
    service.delete_skill(skill_id)
    return None


# Participant progress endpoints
@router.get("/me", response_model=ParticipantProgress)
async def my_progress(
    caller: Dict = Depends(require_role(PARTICIPANT)),
    service: ProgressService = Depends(get_progress_service),
    supabase: Client = Depends(get_service_supabase)
):
    """The caller's achieved skills and levels"""
    participant_id = ParticipantService(supabase).get_participant_id_for_user(caller["id"])
    return service.get_participant_progress(participant_id)


@router.get("/participants/{participant_id}", response_model=ParticipantProgress)
async def get_participant_progress(
    participant_id: str,
    caller: Dict = Depends(require_permission("progress:award")),
    service: ProgressService = Depends(get_progress_service)
):
    """A participant's achieved skills and levels"""
    return service.get_participant_progress(participant_id)


@router.post("/participants/{participant_id}/skills", response_model=ProgressRecordResponse, status_code=201)
async def award_skill(
    participant_id: str,
    award: SkillAward,
    caller: Dict = Depends(require_permission("progress:award")),
    service: ProgressService = Depends(get_progress_service)
):
    """Validate a skill for a participant"""
    return service.award_skill(participant_id, award, caller["id"])


@router.post("/participants/{participant_id}/levels", response_model=ProgressRecordResponse, status_code=201)
async def award_level(
    participant_id: str,
    award: LevelAward,
    caller: Dict = Depends(require_permission("progress:award")),
    service: ProgressService = Depends(get_progress_service)
):
    """Validate a level for a participant"""
    return service.award_level(participant_id, award, caller["id"])


@router.delete("/records/{record_id}", status_code=204)
async def remove_record(
    record_id: str,
    caller: Dict = Depends(require_permission("progress:award")),
    service: ProgressService = Depends(get_progress_service)
):
    """Remove an awarded skill or level"""
    service.remove_record(record_id)
    return None
