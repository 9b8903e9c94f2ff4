from datetime import date
from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.sessions.schemas import (
    SessionCreate, SessionUpdate, SessionResponse,
    AttendanceMark, SessionParticipantResponse, SessionRoster
)
from app.modules.sessions.service import SessionService
from app.modules.participants.service import ParticipantService
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/sessions", tags=["sessions"])


def get_session_service(supabase: Client = Depends(get_service_supabase)) -> SessionService:
    return SessionService(supabase)


def get_participant_service(supabase: Client = Depends(get_service_supabase)) -> ParticipantService:
    return ParticipantService(supabase)


@router.post("", response_model=List[SessionResponse], status_code=201)
async def create_sessions(
    session_data: SessionCreate,
    caller: Dict = Depends(require_permission("sessions:create")),
    service: SessionService = Depends(get_session_service)
):
    """Create a lesson, or a daily/weekly series up to recurrence.end_date"""
    return service.create_sessions(session_data)


@router.get("", response_model=List[SessionResponse])
async def list_sessions(
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    limit: int = 100,
    offset: int = 0,
    caller: Dict = Depends(require_permission("sessions:read")),
    service: SessionService = Depends(get_session_service)
):
    """List lessons"""
    return service.list_sessions(from_date=from_date, to_date=to_date, limit=limit, offset=offset)


@router.get("/attendance/me", response_model=List[SessionParticipantResponse])
async def my_attendance(
    caller: Dict = Depends(require_permission("sessions:attend")),
    service: SessionService = Depends(get_session_service),
    participants: ParticipantService = Depends(get_participant_service)
):
    """The caller's sign-ups and attendance history"""
    participant_id = participants.get_participant_id_for_user(caller["id"])
    return service.list_attendance_for_participant(participant_id)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    caller: Dict = Depends(require_permission("sessions:read")),
    service: SessionService = Depends(get_session_service)
):
    """Get lesson by ID"""
    return service.get_session(session_id)


@router.put("/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: str,
    session_data: SessionUpdate,
    caller: Dict = Depends(require_permission("sessions:update")),
    service: SessionService = Depends(get_session_service)
):
    """Update lesson"""
    return service.update_session(session_id, session_data)


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: str,
    caller: Dict = Depends(require_permission("sessions:delete")),
    service: SessionService = Depends(get_session_service)
):
    """Delete lesson"""
    service.delete_session(session_id)
    return None


@router.get("/{session_id}/roster", response_model=SessionRoster)
async def get_roster(
    session_id: str,
    caller: Dict = Depends(require_permission("sessions:mark")),
    service: SessionService = Depends(get_session_service)
):
    """Sign-ups and attendance for a lesson"""
    return service.get_roster(session_id)


@router.post("/{session_id}/attendance", response_model=SessionParticipantResponse)
async def mark_attendance(
    session_id: str,
    mark: AttendanceMark,
    caller: Dict = Depends(require_permission("sessions:mark")),
    service: SessionService = Depends(get_session_service)
):
    """Confirm a participant present or absent"""
    return service.mark_attendance(session_id, mark, caller["id"])


@router.post("/{session_id}/signup", response_model=SessionParticipantResponse, status_code=201)
async def sign_up(
    session_id: str,
    caller: Dict = Depends(require_permission("sessions:attend")),
    service: SessionService = Depends(get_session_service),
    participants: ParticipantService = Depends(get_participant_service)
):
    """Sign the caller up for a lesson"""
    participant_id = participants.get_participant_id_for_user(caller["id"])
    return service.sign_up(session_id, participant_id)


@router.delete("/{session_id}/signup", status_code=204)
async def cancel_sign_up(
    session_id: str,
    caller: Dict = Depends(require_permission("sessions:attend")),
    service: SessionService = Depends(get_session_service),
    participants: ParticipantService = Depends(get_participant_service)
):
    """Withdraw the caller's sign-up"""
    participant_id = participants.get_participant_id_for_user(caller["id"])
    service.cancel_sign_up(session_id, participant_id)
    return None


@router.post("/{session_id}/check-in", response_model=SessionParticipantResponse)
async def check_in(
    session_id: str,
    caller: Dict = Depends(require_permission("sessions:attend")),
    service: SessionService = Depends(get_session_service),
    participants: ParticipantService = Depends(get_participant_service)
):
    """Report the caller present at a lesson"""
    participant_id = participants.get_participant_id_for_user(caller["id"])
    return service.check_in(session_id, participant_id)
