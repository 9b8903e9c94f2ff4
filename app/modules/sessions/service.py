import logging
from datetime import date, datetime, timezone
from supabase import Client
from app.config import settings
from app.core.exceptions import (
    SwimProgramError, NotFound, AlreadyRecorded, BackendUnavailable, ValidationFailed,
    is_unique_violation
)
from app.modules.sessions.recurrence import expand_recurring_dates
from app.modules.sessions.schemas import (
    SessionCreate, SessionUpdate, SessionResponse,
    AttendanceMark, SessionParticipantResponse, SessionRoster
)
from typing import List, Optional

logger = logging.getLogger(__name__)

ATTENDANCE_CONFLICT = "session_id,participant_id"
# Statuses set by staff; a participant's own check-in never overwrites them
VALIDATED_STATUSES = ("present", "absent")


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def _to_attendance(row: dict) -> SessionParticipantResponse:
    row = dict(row)
    participant = row.pop("participant", None) or {}
    user = participant.get("user") or {}
    session = row.pop("session", None)
    return SessionParticipantResponse(
        **row,
        participant_name=user.get("full_name"),
        session=SessionResponse(**session) if session else None
    )


class SessionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_sessions(self, session_data: SessionCreate) -> List[SessionResponse]:
        """Create one lesson, or every occurrence of a recurring lesson in a single insert"""
        if session_data.recurrence:
            dates = expand_recurring_dates(
                session_data.date,
                session_data.recurrence.end_date,
                session_data.recurrence.frequency
            )
        else:
            dates = [session_data.date]

        if len(dates) > settings.max_recurring_sessions:
            raise ValidationFailed(
                f"Recurrence produces {len(dates)} lessons; the limit is {settings.max_recurring_sessions}"
            )

        time_value = session_data.time.isoformat()
        rows = [
            {"date": occurrence.isoformat(), "time": time_value, "type": session_data.type}
            for occurrence in dates
        ]
        try:
            result = self.supabase.table("sessions").insert(rows).execute()
        except Exception as e:
            raise BackendUnavailable(f"Failed to create lessons: {e}")

        logger.info(f"Created {len(rows)} lesson(s) starting {rows[0]['date']}")
        return [SessionResponse(**row) for row in result.data]

    def list_sessions(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[SessionResponse]:
        """List lessons, latest first"""
        try:
            query = self.supabase.table("sessions").select("*")
            if from_date:
                query = query.gte("date", from_date.isoformat())
            if to_date:
                query = query.lte("date", to_date.isoformat())
            result = query.order("date", desc=True)\
                .order("time", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [SessionResponse(**row) for row in result.data]
        except SwimProgramError:
            raise
        except Exception as e:
            raise BackendUnavailable(str(e))

    def get_session(self, session_id: str) -> SessionResponse:
        try:
            result = self.supabase.table("sessions")\
                .select("*")\
                .eq("id", session_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        if not result.data:
            raise NotFound("Lesson not found")
        return SessionResponse(**result.data[0])

    def update_session(self, session_id: str, session_data: SessionUpdate) -> SessionResponse:
        update_data = session_data.model_dump(mode="json", exclude_none=True)
        if not update_data:
            return self.get_session(session_id)
        try:
            result = self.supabase.table("sessions")\
                .update(update_data)\
                .eq("id", session_id)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        if not result.data:
            raise NotFound("Lesson not found")
        return SessionResponse(**result.data[0])

    def delete_session(self, session_id: str) -> bool:
        """Delete a lesson; its sign-ups and attendance go with it"""
        try:
            result = self.supabase.table("sessions")\
                .delete()\
                .eq("id", session_id)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        if not result.data:
            raise NotFound("Lesson not found")
        return True

    def sign_up(self, session_id: str, participant_id: str) -> SessionParticipantResponse:
        """Participant signs up for an upcoming lesson"""
        self.get_session(session_id)
        try:
            result = self.supabase.table("session_participants").insert({
                "session_id": session_id,
                "participant_id": participant_id,
                "status": "signed_up",
            }).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise AlreadyRecorded("Already signed up for this lesson")
            raise BackendUnavailable(f"Failed to sign up: {e}")
        return _to_attendance(result.data[0])

    def cancel_sign_up(self, session_id: str, participant_id: str) -> bool:
        """Withdraw a sign-up. Rows that already carry attendance are left alone."""
        try:
            result = self.supabase.table("session_participants")\
                .delete()\
                .eq("session_id", session_id)\
                .eq("participant_id", participant_id)\
                .eq("status", "signed_up")\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        if not result.data:
            raise NotFound("No sign-up to cancel")
        return True

    def check_in(self, session_id: str, participant_id: str) -> SessionParticipantResponse:
        """Participant reports itself present; a volunteer validates it later"""
        self.get_session(session_id)
        existing = self._get_attendance(session_id, participant_id)
        if existing and existing["status"] in VALIDATED_STATUSES:
            return _to_attendance(existing)
        return self._upsert_attendance({
            "session_id": session_id,
            "participant_id": participant_id,
            "status": "self_reported",
            "marked_at": _utcnow(),
        })

    def mark_attendance(self, session_id: str, mark: AttendanceMark, volunteer_id: str) -> SessionParticipantResponse:
        """Staff confirm presence or absence"""
        self.get_session(session_id)
        row = {
            "session_id": session_id,
            "participant_id": mark.participant_id,
            "status": mark.status,
            "validated_by_volunteer_id": volunteer_id,
            "marked_at": _utcnow(),
        }
        if mark.notes is not None:
            row["notes"] = mark.notes
        logger.info(f"Volunteer {volunteer_id} marked {mark.participant_id} {mark.status} for lesson {session_id}")
        return self._upsert_attendance(row)

    def get_roster(self, session_id: str) -> SessionRoster:
        """Sign-ups and attendance for one lesson, grouped by status"""
        session = self.get_session(session_id)
        try:
            result = self.supabase.table("session_participants")\
                .select("*, participant:participants(id, user:users(full_name))")\
                .eq("session_id", session_id)\
                .order("signed_up_at")\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))

        rows = [_to_attendance(row) for row in result.data]
        return SessionRoster(
            session=session,
            signups=[r for r in rows if r.status == "signed_up"],
            needs_validation=[r for r in rows if r.status == "self_reported"],
            present=[r for r in rows if r.status == "present"],
            absent=[r for r in rows if r.status == "absent"]
        )

    def list_attendance_for_participant(self, participant_id: str) -> List[SessionParticipantResponse]:
        """A participant's sign-ups and attendance with the lesson attached"""
        try:
            result = self.supabase.table("session_participants")\
                .select("*, session:sessions(*)")\
                .eq("participant_id", participant_id)\
                .order("signed_up_at", desc=True)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        return [_to_attendance(row) for row in result.data]

    def _get_attendance(self, session_id: str, participant_id: str) -> Optional[dict]:
        try:
            result = self.supabase.table("session_participants")\
                .select("*")\
                .eq("session_id", session_id)\
                .eq("participant_id", participant_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        return result.data[0] if result.data else None

    def _upsert_attendance(self, row: dict) -> SessionParticipantResponse:
        try:
            result = self.supabase.table("session_participants")\
                .upsert(row, on_conflict=ATTENDANCE_CONFLICT)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(f"Failed to record attendance: {e}")
        return _to_attendance(result.data[0])
