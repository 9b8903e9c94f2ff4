from supabase import Client
from app.core.exceptions import SwimProgramError, NotFound, BackendUnavailable
from app.modules.participants.schemas import ParticipantUpdate, ParticipantResponse
from typing import List

PARTICIPANT_SELECT = "*, user:users(full_name, phone)"


def _to_response(row: dict) -> ParticipantResponse:
    row = dict(row)
    user = row.pop("user", None) or {}
    return ParticipantResponse(
        **row,
        full_name=user.get("full_name"),
        phone=user.get("phone")
    )


class ParticipantService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_participants(self, limit: int = 100, offset: int = 0) -> List[ParticipantResponse]:
        """List participants with their display names, newest first"""
        try:
            result = self.supabase.table("participants")\
                .select(PARTICIPANT_SELECT)\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [_to_response(row) for row in result.data]
        except SwimProgramError:
            raise
        except Exception as e:
            raise BackendUnavailable(str(e))

    def get_participant(self, participant_id: str) -> ParticipantResponse:
        return _to_response(self._fetch_one("id", participant_id))

    def get_participant_for_user(self, user_id: str) -> ParticipantResponse:
        return _to_response(self._fetch_one("user_id", user_id))

    def get_participant_id_for_user(self, user_id: str) -> str:
        """participants.id for a participant's identity"""
        return self._fetch_one("user_id", user_id)["id"]

    def update_participant(self, participant_id: str, participant_data: ParticipantUpdate) -> ParticipantResponse:
        """Update intake fields and notes; a full_name change goes to the users row"""
        update_data = participant_data.model_dump(mode="json", exclude_unset=True)
        full_name = update_data.pop("full_name", None)
        current = self._fetch_one("id", participant_id)

        try:
            if full_name is not None:
                self.supabase.table("users")\
                    .update({"full_name": full_name})\
                    .eq("id", current["user_id"])\
                    .execute()
            if update_data:
                self.supabase.table("participants")\
                    .update(update_data)\
                    .eq("id", participant_id)\
                    .execute()
        except Exception as e:
            raise BackendUnavailable(f"Failed to update participant: {e}")

        return self.get_participant(participant_id)

    def set_profile_photo(self, participant_id: str, photo_url: str) -> ParticipantResponse:
        """Store the URL of an already uploaded profile photo"""
        try:
            result = self.supabase.table("participants")\
                .update({"profile_photo_url": photo_url.strip()})\
                .eq("id", participant_id)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(f"Failed to update photo: {e}")
        if not result.data:
            raise NotFound("Participant not found")
        return self.get_participant(participant_id)

    def _fetch_one(self, column: str, value: str) -> dict:
        try:
            result = self.supabase.table("participants")\
                .select(PARTICIPANT_SELECT)\
                .eq(column, value)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        if not result.data:
            raise NotFound("Participant not found")
        return result.data[0]
