import logging
from datetime import date
from supabase import Client
from app.core.exceptions import NotFound, AlreadyRecorded, BackendUnavailable, is_unique_violation
from app.modules.progress.schemas import (
    LevelCreate, LevelUpdate, LevelResponse,
    SkillCreate, SkillUpdate, SkillResponse,
    SkillAward, LevelAward, ProgressRecordResponse, ParticipantProgress
)
from typing import List, Optional

logger = logging.getLogger(__name__)


class ProgressService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    # Levels

    def create_level(self, level_data: LevelCreate) -> LevelResponse:
        return LevelResponse(**self._insert("levels", level_data.model_dump()))

    def list_levels(self) -> List[LevelResponse]:
        return [LevelResponse(**row) for row in self._select_ordered("levels")]

    def update_level(self, level_id: str, level_data: LevelUpdate) -> LevelResponse:
        return LevelResponse(**self._update("levels", level_id, level_data.model_dump(exclude_none=True), "Level"))

    def delete_level(self, level_id: str) -> bool:
        """Delete a level; its skills go with it"""
        return self._delete("levels", level_id, "Level")

    # Skills

    def create_skill(self, skill_data: SkillCreate) -> SkillResponse:
        return SkillResponse(**self._insert("skills", skill_data.model_dump()))

    def list_skills(self, level_id: Optional[str] = None) -> List[SkillResponse]:
        return [SkillResponse(**row) for row in self._select_ordered("skills", level_id=level_id)]

    def update_skill(self, skill_id: str, skill_data: SkillUpdate) -> SkillResponse:
        return SkillResponse(**self._update("skills", skill_id, skill_data.model_dump(exclude_none=True), "Skill"))

    def delete_skill(self, skill_id: str) -> bool:
        return self._delete("skills", skill_id, "Skill")

    # Participant progress

    def award_skill(self, participant_id: str, award: SkillAward, validator_id: str) -> ProgressRecordResponse:
        """Record that a participant achieved a skill today"""
        return self._award(participant_id, {"skill_id": award.skill_id}, award.notes, validator_id, "skill")

    def award_level(self, participant_id: str, award: LevelAward, validator_id: str) -> ProgressRecordResponse:
        """Record that a participant reached a level today"""
        return self._award(participant_id, {"level_id": award.level_id}, award.notes, validator_id, "level")

    def remove_record(self, record_id: str) -> bool:
        return self._delete("participant_progress", record_id, "Progress record")

    def get_participant_progress(self, participant_id: str) -> ParticipantProgress:
        """Achieved skills and levels, split"""
        try:
            result = self.supabase.table("participant_progress")\
                .select("*, skill:skills(*), level:levels(*)")\
                .eq("participant_id", participant_id)\
                .order("achieved_date", desc=True)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))

        records = [ProgressRecordResponse(**row) for row in result.data]
        return ParticipantProgress(
            participant_id=participant_id,
            skills=[r for r in records if r.skill_id],
            levels=[r for r in records if r.level_id]
        )

    def _award(self, participant_id: str, target: dict, notes: Optional[str], validator_id: str, kind: str) -> ProgressRecordResponse:
        row = {
            "participant_id": participant_id,
            "validated_by_volunteer_id": validator_id,
            "achieved_date": date.today().isoformat(),
            **target,
        }
        if notes is not None:
            row["notes"] = notes
        try:
            result = self.supabase.table("participant_progress").insert(row).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise AlreadyRecorded(f"This {kind} is already assigned to the participant")
            raise BackendUnavailable(f"Error adding {kind}: {e}")
        logger.info(f"{validator_id} awarded {kind} {list(target.values())[0]} to participant {participant_id}")
        return ProgressRecordResponse(**result.data[0])

    def _insert(self, table: str, data: dict) -> dict:
        try:
            result = self.supabase.table(table).insert(data).execute()
        except Exception as e:
            raise BackendUnavailable(f"Failed to create {table} row: {e}")
        if not result.data:
            raise BackendUnavailable(f"Failed to create {table} row")
        return result.data[0]

    def _select_ordered(self, table: str, level_id: Optional[str] = None) -> List[dict]:
        try:
            query = self.supabase.table(table).select("*")
            if level_id:
                query = query.eq("level_id", level_id)
            return query.order("order_number").execute().data
        except Exception as e:
            raise BackendUnavailable(str(e))

    def _update(self, table: str, row_id: str, update_data: dict, label: str) -> dict:
        try:
            if update_data:
                result = self.supabase.table(table).update(update_data).eq("id", row_id).execute()
            else:
                result = self.supabase.table(table).select("*").eq("id", row_id).limit(1).execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        if not result.data:
            raise NotFound(f"{label} not found")
        return result.data[0]

    def _delete(self, table: str, row_id: str, label: str) -> bool:
        try:
            result = self.supabase.table(table).delete().eq("id", row_id).execute()
        except Exception as e:
            raise BackendUnavailable(str(e))
        if not result.data:
            raise NotFound(f"{label} not found")
        return True
