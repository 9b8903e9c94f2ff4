from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime


class LevelCreate(BaseModel):
    name_en: str
    name_id: str
    description_en: Optional[str] = None
    description_id: Optional[str] = None
    order_number: int = 1


class LevelUpdate(BaseModel):
    name_en: Optional[str] = None
    name_id: Optional[str] = None
    description_en: Optional[str] = None
    description_id: Optional[str] = None
    order_number: Optional[int] = None


class LevelResponse(LevelCreate):
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SkillCreate(LevelCreate):
    level_id: str


class SkillUpdate(LevelUpdate):
    level_id: Optional[str] = None


class SkillResponse(SkillCreate):
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SkillAward(BaseModel):
    skill_id: str
    notes: Optional[str] = None


class LevelAward(BaseModel):
    level_id: str
    notes: Optional[str] = None


class ProgressRecordResponse(BaseModel):
    id: str
    participant_id: str
    skill_id: Optional[str] = None
    level_id: Optional[str] = None
    achieved_date: Optional[date] = None
    validated_by_volunteer_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    skill: Optional[SkillResponse] = None
    level: Optional[LevelResponse] = None

    class Config:
        from_attributes = True


class ParticipantProgress(BaseModel):
    participant_id: str
    skills: List[ProgressRecordResponse]
    levels: List[ProgressRecordResponse]
