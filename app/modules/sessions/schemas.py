import datetime as dt
from pydantic import BaseModel, model_validator
from typing import Optional, List, Literal

Frequency = Literal["daily", "weekly"]
AttendanceStatus = Literal["signed_up", "present", "absent", "self_reported"]


class RecurrenceRule(BaseModel):
    frequency: Frequency = "weekly"
    end_date: dt.date


class SessionCreate(BaseModel):
    date: dt.date
    time: dt.time
    type: str = "Swim Lesson"
    recurrence: Optional[RecurrenceRule] = None  # None creates a single lesson

    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.recurrence and self.recurrence.end_date < self.date:
            raise ValueError("Recurrence end_date must not be before date")
        return self


class SessionUpdate(BaseModel):
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    type: Optional[str] = None


class SessionResponse(BaseModel):
    id: str
    date: dt.date
    time: dt.time
    type: str
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class AttendanceMark(BaseModel):
    participant_id: str
    status: Literal["present", "absent"]
    notes: Optional[str] = None


class SessionParticipantResponse(BaseModel):
    id: str
    session_id: str
    participant_id: str
    status: AttendanceStatus
    signed_up_at: Optional[dt.datetime] = None
    marked_at: Optional[dt.datetime] = None
    validated_by_volunteer_id: Optional[str] = None
    notes: Optional[str] = None
    participant_name: Optional[str] = None
    session: Optional[SessionResponse] = None

    class Config:
        from_attributes = True


class SessionRoster(BaseModel):
    session: SessionResponse
    signups: List[SessionParticipantResponse]
    needs_validation: List[SessionParticipantResponse]
    present: List[SessionParticipantResponse]
    absent: List[SessionParticipantResponse]
