from pydantic import BaseModel, Field, field_validator
from typing import Optional, Literal
from datetime import date, datetime

UserRole = Literal["admin", "volunteer", "participant"]
Language = Literal["en", "id"]
AbilityLevel = Literal["none", "poor", "competent", "advanced"]
HijabPhotoPreference = Literal["with_or_without", "only_with"]


class ParticipantIntake(BaseModel):
    """Intake form answers stored on the participants row. Blank strings are stored as null."""
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    shoe_size: Optional[str] = None
    clothing_size: Optional[str] = None
    age: Optional[str] = None
    village: Optional[str] = None
    number_of_children: Optional[str] = None
    # Medical and dietary
    respiratory_issues: Optional[str] = None
    diabetes: Optional[str] = None
    neurological_conditions: Optional[str] = None
    chronic_illnesses: Optional[str] = None
    head_injuries: Optional[str] = None
    hospitalizations: Optional[str] = None
    medications: Optional[str] = None
    medications_not_taking_during_program: Optional[str] = None
    medical_dietary_requirements: Optional[str] = None
    religious_personal_dietary_restrictions: Optional[str] = None
    # Self-rated ability
    swim_ability_calm: Optional[AbilityLevel] = None
    swim_ability_moving: Optional[AbilityLevel] = None
    surfing_experience: Optional[AbilityLevel] = None
    # Acknowledgments and agreements
    commitment_statement: bool = False
    acknowledgment_agreement_authorization: bool = False
    risks_release_indemnity_agreement: bool = False
    media_release_agreement: bool = False
    hijab_photo_preference: Optional[HijabPhotoPreference] = None
    signature: Optional[str] = None
    signature_date: Optional[date] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(
        "commitment_statement", "acknowledgment_agreement_authorization",
        "risks_release_indemnity_agreement", "media_release_agreement",
        mode="before"
    )
    @classmethod
    def unset_agreement_is_false(cls, value):
        return False if value is None else value

    def to_row(self, user_id: str) -> dict:
        return {"user_id": user_id, **self.model_dump(mode="json")}


class AccountCreate(BaseModel):
    phone: str
    password: str
    role: UserRole
    full_name: str
    preferred_language: Language = "en"
    intake: ParticipantIntake = Field(default_factory=ParticipantIntake)


class AccountCreated(BaseModel):
    user_id: str


class AccountDeleted(BaseModel):
    ok: bool = True


class UserUpdate(BaseModel):
    full_name: Optional[str] = None


class LanguageUpdate(BaseModel):
    preferred_language: Language


class UserResponse(BaseModel):
    id: str
    role: UserRole
    preferred_language: Language = "en"
    full_name: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
