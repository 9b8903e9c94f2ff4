"""
Account provisioning saga.

An account is an auth identity, a users row and, for participants, a
participants row. Supabase Auth and the Postgres tables share no
transaction, so each forward step records the stage it reached and every
stage has one compensator. On failure the compensators run in reverse:

    none -> identity_only -> profile_added -> complete

A compensator that fails is logged and the rollback continues with the next
stage; the caller still receives the error that triggered the rollback.
"""
import logging
from enum import Enum
from typing import Callable, Dict, Optional

from supabase import Client

from app.config.permissions_config import PARTICIPANT
from app.core.exceptions import (
    SwimProgramError, DuplicateIdentity, BackendUnavailable,
    ProfileInsertFailed, DetailInsertFailed
)
from app.core.phone import normalize_phone_to_digits, phone_to_email
from app.modules.users.schemas import AccountCreate, ParticipantIntake

logger = logging.getLogger(__name__)


class ProvisioningStage(str, Enum):
    NONE = "none"
    IDENTITY_ONLY = "identity_only"
    PROFILE_ADDED = "profile_added"
    COMPLETE = "complete"


# Stage reached after undoing the key stage
_ROLLBACK_TO = {
    ProvisioningStage.PROFILE_ADDED: ProvisioningStage.IDENTITY_ONLY,
    ProvisioningStage.IDENTITY_ONLY: ProvisioningStage.NONE,
}


class AccountProvisioning:
    """One attempt at creating an account. Not reusable."""

    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.stage = ProvisioningStage.NONE
        self.identity_id: Optional[str] = None
        self.compensation_failed = False
        self._compensators: Dict[ProvisioningStage, Callable[[], None]] = {
            ProvisioningStage.PROFILE_ADDED: self._delete_profile,
            ProvisioningStage.IDENTITY_ONLY: self._delete_identity,
        }

    def run(self, account: AccountCreate) -> str:
        """Create identity, profile and participant detail; return the identity id"""
        if self.stage is not ProvisioningStage.NONE:
            raise RuntimeError(f"Provisioning attempt already ran (stage: {self.stage.value})")

        phone_digits = normalize_phone_to_digits(account.phone)
        email = phone_to_email(phone_digits)

        self._create_identity(email, account.password)
        try:
            self._insert_profile(account, phone_digits)
            if account.role == PARTICIPANT:
                self._insert_participant(account.intake)
        except SwimProgramError:
            self.compensate()
            raise

        self.stage = ProvisioningStage.COMPLETE
        logger.info(f"Provisioned {account.role} account {self.identity_id}")
        return self.identity_id

    def compensate(self) -> bool:
        """Undo completed stages in reverse order. Returns False if any undo step failed."""
        if self.stage in _ROLLBACK_TO:
            logger.warning(f"Rolling back account {self.identity_id} from stage {self.stage.value}")
        while self.stage in _ROLLBACK_TO:
            stage = self.stage
            try:
                self._compensators[stage]()
            except Exception as e:
                self.compensation_failed = True
                logger.error(
                    f"Compensation failed at stage {stage.value} for account {self.identity_id}; "
                    f"partial account may remain: {e}"
                )
            self.stage = _ROLLBACK_TO[stage]
        return not self.compensation_failed

    def _create_identity(self, email: str, password: str):
        try:
            response = self.supabase.auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True,
            })
        except Exception as e:
            error_message = str(e)
            if "already" in error_message.lower() or "exists" in error_message.lower():
                raise DuplicateIdentity()
            raise BackendUnavailable(f"Failed to create auth user: {error_message}")

        if not response or not response.user:
            raise BackendUnavailable("Failed to create auth user")

        self.identity_id = response.user.id
        self.stage = ProvisioningStage.IDENTITY_ONLY

    def _insert_profile(self, account: AccountCreate, phone_digits: str):
        try:
            self.supabase.table("users").insert({
                "id": self.identity_id,
                "role": account.role,
                "preferred_language": account.preferred_language,
                "phone": phone_digits,
                "full_name": account.full_name,
            }).execute()
        except Exception as e:
            raise ProfileInsertFailed(f"Failed to create user profile: {e}")
        self.stage = ProvisioningStage.PROFILE_ADDED

    def _insert_participant(self, intake: ParticipantIntake):
        try:
            self.supabase.table("participants").insert(intake.to_row(self.identity_id)).execute()
        except Exception as e:
            raise DetailInsertFailed(f"Failed to create participant record: {e}")

    def _delete_profile(self):
        self.supabase.table("users")\
            .delete()\
            .eq("id", self.identity_id)\
            .execute()

    def _delete_identity(self):
        self.supabase.auth.admin.delete_user(self.identity_id)
