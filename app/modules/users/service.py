import logging
from supabase import Client
from app.config import settings
from app.config.permissions_config import can_manage_role, MANAGEABLE_ROLES
from app.core.dependencies import get_user_profile
from app.core.exceptions import (
    SwimProgramError, NotAuthorized, SelfDeletionForbidden, WeakPassword,
    NotFound, BackendUnavailable
)
from app.core.phone import normalize_phone_to_digits
from app.modules.users.provisioning import AccountProvisioning
from app.modules.users.schemas import (
    AccountCreate, AccountCreated, AccountDeleted,
    UserUpdate, UserResponse, Language
)
from typing import List, Optional

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_account(self, caller: dict, account: AccountCreate) -> AccountCreated:
        """Provision identity + profile (+ participant record) for an authorized caller"""
        if not can_manage_role(caller["role"], account.role):
            raise NotAuthorized(f"A {caller['role']} cannot create {account.role} users")
        if len(account.password) < settings.password_min_length:
            raise WeakPassword(
                f"Password must be at least {settings.password_min_length} characters"
            )
        # Validate before any remote call
        normalize_phone_to_digits(account.phone)

        logger.info(f"{caller['role']} {caller['id']} creating {account.role} account")
        identity_id = AccountProvisioning(self.supabase).run(account)
        return AccountCreated(user_id=identity_id)

    def delete_account(self, caller: dict, target_user_id: str) -> AccountDeleted:
        """Delete an account by identity id; the backend cascades to profile and dependent rows"""
        if caller["id"] == target_user_id:
            raise SelfDeletionForbidden()
        if not MANAGEABLE_ROLES.get(caller["role"]):
            raise NotAuthorized()

        target = get_user_profile(target_user_id, self.supabase)
        if not target:
            raise NotFound("User not found")
        if not can_manage_role(caller["role"], target["role"]):
            raise NotAuthorized(f"A {caller['role']} cannot delete {target['role']} users")

        try:
            self.supabase.auth.admin.delete_user(target_user_id)
        except Exception as e:
            logger.error(f"Error deleting user {target_user_id}: {e}")
            raise BackendUnavailable(f"Failed to delete user: {e}")

        logger.info(f"{caller['role']} {caller['id']} deleted account {target_user_id}")
        return AccountDeleted()

    def get_user_by_id(self, user_id: str) -> UserResponse:
        """Get user profile by ID"""
        profile = get_user_profile(user_id, self.supabase)
        if not profile:
            raise NotFound("User not found")
        return UserResponse(**profile)

    def list_users(
        self,
        role: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[UserResponse]:
        """List profiles, newest first, optionally filtered by role"""
        try:
            query = self.supabase.table("users").select("*")
            if role:
                query = query.eq("role", role)
            result = query.order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [UserResponse(**user) for user in result.data]
        except SwimProgramError:
            raise
        except Exception as e:
            raise BackendUnavailable(str(e))

    def update_user(self, user_id: str, user_data: UserUpdate) -> UserResponse:
        """Update profile display name"""
        update_data = {}
        if user_data.full_name is not None:
            update_data["full_name"] = user_data.full_name
        if not update_data:
            return self.get_user_by_id(user_id)
        return self._update(user_id, update_data)

    def update_language(self, user_id: str, preferred_language: Language) -> UserResponse:
        """Set the caller's preferred UI language"""
        return self._update(user_id, {"preferred_language": preferred_language})

    def _update(self, user_id: str, update_data: dict) -> UserResponse:
        try:
            result = self.supabase.table("users")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            raise BackendUnavailable(str(e))

        if not result.data:
            raise NotFound("User not found")

        return UserResponse(**result.data[0])
