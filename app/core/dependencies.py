"""
Core dependencies for route protection.

Every mutating route resolves its caller through require_role /
require_permission: token -> Supabase identity -> profile role -> role check.
Anything missing along that chain fails closed.
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config.permissions_config import roles_for_permission
from app.core.exceptions import NotAuthenticated, NotAuthorized, BackendUnavailable
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise NotAuthenticated()
    return credentials.credentials


def get_current_user_id(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def get_user_profile(user_id: str, supabase: Client) -> Optional[Dict[str, Any]]:
    """Return the public.users row for an identity, or None"""
    try:
        result = supabase.table("users")\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
    except Exception as e:
        logger.error(f"Error loading profile for {user_id}: {e}")
        raise BackendUnavailable(f"Failed to load user profile: {e}")
    return result.data[0] if result.data else None


def get_current_caller(
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_service_supabase)
) -> dict:
    """Authenticated identity merged with its profile role. No profile means no access."""
    profile = get_user_profile(user_data["id"], supabase)
    if not profile:
        raise NotAuthorized("User profile not found")
    return {
        **user_data,
        "role": profile["role"],
        "preferred_language": profile.get("preferred_language") or "en",
        "full_name": profile.get("full_name"),
        "phone": profile.get("phone"),
    }


def require_role(*roles: str):
    """Factory function to create a role check dependency"""
    allowed = frozenset(roles)

    def check_role(caller: dict = Depends(get_current_caller)) -> dict:
        if caller["role"] not in allowed:
            raise NotAuthorized(
                f"Not authorized. Requires role: {' or '.join(sorted(allowed)) or 'none'}"
            )
        return caller
    return check_role


def require_permission(required_permission: str):
    """Role check for a "module:action" permission from the permission matrix"""
    return require_role(*roles_for_permission(required_permission))
