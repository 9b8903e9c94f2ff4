from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.auth.schemas import LoginRequest, LoginResponse, MeResponse
from app.modules.auth.service import AuthService
from app.modules.users.service import UserService
from app.core.dependencies import get_auth_service, get_current_token, get_current_caller, require_role
from app.config.permissions_config import ADMIN, permissions_for_role, role_home_path, get_permission_matrix
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
    supabase: Client = Depends(get_service_supabase)
):
    """Login with phone + password; returns the token and where the role lands"""
    token = service.login(login_data)
    profile = UserService(supabase).get_user_by_id(token.user_id)
    return LoginResponse(
        **token.model_dump(),
        role=profile.role,
        preferred_language=profile.preferred_language,
        full_name=profile.full_name,
        redirect_path=role_home_path(profile.role)
    )


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def get_me(caller: Dict = Depends(get_current_caller)):
    """Get current caller profile and their permissions (for frontend UI)."""
    return MeResponse(
        id=caller["id"],
        role=caller["role"],
        preferred_language=caller["preferred_language"],
        full_name=caller.get("full_name"),
        phone=caller.get("phone"),
        permissions=permissions_for_role(caller["role"])
    )


@router.get("/permissions", response_model=Dict[str, List[str]])
async def get_permissions(caller: Dict = Depends(require_role(ADMIN))):
    """Role -> permission matrix, for the admin settings screen"""
    return get_permission_matrix()
