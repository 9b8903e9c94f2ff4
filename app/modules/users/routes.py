from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.users.schemas import (
    AccountCreate, AccountCreated, AccountDeleted,
    UserUpdate, LanguageUpdate, UserResponse, UserRole
)
from app.modules.users.service import UserService
from app.core.dependencies import require_permission, get_current_caller
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_service_supabase)) -> UserService:
    return UserService(supabase)


@router.post("", response_model=AccountCreated, status_code=201)
async def create_account(
    account: AccountCreate,
    caller: Dict = Depends(require_permission("users:create")),
    service: UserService = Depends(get_user_service)
):
    """Create an account. Volunteers may only create participants."""
    return service.create_account(caller, account)


@router.get("", response_model=List[UserResponse])
async def list_users(
    role: Optional[UserRole] = None,
    limit: int = 50,
    offset: int = 0,
    caller: Dict = Depends(require_permission("users:read")),
    service: UserService = Depends(get_user_service)
):
    """List user profiles"""
    return service.list_users(role=role, limit=limit, offset=offset)


@router.put("/me/language", response_model=UserResponse)
async def update_my_language(
    body: LanguageUpdate,
    caller: Dict = Depends(get_current_caller),
    service: UserService = Depends(get_user_service)
):
    """Switch the caller's preferred language"""
    return service.update_language(caller["id"], body.preferred_language)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    caller: Dict = Depends(require_permission("users:read")),
    service: UserService = Depends(get_user_service)
):
    """Get user by ID"""
    return service.get_user_by_id(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    body: UserUpdate,
    caller: Dict = Depends(require_permission("users:update")),
    service: UserService = Depends(get_user_service)
):
    """Update a user's display name"""
    return service.update_user(user_id, body)


@router.delete("/{user_id}", response_model=AccountDeleted)
async def delete_account(
    user_id: str,
    caller: Dict = Depends(get_current_caller),
    service: UserService = Depends(get_user_service)
):
    """Delete an account. Nobody may delete their own account; volunteers may only delete participants."""
    return service.delete_account(caller, user_id)
