from pydantic import BaseModel
from typing import List, Optional


class LoginRequest(BaseModel):
    phone: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class LoginResponse(TokenResponse):
    role: str
    preferred_language: str = "en"
    full_name: Optional[str] = None
    redirect_path: str = "/"


class MeResponse(BaseModel):
    id: str
    role: str
    preferred_language: str = "en"
    full_name: Optional[str] = None
    phone: Optional[str] = None
    permissions: List[str]
