import hashlib
import logging
import time
from supabase import Client
from app.modules.auth.schemas import LoginRequest, TokenResponse
from app.core.exceptions import NotAuthenticated, BackendUnavailable
from app.core.phone import phone_to_email
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Token hash -> (identity, expiry). Spares Supabase a get_user call per request.
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _token_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _cached_identity(token: str) -> Optional[Dict[str, Any]]:
    entry = _AUTH_USER_CACHE.get(_token_key(token))
    if entry is None:
        return None
    identity, expiry = entry
    if time.monotonic() >= expiry:
        _AUTH_USER_CACHE.pop(_token_key(token), None)
        return None
    return identity


def _remember_identity(token: str, identity: Dict[str, Any]):
    if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
        _AUTH_USER_CACHE[_token_key(token)] = (identity, time.monotonic() + _AUTH_CACHE_TTL_SEC)


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Sign in with phone + password; the phone is mapped to its pseudo-email first"""
        email = phone_to_email(login_data.phone)
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": email,
                "password": login_data.password
            })
        except Exception as e:
            if "invalid" in str(e).lower():
                raise NotAuthenticated("Invalid phone number or password")
            logger.error(f"Sign-in for {email} failed: {e}")
            raise BackendUnavailable(f"Login failed: {e}")

        if not auth_response.user or not auth_response.session:
            raise NotAuthenticated("Invalid phone number or password")

        return TokenResponse(
            access_token=auth_response.session.access_token,
            user_id=auth_response.user.id,
            email=auth_response.user.email or email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve a bearer token to {"id", "email"}"""
        identity = _cached_identity(token)
        if identity is not None:
            return identity

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.debug(f"Token rejected: {e}")
            raise NotAuthenticated("Invalid or expired token")
        if not user_response or not user_response.user:
            raise NotAuthenticated("Invalid or expired token")

        identity = {"id": user_response.user.id, "email": user_response.user.email}
        _remember_identity(token, identity)
        return identity

    def logout(self, token: str) -> bool:
        """Forget the token locally and end the Supabase session"""
        _AUTH_USER_CACHE.pop(_token_key(token), None)
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False
        return True
