import hashlib
import time
from supabase import Client
from app.modules.auth.schemas import LoginRequest, TokenResponse
from app.modules.auth.session import InvalidTokenError, SessionLoader, SessionState
from app.config.settings import settings
from fastapi import HTTPException
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        if not login_data.password:
            raise HTTPException(status_code=400, detail="Por favor, preencha email e senha.")
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Credenciais inválidas.")

            logger.info(f"User {auth_response.user.id} signed in")
            return TokenResponse(
                access_token=auth_response.session.access_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            logger.error(f"Auth error: {error_message}")
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Credenciais inválidas.")
            raise HTTPException(status_code=500, detail=f"Erro na autenticação: {error_message}")

    def _fetch_user(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise InvalidTokenError(error_msg)
            raise
        if not user_response or not user_response.user:
            return None
        user = user_response.user
        return {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
            "created_at": user.created_at,
            "updated_at": user.updated_at
        }

    def resolve_session(self, token: str) -> SessionLoader:
        """Run the session state machine for a token and return the finished loader."""
        loader = SessionLoader(
            self._fetch_user,
            max_attempts=settings.auth_max_attempts,
            timeout_seconds=settings.auth_timeout_seconds,
        )
        loader.load(token)
        return loader

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        cache_key = hashlib.sha256(token.encode()).hexdigest()
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            user_data, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return user_data
            del _AUTH_USER_CACHE[cache_key]

        loader = self.resolve_session(token)
        if loader.state == SessionState.FAILED:
            raise HTTPException(status_code=503, detail="Serviço de autenticação indisponível. Tente novamente.")
        if loader.state != SessionState.AUTHENTICATED:
            raise HTTPException(status_code=401, detail="Invalid or expired token")

        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (loader.user, now + settings.auth_cache_ttl_seconds)
        return loader.user

    def logout(self, token: str) -> bool:
        """Logout user using Supabase Auth"""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
        try:
            # Supabase Auth tokens are stateless JWTs, so logout is mainly client-side
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.error(f"Error signing out: {e}")
            return False
