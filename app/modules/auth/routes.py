from fastapi import APIRouter, Depends
from app.modules.auth.schemas import LoginRequest, TokenResponse, SessionResponse
from app.modules.auth.service import AuthService
from app.modules.profiles.service import ProfileService
from app.modules.profiles.routes import get_profile_service
from app.core.dependencies import get_auth_service, get_current_token, get_current_user
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Você foi desconectado do sistema."}


@router.get("/me")
async def get_me(
    current_user: Dict = Depends(get_current_user),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Get current authenticated user and their profile (None if not created yet)."""
    profile = profiles.get_profile(current_user["id"])
    return {**current_user, "profile": profile.model_dump() if profile else None}


@router.get("/session", response_model=SessionResponse)
def get_session(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Report how loading the session for this token ended (authenticated, anonymous or failed)."""
    loader = service.resolve_session(token)
    return SessionResponse(
        state=loader.state,
        attempts=loader.attempts,
        user_id=loader.user["id"] if loader.user else None,
        error=loader.error,
    )
