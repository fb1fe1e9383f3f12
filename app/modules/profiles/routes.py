from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.profiles.schemas import ProfileUpdate, ProfileResponse, ProfileUpdateResponse
from app.modules.profiles.service import ProfileService
from app.core.dependencies import get_current_user
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/profile", tags=["profile"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("", response_model=Optional[ProfileResponse])
async def get_profile(
    current_user: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the current user's profile"""
    return service.get_profile(current_user["id"])


@router.put("", response_model=ProfileUpdateResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    current_user: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Update the current user's profile"""
    return ProfileUpdateResponse(profile=service.update_profile(current_user["id"], profile_data))
