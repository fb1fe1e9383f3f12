from supabase import Client
from app.config.settings import settings
from app.modules.profiles.schemas import ProfileUpdate, ProfileResponse
from typing import Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.table = settings.profiles_table

    def get_profile(self, user_id: str) -> Optional[ProfileResponse]:
        """Get profile by user ID, None when the user has not saved one yet"""
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        if result is None or not result.data:
            return None
        return ProfileResponse(**result.data)

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Create or update the user's profile"""
        try:
            upsert_data = {
                "id": user_id,
                **profile_data.model_dump(exclude_unset=True),
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }
            result = self.supabase.table(self.table)\
                .upsert(upsert_data)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Não foi possível salvar as alterações.")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Não foi possível salvar as alterações.")
