from datetime import datetime, timezone
from supabase import Client
from app.modules.profiles.schemas import Profile, ProfileUpdate, ProfileCheckResponse
from app.modules.roles.models import ROLE_ADMIN
from typing import Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _fetch(self, user_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("profiles")\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> Profile:
        """Update the company details of a profile. Role is never touched here."""
        update_data = profile_data.model_dump()
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Database error updating profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Database error: {e}")
        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")
        return Profile(**result.data[0])

    def check_profile(self, user_data: Dict[str, Any], designated_admin_email: str) -> ProfileCheckResponse:
        """Diagnostic view of the caller's profile and whether its role is what it should be"""
        try:
            row = self._fetch(user_data["id"])
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Profile error: {e}")
        return ProfileCheckResponse(
            user_id=user_data["id"],
            email=user_data.get("email"),
            profile_exists=row is not None,
            is_admin=bool(row) and row.get("role") == ROLE_ADMIN,
            should_be_admin=user_data.get("email") == designated_admin_email,
            profile=row
        )
