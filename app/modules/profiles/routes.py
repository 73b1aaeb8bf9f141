from fastapi import APIRouter, Depends
from app.config import settings
from app.core.dependencies import get_current_user_id, get_current_profile
from app.database.supabase_client import get_service_supabase
from app.modules.profiles.schemas import Profile, ProfileUpdate, ProfileCheckResponse
from app.modules.profiles.service import ProfileService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_service_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=Profile)
async def get_my_profile(
    profile: Dict = Depends(get_current_profile)
):
    """Get the current user's profile"""
    return profile


@router.put("/me", response_model=Profile)
async def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Update company details from the settings page"""
    return service.update_profile(user_data["id"], profile_data)


@router.get("/me/check", response_model=ProfileCheckResponse)
async def check_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Debugging aid: does the profile exist and does its role match expectations"""
    return service.check_profile(user_data, settings.designated_admin_email)
