"""
Core dependencies for route protection and role checking
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.service import AuthService
from app.modules.roles.models import ROLE_ADMIN
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    service_supabase: Client = Depends(get_service_supabase)
) -> AuthService:
    return AuthService(supabase, service_supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def get_user_role(user_id: str, supabase: Client) -> Optional[str]:
    """Role from the profiles table, None when the user has no profile or the read fails."""
    try:
        result = supabase.table("profiles")\
            .select("role")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return result.data[0].get("role") or "subcontractor"
    except Exception as e:
        logger.error(f"Error getting profile role: {e}")
        return None


def require_role(required_role: str):
    """Factory function to create a role check dependency"""
    def check_role(
        user_data: dict = Depends(get_current_user_id),
        supabase: Client = Depends(get_service_supabase)
    ) -> dict:
        role = get_user_role(user_data["id"], supabase)
        if role != required_role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"{required_role.capitalize()} privileges required"
            )
        return user_data
    return check_role


require_admin = require_role(ROLE_ADMIN)


def get_current_profile(
    user_data: Dict[str, Any] = Depends(get_current_user_id),
    supabase: Client = Depends(get_service_supabase)
) -> Dict[str, Any]:
    """Profile row for the current user; 404 when the user never got one at signup"""
    try:
        result = supabase.table("profiles")\
            .select("*")\
            .eq("id", user_data["id"])\
            .limit(1)\
            .execute()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching profile: {e}")
    if not result.data:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return result.data[0]
