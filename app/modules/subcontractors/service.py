from supabase import Client
from app.modules.profiles.schemas import Profile
from app.modules.roles.models import ROLE_SUBCONTRACTOR
from app.modules.subcontractors.schemas import SubcontractorDeleteResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class SubcontractorService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_subcontractors(self, limit: int = 100, offset: int = 0) -> List[Profile]:
        """List subcontractor profiles, by company name"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("role", ROLE_SUBCONTRACTOR)\
                .order("company_name")\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [Profile(**p) for p in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_subcontractor(self, subcontractor_id: str) -> SubcontractorDeleteResponse:
        """Delete a subcontractor's profile (cascades to their jobs, invoices and notifications) and auth user"""
        try:
            result = self.supabase.table("profiles")\
                .select("role, company_name")\
                .eq("id", subcontractor_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Database error: {e}")
        if not result.data:
            raise HTTPException(status_code=404, detail="Subcontractor not found")
        subcontractor = result.data[0]
        if subcontractor.get("role") != ROLE_SUBCONTRACTOR:
            raise HTTPException(status_code=400, detail="The specified user is not a subcontractor")

        try:
            self.supabase.table("profiles")\
                .delete()\
                .eq("id", subcontractor_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting subcontractor profile {subcontractor_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Database error: {e}")

        try:
            self.supabase.auth.admin.delete_user(subcontractor_id)
        except Exception as e:
            logger.error(f"Error deleting auth user {subcontractor_id}: {e}")
            raise HTTPException(
                status_code=500,
                detail=f"Auth deletion error: {e}. Profile was deleted but auth user remains"
            )

        company = subcontractor.get("company_name") or subcontractor_id
        logger.info(f"Subcontractor {company} ({subcontractor_id}) deleted")
        return SubcontractorDeleteResponse(
            message=f"Subcontractor {company} has been deleted successfully"
        )
