from fastapi import APIRouter, Depends
from app.core.dependencies import require_admin
from app.database.supabase_client import get_service_supabase
from app.modules.profiles.schemas import Profile
from app.modules.subcontractors.schemas import SubcontractorDeleteResponse
from app.modules.subcontractors.service import SubcontractorService
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/admin/subcontractors", tags=["subcontractors"])


def get_subcontractor_service(supabase: Client = Depends(get_service_supabase)) -> SubcontractorService:
    return SubcontractorService(supabase)


@router.get("", response_model=List[Profile])
async def list_subcontractors(
    limit: int = 100,
    offset: int = 0,
    user_data: Dict = Depends(require_admin),
    service: SubcontractorService = Depends(get_subcontractor_service)
):
    """List subcontractors (requires admin)"""
    return service.list_subcontractors(limit=limit, offset=offset)


@router.delete("/{subcontractor_id}", response_model=SubcontractorDeleteResponse)
async def delete_subcontractor(
    subcontractor_id: str,
    user_data: Dict = Depends(require_admin),
    service: SubcontractorService = Depends(get_subcontractor_service)
):
    """Delete a subcontractor and their account (requires admin)"""
    return service.delete_subcontractor(subcontractor_id)
