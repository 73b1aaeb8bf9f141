from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from app.config import settings
from app.core.dependencies import require_admin
from app.database.supabase_client import get_service_supabase
from app.modules.roles.reconciler import RoleReconciler
from app.modules.roles.schemas import MakeAdminRequest, ReconcileOutcome, RoleEnvelope
from app.modules.roles.stores import IdentityStore, ProfileStore
from supabase import Client
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["roles"])


def get_identity_store(supabase: Client = Depends(get_service_supabase)) -> IdentityStore:
    return IdentityStore(supabase)


def get_profile_store(supabase: Client = Depends(get_service_supabase)) -> ProfileStore:
    return ProfileStore(supabase)


def _envelope(outcome: ReconcileOutcome, status_code: Optional[int] = None) -> JSONResponse:
    if status_code is None:
        status_code = 200 if outcome.success else 500
    body = RoleEnvelope(
        success=outcome.success,
        message=outcome.message,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.get("/ensure-admin", response_model=RoleEnvelope, responses={500: {"model": RoleEnvelope}})
async def ensure_admin(
    identity_store: IdentityStore = Depends(get_identity_store),
    profile_store: ProfileStore = Depends(get_profile_store)
):
    """Make sure the designated admin email holds the admin role. Safe to call repeatedly."""
    reconciler = RoleReconciler(identity_store, profile_store, settings.designated_admin_email)
    return _envelope(reconciler.reconcile())


@router.post("/admin/make-admin", response_model=RoleEnvelope, responses={404: {"model": RoleEnvelope}})
async def make_admin(
    request: MakeAdminRequest,
    user_data: Dict = Depends(require_admin),
    identity_store: IdentityStore = Depends(get_identity_store),
    profile_store: ProfileStore = Depends(get_profile_store)
):
    """Grant the admin role to another account (requires admin)"""
    logger.info(f"Admin {user_data['id']} promoting {request.email}")
    outcome = RoleReconciler(identity_store, profile_store, request.email).reconcile()
    if outcome.success and outcome.account_id is None:
        outcome.success = False
        outcome.message = f"User with email {request.email} not found"
        return _envelope(outcome, status_code=404)
    return _envelope(outcome)
