from fastapi import APIRouter, Depends
from app.core.dependencies import get_current_user_id
from app.database.supabase_client import get_service_supabase
from app.modules.notifications.schemas import (
    NotificationResponse, NotificationReadUpdate, BulkDeleteRequest,
    BulkDeleteResponse, NotificationActionResponse
)
from app.modules.notifications.service import NotificationService
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(supabase: Client = Depends(get_service_supabase)) -> NotificationService:
    return NotificationService(supabase)


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    unread_only: bool = False,
    limit: int = 50,
    offset: int = 0,
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    """List notifications addressed to the current user"""
    return service.list_notifications(user_data["id"], unread_only=unread_only, limit=limit, offset=offset)


@router.post("/mark-all-read", response_model=NotificationActionResponse)
async def mark_all_read(
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    """Mark all of the current user's notifications as read"""
    return service.mark_all_read(user_data["id"])


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_notifications(
    request: BulkDeleteRequest,
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    """Delete several notifications at once (only the caller's own are deleted)"""
    return service.bulk_delete(request.notification_ids, user_data["id"])


@router.patch("/{notification_id}", response_model=NotificationActionResponse)
async def update_notification(
    notification_id: str,
    update: NotificationReadUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    """Mark a notification read or unread"""
    return service.set_read(notification_id, user_data["id"], update.read)


@router.delete("/{notification_id}", response_model=NotificationActionResponse)
async def delete_notification(
    notification_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    """Delete a notification"""
    return service.delete_notification(notification_id, user_data["id"])
