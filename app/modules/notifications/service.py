from datetime import datetime, timezone
from supabase import Client
from app.modules.notifications.schemas import (
    NotificationResponse, BulkDeleteResponse, NotificationActionResponse
)
from typing import List, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _get_owned(self, notification_id: str, user_id: str, action: str) -> Dict[str, Any]:
        """Fetch a notification and make sure the caller is its recipient"""
        try:
            result = self.supabase.table("notifications")\
                .select("id, recipient_id, read")\
                .eq("id", notification_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching notification {notification_id}: {e}")
            raise HTTPException(status_code=500, detail="Error fetching notification")
        if not result.data:
            raise HTTPException(status_code=404, detail="Notification not found")
        notification = result.data[0]
        if notification["recipient_id"] != user_id:
            logger.info(f"Permission denied: notification {notification_id} belongs to {notification['recipient_id']}")
            raise HTTPException(
                status_code=403,
                detail=f"You do not have permission to {action} this notification"
            )
        return notification

    def list_notifications(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0
    ) -> List[NotificationResponse]:
        """List the caller's notifications, newest first"""
        try:
            query = self.supabase.table("notifications")\
                .select("*")\
                .eq("recipient_id", user_id)
            if unread_only:
                query = query.eq("read", False)
            result = query\
                .order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [NotificationResponse(**n) for n in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def set_read(self, notification_id: str, user_id: str, read: bool) -> NotificationActionResponse:
        """Mark one notification read or unread"""
        self._get_owned(notification_id, user_id, "update")
        try:
            self.supabase.table("notifications")\
                .update({
                    "read": read,
                    "updated_at": datetime.now(timezone.utc).isoformat()
                })\
                .eq("id", notification_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating notification {notification_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Database error: {e}")
        state = "marked as read" if read else "marked as unread"
        return NotificationActionResponse(message=f"Notification {state} successfully")

    def delete_notification(self, notification_id: str, user_id: str) -> NotificationActionResponse:
        """Delete one notification"""
        self._get_owned(notification_id, user_id, "delete")
        try:
            self.supabase.table("notifications")\
                .delete()\
                .eq("id", notification_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting notification {notification_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Database error: {e}")
        logger.info(f"Notification {notification_id} deleted by {user_id}")
        return NotificationActionResponse(message="Notification deleted successfully")

    def bulk_delete(self, notification_ids: List[str], user_id: str) -> BulkDeleteResponse:
        """Delete the caller's notifications among the given IDs; IDs owned by others are skipped"""
        try:
            result = self.supabase.table("notifications")\
                .select("id, recipient_id")\
                .in_("id", notification_ids)\
                .eq("recipient_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching notifications for bulk delete: {e}")
            raise HTTPException(status_code=500, detail="Error fetching notifications")

        owned_ids = [n["id"] for n in result.data or []]
        if not owned_ids:
            raise HTTPException(status_code=404, detail="No valid notifications found to delete")
        if len(owned_ids) != len(set(notification_ids)):
            logger.info(f"Bulk delete: {len(notification_ids)} requested, {len(owned_ids)} owned by {user_id}")

        try:
            self.supabase.table("notifications")\
                .delete()\
                .in_("id", owned_ids)\
                .execute()
        except Exception as e:
            logger.error(f"Error deleting notifications: {e}")
            raise HTTPException(status_code=500, detail=f"Database error: {e}")

        return BulkDeleteResponse(
            message=f"{len(owned_ids)} notification(s) deleted successfully",
            deleted_count=len(owned_ids),
            deleted_ids=owned_ids
        )

    def mark_all_read(self, user_id: str) -> NotificationActionResponse:
        """Mark every unread notification of the caller as read"""
        try:
            self.supabase.table("notifications")\
                .update({
                    "read": True,
                    "updated_at": datetime.now(timezone.utc).isoformat()
                })\
                .eq("recipient_id", user_id)\
                .eq("read", False)\
                .execute()
        except Exception as e:
            logger.error(f"Error updating notifications: {e}")
            raise HTTPException(status_code=500, detail=f"Database error: {e}")
        return NotificationActionResponse(message="All notifications marked as read successfully")
