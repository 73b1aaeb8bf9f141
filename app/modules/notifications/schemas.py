from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class NotificationResponse(BaseModel):
    id: str
    recipient_id: str
    title: Optional[str] = None
    message: Optional[str] = None
    type: Optional[str] = None
    read: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NotificationReadUpdate(BaseModel):
    read: bool


class BulkDeleteRequest(BaseModel):
    notification_ids: List[str] = Field(..., min_length=1)


class BulkDeleteResponse(BaseModel):
    success: bool = True
    message: str
    deleted_count: int
    deleted_ids: List[str]


class NotificationActionResponse(BaseModel):
    success: bool = True
    message: str
