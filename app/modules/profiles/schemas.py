from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any
from datetime import datetime

from app.modules.roles.models import ROLES, ROLE_SUBCONTRACTOR


class Profile(BaseModel):
    id: str
    company_name: Optional[str] = None
    contact_person: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    role: str = ROLE_SUBCONTRACTOR
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value):
        # NULL role rows predate the column default; they read as subcontractor
        if not value:
            return ROLE_SUBCONTRACTOR
        if value not in ROLES:
            raise ValueError(f"role must be one of {', '.join(ROLES)}")
        return value


class ProfileUpdate(BaseModel):
    company_name: str = Field(..., min_length=2)
    contact_person: Optional[str] = Field(None, min_length=2)
    phone_number: Optional[str] = Field(None, min_length=5)
    address: Optional[str] = Field(None, min_length=5)


class ProfileCheckResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    profile_exists: bool
    is_admin: bool
    should_be_admin: bool
    profile: Optional[Dict[str, Any]] = None
