from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

from app.modules.profiles.schemas import Profile


class Account(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def role_hint(self) -> Optional[str]:
        return self.user_metadata.get("role")


class ReconciliationPlan(BaseModel):
    """Corrective writes needed to bring one account to the desired role."""
    desired_role: str
    account: Optional[Account] = None
    profile: Optional[Profile] = None
    profile_update: Optional[Dict[str, Any]] = None
    metadata_update: Optional[Dict[str, Any]] = None

    @property
    def account_found(self) -> bool:
        return self.account is not None

    @property
    def profile_missing(self) -> bool:
        return self.account is not None and self.profile is None

    @property
    def is_noop(self) -> bool:
        return self.profile_update is None and self.metadata_update is None


class ReconcileOutcome(BaseModel):
    success: bool
    message: str
    account_id: Optional[str] = None
    profile_updated: bool = False
    metadata_updated: bool = False
    warnings: List[str] = Field(default_factory=list)


class RoleEnvelope(BaseModel):
    success: bool
    message: str
    timestamp: datetime


class MakeAdminRequest(BaseModel):
    email: EmailStr
