"""
Supabase adapters used by the role reconciler.

IdentityStore wraps Supabase Auth's admin API (auth.users); ProfileStore wraps
the profiles table. Both need the service-role client. Store failures are
translated into the role consistency error taxonomy so the reconciler never
sees a raw SDK exception.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from supabase import Client

from app.modules.profiles.schemas import Profile
from app.modules.roles.errors import (
    IdentityFetchError, MetadataWriteError, ProfileReadError, ProfileWriteError
)
from app.modules.roles.schemas import Account

logger = logging.getLogger(__name__)

_LIST_USERS_PAGE_SIZE = 1000


class IdentityStore:
    def __init__(self, supabase: Client, page_size: int = _LIST_USERS_PAGE_SIZE):
        self.supabase = supabase
        self.page_size = page_size

    def list_accounts(self) -> List[Account]:
        """Return every account in Supabase Auth, following pagination to the end."""
        accounts: List[Account] = []
        page = 1
        try:
            while True:
                users = self.supabase.auth.admin.list_users(page=page, per_page=self.page_size)
                users = users or []
                for user in users:
                    accounts.append(Account(
                        id=str(user.id),
                        email=user.email,
                        user_metadata=user.user_metadata or {},
                    ))
                if len(users) < self.page_size:
                    break
                page += 1
        except Exception as e:
            raise IdentityFetchError(f"Error listing users: {e}") from e
        logger.debug(f"Fetched {len(accounts)} accounts from Supabase Auth")
        return accounts

    def update_account_metadata(self, account_id: str, metadata: Dict[str, Any]) -> None:
        try:
            response = self.supabase.auth.admin.update_user_by_id(
                account_id,
                {"user_metadata": metadata}
            )
        except Exception as e:
            raise MetadataWriteError(f"Error updating user metadata: {e}") from e
        if response is not None and not getattr(response, "user", None):
            raise MetadataWriteError(f"Error updating user metadata: account {account_id} not found")


class ProfileStore:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, account_id: str) -> Optional[Profile]:
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", account_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise ProfileReadError(f"Error reading profile: {e}") from e
        if not result.data:
            return None
        try:
            return Profile(**result.data[0])
        except ValidationError as e:
            raise ProfileReadError(f"Unreadable profile row for {account_id}: {e}") from e

    def update_profile(self, account_id: str, values: Dict[str, Any]) -> Profile:
        try:
            result = self.supabase.table("profiles")\
                .update(values)\
                .eq("id", account_id)\
                .execute()
        except Exception as e:
            raise ProfileWriteError(f"Error updating profile: {e}") from e
        if not result.data:
            raise ProfileWriteError(f"Error updating profile: no row updated for {account_id}")
        return Profile(**result.data[0])
