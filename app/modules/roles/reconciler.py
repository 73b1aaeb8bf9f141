"""
Role reconciliation.

plan_admin_reconciliation() is pure: given the account list and the profiles
it has, it decides which writes (if any) bring the target account to the
desired role. RoleReconciler does the I/O around it and folds every store
error into a ReconcileOutcome; reconcile() never raises.

Runs are idempotent: a write is only planned when the current role differs
from the desired one, so a second run against unchanged state writes nothing.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from app.modules.profiles.schemas import Profile
from app.modules.roles.errors import (
    IdentityFetchError, MetadataWriteError, ProfileMissing, RoleConsistencyError
)
from app.modules.roles.models import ROLE_ADMIN
from app.modules.roles.schemas import Account, ReconcileOutcome, ReconciliationPlan
from app.modules.roles.stores import IdentityStore, ProfileStore

logger = logging.getLogger(__name__)


def find_account(accounts: Iterable[Account], email: str) -> Optional[Account]:
    """Exact, case-sensitive email match."""
    for account in accounts:
        if account.email == email:
            return account
    return None


def plan_admin_reconciliation(
    accounts: List[Account],
    profiles: Dict[str, Profile],
    email: str,
    desired_role: str = ROLE_ADMIN,
    now: Optional[datetime] = None,
) -> ReconciliationPlan:
    account = find_account(accounts, email)
    if account is None:
        return ReconciliationPlan(desired_role=desired_role)

    profile = profiles.get(account.id)
    if profile is None:
        # Nothing to mirror without the source-of-truth row
        return ReconciliationPlan(desired_role=desired_role, account=account)

    plan = ReconciliationPlan(desired_role=desired_role, account=account, profile=profile)
    if profile.role != desired_role:
        now = now or datetime.now(timezone.utc)
        plan.profile_update = {"role": desired_role, "updated_at": now.isoformat()}
    if account.role_hint != desired_role:
        plan.metadata_update = {**account.user_metadata, "role": desired_role}
    return plan


class RoleReconciler:
    def __init__(self, identity_store: IdentityStore, profile_store: ProfileStore, email: str):
        self.identity_store = identity_store
        self.profile_store = profile_store
        self.email = email

    def reconcile(self) -> ReconcileOutcome:
        try:
            return self._reconcile()
        except RoleConsistencyError as e:
            logger.error(f"Role reconciliation for {self.email} failed: {e}")
            return ReconcileOutcome(success=False, message=str(e))
        except Exception as e:
            logger.exception(f"Unexpected error reconciling role for {self.email}")
            return ReconcileOutcome(success=False, message=f"Unexpected error: {e}")

    def _reconcile(self) -> ReconcileOutcome:
        logger.info(f"Checking admin status for {self.email}")
        try:
            accounts = self.identity_store.list_accounts()
        except IdentityFetchError:
            raise
        except Exception as e:
            raise IdentityFetchError(f"Error listing users: {e}") from e

        account = find_account(accounts, self.email)
        if account is None:
            logger.info(f"No account registered for {self.email}; nothing to reconcile")
            return ReconcileOutcome(
                success=True,
                message=f"No account found for {self.email}; nothing to reconcile",
            )

        logger.info(f"Found account for {self.email} with ID: {account.id}")
        profile = self.profile_store.get_profile(account.id)
        profiles = {account.id: profile} if profile is not None else {}
        plan = plan_admin_reconciliation(accounts, profiles, self.email)

        if plan.profile_missing:
            finding = ProfileMissing(account.id)
            logger.warning(str(finding))
            return ReconcileOutcome(
                success=True,
                message=f"{finding}; profile was not created",
                account_id=account.id,
                warnings=[str(finding)],
            )

        outcome = ReconcileOutcome(success=True, message="", account_id=account.id)
        if plan.profile_update is not None:
            self.profile_store.update_profile(account.id, plan.profile_update)
            outcome.profile_updated = True
            logger.info(f"Updated profile role for {self.email} to {plan.desired_role}")

        if plan.metadata_update is not None:
            try:
                self.identity_store.update_account_metadata(account.id, plan.metadata_update)
                outcome.metadata_updated = True
                logger.info(f"Updated user metadata role for {self.email}")
            except MetadataWriteError as e:
                # profiles.role is the source of truth
                logger.warning(f"{e} (profile role is unaffected)")
                outcome.warnings.append(str(e))

        outcome.message = self._describe(plan, outcome)
        return outcome

    def _describe(self, plan: ReconciliationPlan, outcome: ReconcileOutcome) -> str:
        if plan.is_noop:
            message = f"{self.email} already has {plan.desired_role} role"
        else:
            message = f"Successfully ensured {self.email} has {plan.desired_role} role"
        if outcome.warnings:
            message += "; " + "; ".join(outcome.warnings)
        return message
